from library_app.models.book import Book
from library_app.models.research_paper import ResearchPaper
from library_app.models.borrower import Borrower
from library_app.models.librarian import Librarian
from library_app.models.borrowing import Borrowing
from library_app.models.membership_application import MembershipApplication
from library_app.models.notification_log import NotificationLog
from library_app.models.feedback import Feedback

__all__ = [
    "Book",
    "ResearchPaper",
    "Borrower",
    "Librarian",
    "Borrowing",
    "MembershipApplication",
    "NotificationLog",
    "Feedback",
]
