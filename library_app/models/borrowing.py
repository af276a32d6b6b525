from datetime import datetime
from library_app.extensions import db

STATUS_BORROWED = "borrowed"
STATUS_OVERDUE = "overdue"
STATUS_RETURNED = "returned"


class Borrowing(db.Model):
    __tablename__ = "borrowings"
    __table_args__ = (
        # exactly one of book/research paper
        db.CheckConstraint(
            "(book_id IS NULL) <> (research_id IS NULL)",
            name="ck_borrowings_one_item",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    borrower_id = db.Column(db.Integer, db.ForeignKey("borrowers.id"), nullable=False, index=True)
    librarian_id = db.Column(db.Integer, db.ForeignKey("librarians.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=True, index=True)
    research_id = db.Column(db.Integer, db.ForeignKey("research_papers.id"), nullable=True, index=True)

    borrow_date = db.Column(db.Date, nullable=False)
    due_date = db.Column(db.Date, nullable=False, index=True)
    return_date = db.Column(db.Date, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=STATUS_BORROWED)  # borrowed/overdue/returned
    rating = db.Column(db.Integer, nullable=True)
    review = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    borrower = db.relationship("Borrower", backref="borrowings")
    librarian = db.relationship("Librarian", backref="borrowings")
    book = db.relationship("Book", backref="borrowings")
    research = db.relationship("ResearchPaper", backref="borrowings")

    @property
    def item(self):
        return self.book if self.book_id is not None else self.research
