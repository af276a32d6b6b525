from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from flask import current_app

from library_app.errors import ConflictError, NotFoundError, ValidationError
from library_app.models.borrowing import (
    Borrowing,
    STATUS_BORROWED,
    STATUS_OVERDUE,
    STATUS_RETURNED,
)
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrower_repo import BorrowerRepo
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.librarian_repo import LibrarianRepo
from library_app.repositories.research_repo import ResearchRepo
from library_app.services import lifecycle
from library_app.services.policy import LoanPolicy

LIST_STATUSES = {STATUS_BORROWED, STATUS_OVERDUE, STATUS_RETURNED, "active"}


class BorrowingService:
    """
    Checkout / return of a single book or research paper.

    Each write is one unit: the borrowing row and the item's copy counter are
    committed together or rolled back together.
    """

    def __init__(self, policy: LoanPolicy, clock: Callable[[], date] = date.today):
        self.policy = policy
        self._clock = clock

    @classmethod
    def from_app(cls, app=None) -> "BorrowingService":
        app = app or current_app
        return cls(LoanPolicy.from_config(app.config))

    def today(self) -> date:
        return self._clock()

    # -----------------------------
    # Reads
    # -----------------------------
    def get_borrowing(self, borrowing_id: int) -> Borrowing:
        borrowing = BorrowingRepo.get(borrowing_id)
        if not borrowing:
            raise NotFoundError(f"Borrowing {borrowing_id} not found")
        return borrowing

    def list_borrowings(
        self,
        status: Optional[str] = None,
        borrower_id: Optional[int] = None,
        librarian_id: Optional[int] = None,
        book_id: Optional[int] = None,
        research_id: Optional[int] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> list[Borrowing]:
        if status is not None and status not in LIST_STATUSES:
            raise ValidationError(f"Unknown status filter: {status}")

        query = BorrowingRepo.list_filtered(
            self.today(),
            status=status,
            borrower_id=borrower_id,
            librarian_id=librarian_id,
            book_id=book_id,
            research_id=research_id,
        )
        if page is not None:
            return query.paginate(page=page, per_page=per_page, error_out=False).items
        return query.all()

    def status_of(self, borrowing: Borrowing) -> str:
        return lifecycle.derive_status(
            borrowing.borrow_date, borrowing.due_date, borrowing.return_date, self.today()
        )

    def fine_for(self, borrowing: Borrowing):
        return lifecycle.compute_fine(
            borrowing.due_date, borrowing.return_date, self.today(), self.policy
        )

    def days_overdue_for(self, borrowing: Borrowing) -> int:
        return lifecycle.days_overdue(borrowing.due_date, borrowing.return_date, self.today())

    # -----------------------------
    # Writes
    # -----------------------------
    def create_borrowing(
        self,
        borrower_id: int,
        librarian_id: int,
        book_id: Optional[int] = None,
        research_id: Optional[int] = None,
        borrow_date: Optional[date] = None,
    ) -> Borrowing:
        if (book_id is None) == (research_id is None):
            raise ValidationError("Exactly one of book_id or research_id is required")

        borrower = BorrowerRepo.get(borrower_id)
        if not borrower:
            raise NotFoundError(f"Borrower {borrower_id} not found")
        if not LibrarianRepo.get(librarian_id):
            raise NotFoundError(f"Librarian {librarian_id} not found")

        if book_id is not None:
            if not BookRepo.get(book_id):
                raise NotFoundError(f"Book {book_id} not found")
            take_copy = BookRepo.take_copy
            item_id = book_id
        else:
            if not ResearchRepo.get(research_id):
                raise NotFoundError(f"Research paper {research_id} not found")
            take_copy = ResearchRepo.take_copy
            item_id = research_id

        if self.policy.refuse_frozen_borrowers and borrower.is_frozen:
            raise ConflictError("Borrower account is frozen")

        borrow_date = borrow_date or self.today()
        try:
            if not take_copy(item_id):
                raise ConflictError("No copies available")

            borrowing = Borrowing(
                borrower_id=borrower_id,
                librarian_id=librarian_id,
                book_id=book_id,
                research_id=research_id,
                borrow_date=borrow_date,
                due_date=lifecycle.due_date_for(borrow_date, self.policy),
                status=STATUS_BORROWED,
            )
            BorrowingRepo.add(borrowing)
            BorrowingRepo.commit()
        except Exception:
            BorrowingRepo.rollback()
            raise

        current_app.logger.info(
            f"[borrowing] created id={borrowing.id} borrower={borrower_id} "
            f"book={book_id} research={research_id} due={borrowing.due_date}"
        )
        return borrowing

    def return_borrowing(
        self,
        borrowing_id: int,
        rating: Optional[int] = None,
        review: Optional[str] = None,
    ) -> Borrowing:
        borrowing = BorrowingRepo.get(borrowing_id)
        if not borrowing:
            raise NotFoundError(f"Borrowing {borrowing_id} not found")
        # second return is rejected, never silently accepted
        if borrowing.return_date is not None:
            raise NotFoundError(f"Borrowing {borrowing_id} is already returned")

        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, int):
                raise ValidationError("rating must be an integer")
            if not self.policy.rating_min <= rating <= self.policy.rating_max:
                raise ValidationError(
                    f"rating must be between {self.policy.rating_min} and {self.policy.rating_max}"
                )
        if review is not None:
            review = str(review).strip() or None

        try:
            borrowing.return_date = self.today()
            borrowing.status = STATUS_RETURNED
            borrowing.rating = rating
            borrowing.review = review

            if borrowing.book_id is not None:
                BookRepo.give_back_copy(borrowing.book_id)
            else:
                ResearchRepo.give_back_copy(borrowing.research_id)

            BorrowingRepo.commit()
        except Exception:
            BorrowingRepo.rollback()
            raise

        current_app.logger.info(
            f"[borrowing] returned id={borrowing.id} on={borrowing.return_date} "
            f"days_overdue={self.days_overdue_for(borrowing)} rating={rating}"
        )
        return borrowing

    def delete_borrowing(self, borrowing_id: int) -> None:
        """Administrative removal. An unreturned copy goes back on the shelf."""
        borrowing = self.get_borrowing(borrowing_id)
        try:
            if borrowing.return_date is None:
                if borrowing.book_id is not None:
                    BookRepo.give_back_copy(borrowing.book_id)
                else:
                    ResearchRepo.give_back_copy(borrowing.research_id)
            BorrowingRepo.delete(borrowing)
            BorrowingRepo.commit()
        except Exception:
            BorrowingRepo.rollback()
            raise
        current_app.logger.info(f"[borrowing] deleted id={borrowing_id}")
