from datetime import date

from library_app.models.borrowing import Borrowing, STATUS_BORROWED, STATUS_OVERDUE, STATUS_RETURNED
from library_app.extensions import db


class BorrowingRepo:
    @staticmethod
    def get(borrowing_id: int):
        return db.session.get(Borrowing, borrowing_id)

    @staticmethod
    def list_filtered(
        today: date,
        status: str | None = None,
        borrower_id: int | None = None,
        librarian_id: int | None = None,
        book_id: int | None = None,
        research_id: int | None = None,
    ):
        q = Borrowing.query
        if borrower_id is not None:
            q = q.filter(Borrowing.borrower_id == borrower_id)
        if librarian_id is not None:
            q = q.filter(Borrowing.librarian_id == librarian_id)
        if book_id is not None:
            q = q.filter(Borrowing.book_id == book_id)
        if research_id is not None:
            q = q.filter(Borrowing.research_id == research_id)

        # same rules as lifecycle.derive_status, pushed into SQL
        if status == STATUS_RETURNED:
            q = q.filter(Borrowing.return_date.is_not(None))
        elif status == STATUS_OVERDUE:
            q = q.filter(Borrowing.return_date.is_(None), Borrowing.due_date < today)
        elif status == STATUS_BORROWED:
            q = q.filter(Borrowing.return_date.is_(None), Borrowing.due_date >= today)
        elif status == "active":
            q = q.filter(Borrowing.return_date.is_(None))

        return q.order_by(Borrowing.borrow_date.desc(), Borrowing.id.desc())

    @staticmethod
    def find_unreturned():
        return Borrowing.query.filter(Borrowing.return_date.is_(None)).all()

    @staticmethod
    def count_for(**criteria) -> int:
        return Borrowing.query.filter_by(**criteria).count()

    @staticmethod
    def count_on_loan(**criteria) -> int:
        return Borrowing.query.filter_by(**criteria).filter(Borrowing.return_date.is_(None)).count()

    @staticmethod
    def add(borrowing: Borrowing):
        db.session.add(borrowing)
        db.session.flush()
        return borrowing

    @staticmethod
    def delete(borrowing: Borrowing):
        db.session.delete(borrowing)

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
