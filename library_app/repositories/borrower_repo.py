from library_app.models.borrower import Borrower
from library_app.extensions import db


class BorrowerRepo:
    @staticmethod
    def list_all(category: str | None = None):
        q = Borrower.query
        if category:
            q = q.filter_by(category=category)
        return q.order_by(Borrower.id.desc()).all()

    @staticmethod
    def get(borrower_id: int):
        return db.session.get(Borrower, borrower_id)

    @staticmethod
    def get_by_member_id(member_id: str):
        return Borrower.query.filter_by(member_id=member_id).first()

    @staticmethod
    def create(borrower: Borrower):
        db.session.add(borrower)
        db.session.commit()
        return borrower

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(borrower: Borrower):
        db.session.delete(borrower)
        db.session.commit()
