from library_app.models.librarian import Librarian
from library_app.extensions import db


class LibrarianRepo:
    @staticmethod
    def list_all():
        return Librarian.query.order_by(Librarian.id.desc()).all()

    @staticmethod
    def get(librarian_id: int):
        return db.session.get(Librarian, librarian_id)

    @staticmethod
    def get_by_code(code: str):
        return Librarian.query.filter_by(librarian_id=code).first()

    @staticmethod
    def create(librarian: Librarian):
        db.session.add(librarian)
        db.session.commit()
        return librarian

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(librarian: Librarian):
        db.session.delete(librarian)
        db.session.commit()
