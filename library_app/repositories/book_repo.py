from library_app.models.book import Book
from library_app.extensions import db


class BookRepo:
    @staticmethod
    def list_all():
        return Book.query.order_by(Book.id.desc()).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_by_code(book_code: str):
        return Book.query.filter_by(book_code=book_code).first()

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()

    @staticmethod
    def take_copy(book_id: int) -> bool:
        """Guarded decrement; False when no copy is left. Does not commit."""
        changed = (
            Book.query
            .filter(Book.id == book_id, Book.available_copies > 0)
            .update({Book.available_copies: Book.available_copies - 1}, synchronize_session="fetch")
        )
        return changed == 1

    @staticmethod
    def give_back_copy(book_id: int) -> bool:
        """Increment capped at total_copies. Does not commit."""
        changed = (
            Book.query
            .filter(Book.id == book_id, Book.available_copies < Book.total_copies)
            .update({Book.available_copies: Book.available_copies + 1}, synchronize_session="fetch")
        )
        return changed == 1
