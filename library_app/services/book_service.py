from library_app.errors import ConflictError, NotFoundError, ValidationError
from library_app.models.book import Book
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.utils.validators import clean_str, parse_date, parse_int, require

TEXT_FIELDS = [
    "name", "author", "publisher", "cover_image", "description",
    "cabinet", "shelf", "num", "genres", "tags",
]
REQUIRED = ["name", "author", "book_code"]


def clamp_copies(item, on_loan: int = 0):
    """Keep 0 <= available_copies <= total_copies - on_loan, total at least 1."""
    if item.total_copies < 1:
        item.total_copies = 1
    if item.available_copies < 0:
        item.available_copies = 0
    if item.available_copies > item.total_copies - on_loan:
        item.available_copies = max(item.total_copies - on_loan, 0)


def apply_copy_changes(item, fields: dict, on_loan: int):
    """
    Applies total/available changes without letting the counter drift past
    the copies that are out on loan.
    """
    total = fields.pop("total_copies", item.total_copies)
    if total < on_loan:
        raise ConflictError(f"total_copies cannot be below the {on_loan} copies on loan")
    if "available_copies" in fields:
        available = fields.pop("available_copies")
    else:
        # a change of total moves the shelf count with it
        available = item.available_copies + (total - item.total_copies)
    item.total_copies = total
    item.available_copies = available
    clamp_copies(item, on_loan)


def _book_fields(data: dict) -> dict:
    """Validated column values for the keys present in data."""
    out = {}
    for k in TEXT_FIELDS + ["book_code"]:
        if k in data:
            out[k] = clean_str(data[k])
    for k in REQUIRED:
        if k in out and out[k] is None:
            raise ValidationError(f"{k} cannot be empty")
    if "total_pages" in data:
        out["total_pages"] = parse_int(data["total_pages"], "total_pages", optional=True, minimum=1)
    if "published_date" in data:
        out["published_date"] = parse_date(data["published_date"], "published_date", optional=True)
    if "total_copies" in data:
        out["total_copies"] = parse_int(data["total_copies"], "total_copies")
    if "available_copies" in data:
        out["available_copies"] = parse_int(data["available_copies"], "available_copies")
    return out


class BookService:
    @staticmethod
    def list_books():
        return BookRepo.list_all()

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError(f"Book {book_id} not found")
        return book

    @staticmethod
    def create_book(data: dict):
        require(data, REQUIRED)
        fields = _book_fields(data)
        if BookRepo.get_by_code(fields["book_code"]):
            raise ConflictError(f"Book code {fields['book_code']} already exists")

        fields.setdefault("total_copies", 1)
        fields.setdefault("available_copies", fields["total_copies"])
        book = Book(**fields)
        clamp_copies(book)
        return BookRepo.create(book)

    @staticmethod
    def update_book(book_id: int, data: dict):
        book = BookService.get_book(book_id)
        fields = _book_fields(data)

        code = fields.get("book_code")
        if code:
            other = BookRepo.get_by_code(code)
            if other and other.id != book.id:
                raise ConflictError(f"Book code {code} already exists")

        apply_copy_changes(book, fields, BorrowingRepo.count_on_loan(book_id=book.id))
        for k, v in fields.items():
            setattr(book, k, v)
        BookRepo.update()
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookService.get_book(book_id)
        if BorrowingRepo.count_for(book_id=book.id):
            raise ConflictError("Book has borrowing records and cannot be deleted")
        BookRepo.delete(book)
