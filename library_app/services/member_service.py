from flask import current_app

from library_app.errors import ConflictError, NotFoundError, ValidationError
from library_app.models.borrower import Borrower, MEMBERSHIP_ACTIVE, MEMBERSHIP_FROZEN
from library_app.models.librarian import Librarian
from library_app.repositories.borrower_repo import BorrowerRepo
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.librarian_repo import LibrarianRepo
from library_app.utils.validators import clean_str, parse_date, require

BORROWER_TEXT = ["member_id", "name", "phone", "additional_phone", "category", "email", "address"]
BORROWER_REQUIRED = ["member_id", "name", "phone", "category", "joined_date", "expiry_date"]
BORROWER_DATES = ["joined_date", "expiry_date"]

LIBRARIAN_TEXT = ["librarian_id", "name", "phone", "membership_status", "email"]
LIBRARIAN_REQUIRED = ["librarian_id", "name", "phone", "appointment_date", "membership_status"]


def _fields(data: dict, text_fields, date_fields, required) -> dict:
    out = {}
    for k in text_fields:
        if k in data:
            out[k] = clean_str(data[k])
    for k in date_fields:
        if k in data:
            out[k] = parse_date(data[k], k, optional=k not in required)
    for k in required:
        if k in out and out[k] is None:
            raise ValidationError(f"{k} cannot be empty")
    return out


class BorrowerService:
    @staticmethod
    def list_borrowers(category: str | None = None):
        return BorrowerRepo.list_all(category=category)

    @staticmethod
    def get_borrower(borrower_id: int):
        borrower = BorrowerRepo.get(borrower_id)
        if not borrower:
            raise NotFoundError(f"Borrower {borrower_id} not found")
        return borrower

    @staticmethod
    def create_borrower(data: dict):
        require(data, BORROWER_REQUIRED)
        fields = _fields(data, BORROWER_TEXT, BORROWER_DATES, BORROWER_REQUIRED)
        if fields["expiry_date"] < fields["joined_date"]:
            raise ValidationError("expiry_date must not be before joined_date")
        if BorrowerRepo.get_by_member_id(fields["member_id"]):
            raise ConflictError(f"Member id {fields['member_id']} already exists")

        borrower = Borrower(membership_status=MEMBERSHIP_ACTIVE, **fields)
        return BorrowerRepo.create(borrower)

    @staticmethod
    def update_borrower(borrower_id: int, data: dict):
        borrower = BorrowerService.get_borrower(borrower_id)
        fields = _fields(data, BORROWER_TEXT, BORROWER_DATES, BORROWER_REQUIRED)

        joined = fields.get("joined_date", borrower.joined_date)
        expiry = fields.get("expiry_date", borrower.expiry_date)
        if expiry < joined:
            raise ValidationError("expiry_date must not be before joined_date")

        member_id = fields.get("member_id")
        if member_id:
            other = BorrowerRepo.get_by_member_id(member_id)
            if other and other.id != borrower.id:
                raise ConflictError(f"Member id {member_id} already exists")

        for k, v in fields.items():
            setattr(borrower, k, v)
        BorrowerRepo.update()
        return borrower

    @staticmethod
    def delete_borrower(borrower_id: int):
        borrower = BorrowerService.get_borrower(borrower_id)
        if BorrowingRepo.count_for(borrower_id=borrower.id):
            raise ConflictError("Borrower has borrowing records and cannot be deleted")
        BorrowerRepo.delete(borrower)

    @staticmethod
    def freeze(borrower: Borrower) -> bool:
        """Mark the account frozen. Caller commits. Returns False if it already was."""
        if borrower.membership_status == MEMBERSHIP_FROZEN:
            return False
        borrower.membership_status = MEMBERSHIP_FROZEN
        return True

    @staticmethod
    def unfreeze(borrower_id: int):
        borrower = BorrowerService.get_borrower(borrower_id)
        if borrower.membership_status != MEMBERSHIP_ACTIVE:
            borrower.membership_status = MEMBERSHIP_ACTIVE
            BorrowerRepo.update()
            current_app.logger.info(f"[members] borrower={borrower.id} unfrozen")
        return borrower


class LibrarianService:
    @staticmethod
    def list_librarians():
        return LibrarianRepo.list_all()

    @staticmethod
    def get_librarian(librarian_id: int):
        librarian = LibrarianRepo.get(librarian_id)
        if not librarian:
            raise NotFoundError(f"Librarian {librarian_id} not found")
        return librarian

    @staticmethod
    def create_librarian(data: dict):
        require(data, LIBRARIAN_REQUIRED)
        fields = _fields(data, LIBRARIAN_TEXT, ["appointment_date"], LIBRARIAN_REQUIRED)
        if LibrarianRepo.get_by_code(fields["librarian_id"]):
            raise ConflictError(f"Librarian id {fields['librarian_id']} already exists")
        return LibrarianRepo.create(Librarian(**fields))

    @staticmethod
    def update_librarian(librarian_id: int, data: dict):
        librarian = LibrarianService.get_librarian(librarian_id)
        fields = _fields(data, LIBRARIAN_TEXT, ["appointment_date"], LIBRARIAN_REQUIRED)

        code = fields.get("librarian_id")
        if code:
            other = LibrarianRepo.get_by_code(code)
            if other and other.id != librarian.id:
                raise ConflictError(f"Librarian id {code} already exists")

        for k, v in fields.items():
            setattr(librarian, k, v)
        LibrarianRepo.update()
        return librarian

    @staticmethod
    def delete_librarian(librarian_id: int):
        librarian = LibrarianService.get_librarian(librarian_id)
        if BorrowingRepo.count_for(librarian_id=librarian.id):
            raise ConflictError("Librarian has borrowing records and cannot be deleted")
        LibrarianRepo.delete(librarian)
