from flask import Blueprint, current_app, jsonify, request

from library_app.services.borrowing_service import BorrowingService
from library_app.utils.validators import iso, parse_date, parse_int

borrowing_bp = Blueprint("borrowings", __name__)


def _service() -> BorrowingService:
    return BorrowingService.from_app()


def borrowing_json(b, service: BorrowingService) -> dict:
    item = b.item
    return {
        "id": b.id,
        "borrower_id": b.borrower_id,
        "borrower_name": b.borrower.name if b.borrower else None,
        "librarian_id": b.librarian_id,
        "librarian_name": b.librarian.name if b.librarian else None,
        "book_id": b.book_id,
        "research_id": b.research_id,
        "item_name": item.name if item else None,
        "borrow_date": iso(b.borrow_date),
        "due_date": iso(b.due_date),
        "return_date": iso(b.return_date),
        "status": service.status_of(b),
        "days_overdue": service.days_overdue_for(b),
        "fine": str(service.fine_for(b)),
        "rating": b.rating,
        "review": b.review,
        "created_at": iso(b.created_at),
    }


@borrowing_bp.get("/")
def list_borrowings():
    args = request.args
    service = _service()
    page = parse_int(args.get("page"), "page", optional=True, minimum=1)
    per_page = parse_int(args.get("per_page"), "per_page", optional=True, minimum=1)
    if page is not None and per_page is None:
        per_page = current_app.config.get("DEFAULT_PAGE_SIZE", 10)

    rows = service.list_borrowings(
        status=args.get("status") or None,
        borrower_id=parse_int(args.get("borrower_id"), "borrower_id", optional=True),
        librarian_id=parse_int(args.get("librarian_id"), "librarian_id", optional=True),
        book_id=parse_int(args.get("book_id"), "book_id", optional=True),
        research_id=parse_int(args.get("research_id"), "research_id", optional=True),
        page=page,
        per_page=per_page,
    )
    return jsonify({"success": True, "data": [borrowing_json(b, service) for b in rows]})


@borrowing_bp.post("/")
def create_borrowing():
    data = request.get_json(silent=True) or {}
    service = _service()
    b = service.create_borrowing(
        borrower_id=parse_int(data.get("borrower_id"), "borrower_id"),
        librarian_id=parse_int(data.get("librarian_id"), "librarian_id"),
        book_id=parse_int(data.get("book_id"), "book_id", optional=True),
        research_id=parse_int(data.get("research_id"), "research_id", optional=True),
        borrow_date=parse_date(data.get("borrow_date"), "borrow_date", optional=True),
    )
    return jsonify({"success": True, "data": borrowing_json(b, service)}), 201


@borrowing_bp.get("/<int:borrowing_id>")
def get_borrowing(borrowing_id: int):
    service = _service()
    b = service.get_borrowing(borrowing_id)
    return jsonify({"success": True, "data": borrowing_json(b, service)})


@borrowing_bp.post("/<int:borrowing_id>/return")
def return_borrowing(borrowing_id: int):
    data = request.get_json(silent=True) or {}
    service = _service()
    b = service.return_borrowing(
        borrowing_id,
        rating=parse_int(data.get("rating"), "rating", optional=True),
        review=data.get("review"),
    )
    return jsonify({"success": True, "data": borrowing_json(b, service)})


@borrowing_bp.delete("/<int:borrowing_id>")
def delete_borrowing(borrowing_id: int):
    _service().delete_borrowing(borrowing_id)
    return jsonify({"success": True})
