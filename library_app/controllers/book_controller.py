# library_app/controllers/book_controller.py

from flask import Blueprint, request, jsonify
from library_app.services.book_service import BookService
from library_app.utils.validators import iso

book_bp = Blueprint("books", __name__)


def book_json(b) -> dict:
    return {
        "id": b.id,
        "name": b.name,
        "author": b.author,
        "publisher": b.publisher,
        "book_code": b.book_code,
        "cover_image": b.cover_image,
        "description": b.description,
        "total_pages": b.total_pages,
        "cabinet": b.cabinet,
        "shelf": b.shelf,
        "num": b.num,
        "published_date": iso(b.published_date),
        "genres": b.genres,
        "tags": b.tags,
        "total_copies": b.total_copies,
        "available_copies": b.available_copies,
        "created_at": iso(b.created_at),
    }


@book_bp.get("/")
def list_books():
    return jsonify({"success": True, "data": [book_json(b) for b in BookService.list_books()]})


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    return jsonify({"success": True, "data": book_json(BookService.get_book(book_id))})


@book_bp.post("/")
def create_book():
    data = request.get_json(silent=True) or {}
    b = BookService.create_book(data)
    return jsonify({"success": True, "data": book_json(b)}), 201


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    data = request.get_json(silent=True) or {}
    b = BookService.update_book(book_id, data)
    return jsonify({"success": True, "data": book_json(b)})


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    BookService.delete_book(book_id)
    return jsonify({"success": True})
