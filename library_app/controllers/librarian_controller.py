from flask import Blueprint, request, jsonify
from library_app.services.member_service import LibrarianService
from library_app.utils.validators import iso

librarian_bp = Blueprint("librarians", __name__)


def librarian_json(x) -> dict:
    return {
        "id": x.id,
        "librarian_id": x.librarian_id,
        "name": x.name,
        "phone": x.phone,
        "appointment_date": iso(x.appointment_date),
        "membership_status": x.membership_status,
        "email": x.email,
        "created_at": iso(x.created_at),
    }


@librarian_bp.get("/")
def list_librarians():
    return jsonify({"success": True, "data": [librarian_json(x) for x in LibrarianService.list_librarians()]})


@librarian_bp.get("/<int:librarian_id>")
def get_librarian(librarian_id: int):
    return jsonify({"success": True, "data": librarian_json(LibrarianService.get_librarian(librarian_id))})


@librarian_bp.post("/")
def create_librarian():
    data = request.get_json(silent=True) or {}
    x = LibrarianService.create_librarian(data)
    return jsonify({"success": True, "data": librarian_json(x)}), 201


@librarian_bp.put("/<int:librarian_id>")
def update_librarian(librarian_id: int):
    data = request.get_json(silent=True) or {}
    x = LibrarianService.update_librarian(librarian_id, data)
    return jsonify({"success": True, "data": librarian_json(x)})


@librarian_bp.delete("/<int:librarian_id>")
def delete_librarian(librarian_id: int):
    LibrarianService.delete_librarian(librarian_id)
    return jsonify({"success": True})
