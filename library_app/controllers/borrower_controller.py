from flask import Blueprint, request, jsonify
from library_app.services.member_service import BorrowerService
from library_app.utils.validators import iso

borrower_bp = Blueprint("borrowers", __name__)


def borrower_json(b) -> dict:
    return {
        "id": b.id,
        "member_id": b.member_id,
        "name": b.name,
        "phone": b.phone,
        "additional_phone": b.additional_phone,
        "category": b.category,
        "joined_date": iso(b.joined_date),
        "expiry_date": iso(b.expiry_date),
        "email": b.email,
        "address": b.address,
        "membership_status": b.membership_status,
        "created_at": iso(b.created_at),
    }


@borrower_bp.get("/")
def list_borrowers():
    category = (request.args.get("category") or "").strip() or None
    rows = BorrowerService.list_borrowers(category=category)
    return jsonify({"success": True, "data": [borrower_json(b) for b in rows]})


@borrower_bp.get("/<int:borrower_id>")
def get_borrower(borrower_id: int):
    return jsonify({"success": True, "data": borrower_json(BorrowerService.get_borrower(borrower_id))})


@borrower_bp.post("/")
def create_borrower():
    data = request.get_json(silent=True) or {}
    b = BorrowerService.create_borrower(data)
    return jsonify({"success": True, "data": borrower_json(b)}), 201


@borrower_bp.put("/<int:borrower_id>")
def update_borrower(borrower_id: int):
    data = request.get_json(silent=True) or {}
    b = BorrowerService.update_borrower(borrower_id, data)
    return jsonify({"success": True, "data": borrower_json(b)})


@borrower_bp.delete("/<int:borrower_id>")
def delete_borrower(borrower_id: int):
    BorrowerService.delete_borrower(borrower_id)
    return jsonify({"success": True})


@borrower_bp.post("/<int:borrower_id>/unfreeze")
def unfreeze_borrower(borrower_id: int):
    b = BorrowerService.unfreeze(borrower_id)
    return jsonify({"success": True, "data": borrower_json(b)})
