from flask import Blueprint, request, jsonify
from library_app.services.membership_service import MembershipService
from library_app.utils.validators import iso

membership_bp = Blueprint("membership", __name__)

FIELDS = [
    "id", "member_id", "name", "stage", "phone", "additional_phone", "email",
    "address", "studies", "job", "hobbies", "favorite_books", "organization_name",
    "emergency_contact",
]


def application_json(a) -> dict:
    out = {k: getattr(a, k) for k in FIELDS}
    out["birthdate"] = iso(a.birthdate)
    out["created_at"] = iso(a.created_at)
    return out


@membership_bp.get("/")
def list_applications():
    rows = MembershipService.list_applications()
    return jsonify({"success": True, "data": [application_json(a) for a in rows]})


@membership_bp.post("/")
def submit_application():
    data = request.get_json(silent=True) or {}
    a = MembershipService.submit_application(data)
    return jsonify({"success": True, "data": application_json(a)}), 201
