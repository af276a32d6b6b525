from flask import Blueprint, request, jsonify
from library_app.services.feedback_service import FeedbackService
from library_app.utils.validators import iso

feedback_bp = Blueprint("feedback", __name__)

FIELDS = ["id", "name", "phone", "email", "stage", "membership_status", "type", "message", "status"]


def feedback_json(f) -> dict:
    out = {k: getattr(f, k) for k in FIELDS}
    out["submitted_at"] = iso(f.submitted_at)
    return out


@feedback_bp.get("/")
def list_feedback():
    status = (request.args.get("status") or "").strip() or None
    rows = FeedbackService.list_feedback(status=status)
    return jsonify({"success": True, "data": [feedback_json(f) for f in rows]})


@feedback_bp.post("/")
def submit_feedback():
    data = request.get_json(silent=True) or {}
    f = FeedbackService.submit_feedback(data)
    return jsonify({"success": True, "data": feedback_json(f)}), 201


@feedback_bp.put("/<int:feedback_id>")
def update_feedback_status(feedback_id: int):
    data = request.get_json(silent=True) or {}
    f = FeedbackService.set_status(feedback_id, data.get("status"))
    return jsonify({"success": True, "data": feedback_json(f)})


@feedback_bp.delete("/<int:feedback_id>")
def delete_feedback(feedback_id: int):
    FeedbackService.delete_feedback(feedback_id)
    return jsonify({"success": True})
