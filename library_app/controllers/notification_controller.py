from flask import Blueprint, current_app, jsonify, request

from library_app.services.escalation_service import EscalationService
from library_app.services.policy import LoanPolicy
from library_app.utils.validators import parse_date

notif_bp = Blueprint("notifications", __name__)


@notif_bp.post("/run-overdue-check")
def run_overdue_check():
    data = request.get_json(silent=True) or {}
    policy = LoanPolicy.from_config(current_app.config)
    result = EscalationService.run_overdue_check(
        policy, today=parse_date(data.get("today"), "today", optional=True)
    )
    return jsonify({"success": True, "data": result})
