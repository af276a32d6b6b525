# library_app/tasks/overdue_check.py
from datetime import date

from library_app.services.escalation_service import EscalationService
from library_app.services.policy import LoanPolicy


def run_overdue_check_job(app):
    """Scheduled entry point: refresh statuses and escalate long-overdue borrowings."""
    with app.app_context():
        policy = LoanPolicy.from_config(app.config)
        try:
            EscalationService.run_overdue_check(policy, today=date.today())
        except Exception as e:
            app.logger.exception(f"[overdue_check] failed: {e}")
