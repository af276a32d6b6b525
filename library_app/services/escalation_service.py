from __future__ import annotations

from datetime import date
from typing import Optional

from flask import current_app

from library_app.models.borrowing import STATUS_OVERDUE
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.notification_repo import NotificationRepo
from library_app.services import lifecycle
from library_app.services.mail_service import ACCOUNT_FROZEN, MailService
from library_app.services.member_service import BorrowerService
from library_app.services.policy import LoanPolicy


class EscalationService:
    @staticmethod
    def run_overdue_check(policy: LoanPolicy, today: Optional[date] = None) -> dict:
        """
        Walks every unreturned borrowing:
        - writes the derived status (borrowed/overdue) back to the row
        - freezes the borrower once the item is overdue past the third week
        - mails + logs the freeze once per borrowing
        Single commit at the end.
        """
        today = today or date.today()
        rows = BorrowingRepo.find_unreturned()

        status_changed = 0
        overdue = 0
        frozen = 0
        mails_sent = 0

        try:
            for b in rows:
                status = lifecycle.derive_status(b.borrow_date, b.due_date, b.return_date, today)
                if status != b.status:
                    b.status = status
                    status_changed += 1
                if status == STATUS_OVERDUE:
                    overdue += 1

                if not lifecycle.needs_escalation(b.due_date, b.return_date, today, policy):
                    continue

                if BorrowerService.freeze(b.borrower):
                    frozen += 1
                    current_app.logger.info(
                        f"[escalation] borrower={b.borrower_id} frozen over borrowing={b.id}"
                    )

                if NotificationRepo.already_sent(b.id, ACCOUNT_FROZEN):
                    continue
                days = lifecycle.days_overdue(b.due_date, None, today)
                if MailService.send_account_frozen_mail(b, days):
                    mails_sent += 1

            BorrowingRepo.commit()
        except Exception:
            BorrowingRepo.rollback()
            raise

        result = {
            "checked": len(rows),
            "overdue": overdue,
            "status_changed": status_changed,
            "frozen": frozen,
            "mails_sent": mails_sent,
        }
        current_app.logger.info(
            "[escalation] " + " ".join(f"{k}={v}" for k, v in result.items())
        )
        return result
