# library_app/services/mail_service.py
from __future__ import annotations

from datetime import datetime
from flask import current_app
from flask_mail import Message

from library_app.extensions import mail
from library_app.models.notification_log import NotificationLog
from library_app.repositories.notification_repo import NotificationRepo

ACCOUNT_FROZEN = "account_frozen"


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[mail] could not send to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        borrowing_id: int,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
    ) -> NotificationLog:
        """Adds the log row to the session; the caller commits."""
        return NotificationRepo.log(NotificationLog(
            borrowing_id=borrowing_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=datetime.utcnow(),
        ))

    @staticmethod
    def _labels(borrowing):
        borrower = borrowing.borrower
        item = borrowing.item

        to_email = borrower.email if borrower else None
        name = borrower.name if borrower else "Member"
        title = item.name if item else f"Item of borrowing #{borrowing.id}"
        return to_email, name, title

    @staticmethod
    def send_account_frozen_mail(borrowing, days_overdue: int) -> bool:
        """Tell the borrower their account was frozen over this borrowing, and log it."""
        to_email, name, title = MailService._labels(borrowing)

        subject = "Library: your account has been suspended"
        body = (
            f"Hello {name},\n\n"
            f"'{title}' was due on {borrowing.due_date} and is now {days_overdue} days overdue.\n"
            f"Your membership is suspended until the item is returned and fines are settled.\n"
        )

        if not to_email:
            MailService.log_notification(
                borrowing_id=borrowing.id,
                notif_type=ACCOUNT_FROZEN,
                to_email=None,
                message="Borrower has no email address",
                success=False,
                error="missing_email",
            )
            return False

        ok, err = MailService.send_email(to_email, subject, body)

        MailService.log_notification(
            borrowing_id=borrowing.id,
            notif_type=ACCOUNT_FROZEN,
            to_email=to_email,
            message=body if ok else "Mail could not be sent",
            success=ok,
            error=err,
        )
        return ok
