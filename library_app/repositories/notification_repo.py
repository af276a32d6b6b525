from library_app.models.notification_log import NotificationLog
from library_app.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(borrowing_id: int, notif_type: str = "account_frozen") -> bool:
        return NotificationLog.query.filter_by(borrowing_id=borrowing_id, type=notif_type).first() is not None

    @staticmethod
    def log(entry: NotificationLog):
        db.session.add(entry)
        return entry
