# library_app/models/notification_log.py
from datetime import datetime
from library_app.extensions import db


class NotificationLog(db.Model):
    __tablename__ = "notification_logs"

    id = db.Column(db.Integer, primary_key=True)

    borrowing_id = db.Column(db.Integer, db.ForeignKey("borrowings.id"), nullable=False, index=True)

    # account_frozen for now
    type = db.Column(db.String(50), nullable=False, default="account_frozen")

    email = db.Column(db.String(255), nullable=True)
    message = db.Column(db.String(1000), nullable=True)

    sent_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    success = db.Column(db.Boolean, nullable=False, default=True)
    error_message = db.Column(db.String(500), nullable=True)

    borrowing = db.relationship(
        "Borrowing", backref=db.backref("notifications", cascade="all, delete-orphan")
    )
