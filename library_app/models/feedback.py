from datetime import datetime
from library_app.extensions import db

FEEDBACK_STATUSES = ("pending", "reviewed", "resolved")
FEEDBACK_TYPES = ("suggestion", "feedback")


class Feedback(db.Model):
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    stage = db.Column(db.String(50), nullable=False)
    membership_status = db.Column(db.String(20), nullable=False)

    type = db.Column(db.String(20), nullable=False)  # suggestion/feedback
    message = db.Column(db.Text, nullable=False)

    submitted_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    status = db.Column(db.String(20), nullable=False, default="pending")  # pending/reviewed/resolved
