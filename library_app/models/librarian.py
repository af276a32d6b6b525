from datetime import datetime
from library_app.extensions import db


class Librarian(db.Model):
    __tablename__ = "librarians"

    id = db.Column(db.Integer, primary_key=True)
    librarian_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(32), nullable=False)
    appointment_date = db.Column(db.Date, nullable=False)
    membership_status = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
