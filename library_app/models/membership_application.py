from datetime import datetime
from library_app.extensions import db


class MembershipApplication(db.Model):
    __tablename__ = "membership_applications"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.String(64), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    stage = db.Column(db.String(100), nullable=False)
    birthdate = db.Column(db.Date, nullable=False)
    phone = db.Column(db.String(32), nullable=False)
    additional_phone = db.Column(db.String(32), nullable=True)
    email = db.Column(db.String(255), nullable=False)
    address = db.Column(db.String(500), nullable=False)
    studies = db.Column(db.String(200), nullable=True)
    job = db.Column(db.String(200), nullable=True)
    hobbies = db.Column(db.String(500), nullable=True)
    favorite_books = db.Column(db.String(500), nullable=True)
    organization_name = db.Column(db.String(200), nullable=True)
    emergency_contact = db.Column(db.String(200), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
