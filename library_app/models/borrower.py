from datetime import datetime
from library_app.extensions import db

MEMBERSHIP_ACTIVE = "active"
MEMBERSHIP_FROZEN = "frozen"


class Borrower(db.Model):
    __tablename__ = "borrowers"

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    phone = db.Column(db.String(32), nullable=False)
    additional_phone = db.Column(db.String(32), nullable=True)
    category = db.Column(db.String(50), nullable=False, index=True)
    joined_date = db.Column(db.Date, nullable=False)
    expiry_date = db.Column(db.Date, nullable=False)
    email = db.Column(db.String(255), nullable=True)
    address = db.Column(db.String(500), nullable=True)

    membership_status = db.Column(db.String(20), nullable=False, default=MEMBERSHIP_ACTIVE)  # active/frozen

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def is_frozen(self) -> bool:
        return self.membership_status == MEMBERSHIP_FROZEN
