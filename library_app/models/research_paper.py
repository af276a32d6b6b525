from datetime import datetime
from library_app.extensions import db


class ResearchPaper(db.Model):
    __tablename__ = "research_papers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(300), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)
    publisher = db.Column(db.String(200), nullable=True)
    research_code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    cover_image = db.Column(db.String(500), nullable=True)
    description = db.Column(db.Text, nullable=True)
    total_pages = db.Column(db.Integer, nullable=True)
    published_date = db.Column(db.Date, nullable=True)
    keywords = db.Column(db.String(500), nullable=True)
    abstract = db.Column(db.Text, nullable=True)

    total_copies = db.Column(db.Integer, nullable=False, default=1)
    available_copies = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
