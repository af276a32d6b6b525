from library_app.models.feedback import Feedback
from library_app.extensions import db


class FeedbackRepo:
    @staticmethod
    def list_all(status: str | None = None):
        q = Feedback.query
        if status:
            q = q.filter_by(status=status)
        return q.order_by(Feedback.submitted_at.desc(), Feedback.id.desc()).all()

    @staticmethod
    def get(feedback_id: int):
        return db.session.get(Feedback, feedback_id)

    @staticmethod
    def create(entry: Feedback):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(entry: Feedback):
        db.session.delete(entry)
        db.session.commit()
