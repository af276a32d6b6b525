from datetime import datetime

from library_app.errors import NotFoundError, ValidationError
from library_app.models.feedback import FEEDBACK_STATUSES, FEEDBACK_TYPES, Feedback
from library_app.repositories.feedback_repo import FeedbackRepo
from library_app.utils.validators import clean_str, require

STAGES = ("primary", "middle", "secondary", "university", "graduate")
MEMBERSHIP_STATUSES = ("active", "inactive", "pending", "expired")


def _one_of(value, allowed, field: str) -> str:
    if value not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(allowed)}")
    return value


class FeedbackService:
    @staticmethod
    def list_feedback(status: str | None = None):
        if status is not None:
            _one_of(status, FEEDBACK_STATUSES, "status")
        return FeedbackRepo.list_all(status=status)

    @staticmethod
    def get_feedback(feedback_id: int):
        entry = FeedbackRepo.get(feedback_id)
        if not entry:
            raise NotFoundError(f"Feedback {feedback_id} not found")
        return entry

    @staticmethod
    def submit_feedback(data: dict):
        fields = {k: clean_str(data.get(k)) for k in ("stage", "membership_status", "type", "message")}
        require(fields, ["stage", "membership_status", "type", "message"])

        entry = Feedback(
            name=clean_str(data.get("name")),
            phone=clean_str(data.get("phone")),
            email=clean_str(data.get("email")),
            stage=_one_of(fields["stage"], STAGES, "stage"),
            membership_status=_one_of(fields["membership_status"], MEMBERSHIP_STATUSES, "membership_status"),
            type=_one_of(fields["type"], FEEDBACK_TYPES, "type"),
            message=fields["message"],
            submitted_at=datetime.utcnow(),
            status=_one_of(clean_str(data.get("status")) or "pending", FEEDBACK_STATUSES, "status"),
        )
        return FeedbackRepo.create(entry)

    @staticmethod
    def set_status(feedback_id: int, status):
        entry = FeedbackService.get_feedback(feedback_id)
        entry.status = _one_of(clean_str(status), FEEDBACK_STATUSES, "status")
        FeedbackRepo.update()
        return entry

    @staticmethod
    def delete_feedback(feedback_id: int):
        FeedbackRepo.delete(FeedbackService.get_feedback(feedback_id))
