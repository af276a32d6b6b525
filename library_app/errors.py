class LibraryError(Exception):
    """Base for failures surfaced to the caller as typed errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(LibraryError):
    """Malformed or contradictory input."""

    status_code = 400


class NotFoundError(LibraryError):
    """Unknown id, or a borrowing that is already returned."""

    status_code = 404


class ConflictError(LibraryError):
    """Request clashes with current state (no copies left, frozen account, duplicates)."""

    status_code = 409
