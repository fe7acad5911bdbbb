DEFAULT_ERROR_MESSAGE = "An error occurred"


class BookingError(RuntimeError):
    """Recoverable failure of a booking-related action. ``message`` is shown to the user."""

    def __init__(self, message: str | None = None) -> None:
        self.message = message or DEFAULT_ERROR_MESSAGE
        super().__init__(self.message)


class ConflictError(BookingError):
    """Raised when the booking store rejects a slot that is no longer free."""
    pass


class NetworkError(BookingError):
    """Raised when a collaborator cannot be reached or fails (timeouts, 5xx, bad payloads)."""
    pass


class StaleSelectionError(Exception):
    """Raised when a slot response belongs to a date that is no longer selected."""
    pass


class PreconditionViolation(RuntimeError):
    """Raised when an operation is invoked from a state the flow never allows."""
    pass


class SubmissionInProgressError(RuntimeError):
    """Raised when a submit is triggered while another one is still in flight."""
    pass
