"""
Grooming booking exceptions.
Each error carries the HTTP status the request layer answers with.
"""


class GroomingError(Exception):
    """Base exception for booking and rating errors"""

    status_code = 400

    def __init__(self, message: str, error_type: str = "error", details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}


class ValidationError(GroomingError):
    """Missing or malformed input"""

    def __init__(self, message: str, field: str = None, details: dict = None):
        super().__init__(message, "validation_error", details)
        self.field = field


class NotFoundError(GroomingError):
    """Booking, rating or other record id does not resolve"""

    status_code = 404

    def __init__(self, entity: str, entity_id, details: dict = None):
        message = f"{entity} not found"
        super().__init__(message, "not_found", details)
        self.entity = entity
        self.entity_id = entity_id


class InvalidStateError(GroomingError):
    """Operation not allowed in the record's current status"""

    def __init__(self, message: str, current_status: str = None, details: dict = None):
        super().__init__(message, "invalid_state", details)
        self.current_status = current_status


class InvalidTransitionError(GroomingError):
    """Requested status change is not part of the booking state machine"""

    def __init__(self, current_status: str, new_status: str, details: dict = None):
        message = f"Cannot change booking status from {current_status} to {new_status}"
        super().__init__(message, "invalid_transition", details)
        self.current_status = current_status
        self.new_status = new_status


class WindowExpiredError(GroomingError):
    """Cancellation attempted after the self-service window closed"""

    def __init__(self, minutes_elapsed: int, window_minutes: int, details: dict = None):
        message = (
            f"Booking can only be cancelled within {window_minutes} minutes of ordering "
            f"({minutes_elapsed} minutes have passed)"
        )
        super().__init__(message, "window_expired", details)
        self.minutes_elapsed = minutes_elapsed
        self.window_minutes = window_minutes


class DuplicateRatingError(GroomingError):
    """Booking already has a pending or approved rating"""

    status_code = 409

    def __init__(self, booking_id: str, details: dict = None):
        message = "A rating has already been submitted for this booking"
        super().__init__(message, "duplicate_rating", details)
        self.booking_id = booking_id
