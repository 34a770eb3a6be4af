from typing import Optional


class ServiceError(Exception):
    """Base class for errors the API turns into client responses."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing field, bad date, empty or unknown category ids.

    ``errors`` holds every individual message so callers can render them
    per field; ``message`` is the joined summary.
    """

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class NotFoundError(ServiceError):
    pass
