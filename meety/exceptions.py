"""
Booking engine error kinds

Services raise these; the request layer (see main.py) maps them to HTTP
responses. None of them is fatal to the process.
"""

from typing import Any, Optional


class MeetyError(Exception):
    """Base class for errors returned to the caller"""

    status_code = 400

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(MeetyError):
    """Malformed input, unknown participant, or a disallowed status transition"""

    status_code = 400


class ConflictError(MeetyError):
    """The requested slot is no longer available at commit time"""

    status_code = 409


class NotFoundError(MeetyError):
    """Unknown meeting or booked slot"""

    status_code = 404
