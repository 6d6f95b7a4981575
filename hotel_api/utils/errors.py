"""Application errors. Each carries the HTTP status it maps to."""
from typing import Dict, Optional

from fastapi import status


class ErrorResponse(Exception):
    """Base error; converted to ``{"success": false, "error": ...}`` by the app."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None,
                 errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors


class BadRequest(ErrorResponse):
    """Invalid input, invalid file or duplicate ownership (400)."""
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(ErrorResponse):
    """Missing credentials or failed ownership check (401)."""
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ErrorResponse):
    """Role not allowed on the route (403)."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ErrorResponse):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ErrorResponse):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class GeocodeError(InternalError):
    """Geocoding provider could not be reached or answered with an error."""
