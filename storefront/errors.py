"""
Classified service errors.

Services raise these instead of transport exceptions; the HTTP layer maps each
`ErrorKind` to a status code in one place (`storefront.api.main`).
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"


class ServiceError(Exception):
    """Base error carrying a classification and a caller-safe message."""

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BadRequestError(ServiceError):
    kind = ErrorKind.BAD_REQUEST


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class StorageError(Exception):
    """Raised by the object storage client when a storage call fails."""


class CarrierError(Exception):
    """Raised by the shipping carrier client on transport or API failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
