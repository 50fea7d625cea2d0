# app/core/errors.py
from typing import Any, Dict, Optional


class ShopError(Exception):
    """Base class for errors raised by the domain services.

    Every error carries a machine readable ``code`` and an optional
    ``details`` mapping that identifies the offending entity (variant id,
    supplier id, ...). The API layer maps each subclass to an HTTP status.
    """

    status_code = 400
    code = "error"

    def __init__(self, message: str, *, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}


class ValidationError(ShopError):
    status_code = 400
    code = "validation_error"


class ConflictError(ShopError):
    status_code = 409
    code = "conflict"


class NotFoundError(ShopError):
    status_code = 404
    code = "not_found"


class AuthenticationError(ShopError):
    status_code = 401
    code = "unauthenticated"


class AuthorizationError(ShopError):
    status_code = 403
    code = "forbidden"
