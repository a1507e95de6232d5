"""Exception hierarchy for the kitchen core.

Every error carries an HTTP-style status code so the request layer can map it
without knowing the individual types.
"""
from typing import Optional


class KitchenError(Exception):
    """Base class for all errors raised by the kitchen core.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error.
        detail: Additional error details.
    """

    def __init__(self, message: str = "An error occurred", status_code: int = 500,
                 detail: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.detail = detail or message
        super().__init__(self.message)


class NotFound(KitchenError):
    """Referenced recipe, fridge item, shopping list or item does not exist."""

    def __init__(self, message: str = "Resource not found", detail: Optional[str] = None):
        super().__init__(message=message, status_code=404, detail=detail)


class Forbidden(KitchenError):
    """Mutation attempted by a user who does not own the target."""

    def __init__(self, message: str = "Not allowed", detail: Optional[str] = None):
        super().__init__(message=message, status_code=403, detail=detail)


class ValidationFailure(KitchenError):
    """Malformed input, rejected before any write."""

    def __init__(self, message: str = "Validation error", detail: Optional[str] = None):
        super().__init__(message=message, status_code=400, detail=detail)


class PersistenceFailure(KitchenError):
    """Underlying storage operation failed; the unit of work was rolled back."""

    def __init__(self, message: str = "Storage failure", detail: Optional[str] = None):
        super().__init__(message=message, status_code=500, detail=detail)


__all__ = ["KitchenError", "NotFound", "Forbidden", "ValidationFailure", "PersistenceFailure"]
