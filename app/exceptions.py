from typing import Any, Mapping, Optional


class ListlyError(Exception):
    """Base class for errors raised by the data-access core.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (ids, field names)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(ListlyError):
    """Raised when a business rule that the schema does not enforce is violated.

    Updating or deleting a default category is the canonical case.
    http_status is 400.
    """

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(ListlyError):
    """Raised when an update, delete or lookup targets a non-existent id. http_status is 404."""

    http_status = 404
    default_message = "Not found"


class ConflictError(ListlyError):
    """Raised when a unique constraint is violated (duplicate slug, override or collaborator).

    http_status is 409.
    """

    http_status = 409
    default_message = "Conflict"


class ForbiddenError(ListlyError):
    """Raised by the access gate when a user may not touch a list. http_status is 403."""

    http_status = 403
    default_message = "Forbidden"


class TransactionStateError(ListlyError):
    """Raised when a unit of work is used after it closed or is nested."""

    default_message = "Transaction is not open"
