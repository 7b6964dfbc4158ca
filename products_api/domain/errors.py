"""
Error taxonomy shared by every layer.

Each failure the service can signal is one ErrorKind with a default
HTTP status. Components raise the matching ApiError subclass and let
the interface layer translate it. No framework imports allowed.
"""

from enum import Enum


class ErrorKind(Enum):
    """Enumerated failure kinds."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    MALFORMED_PAYLOAD = "malformed_payload"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.MALFORMED_PAYLOAD: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """Base error for all classified failures.

    Attributes:
        kind: The ErrorKind this failure belongs to.
        message: Human-readable summary returned to the client.
        errors: Ordered detail messages (may be empty).
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.message = message
        self.errors = list(errors or [])
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class NotFoundError(ApiError):
    """Raised when a referenced resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ValidationError(ApiError):
    """Raised when one or more field-level rules are violated.

    Carries every violation found, in rule order.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self, errors: list[str], message: str = "Validation failed"
    ) -> None:
        super().__init__(message, errors)


class UnauthenticatedError(ApiError):
    """Raised when a credential is missing or not recognized."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, [detail] if detail else None)


class ForbiddenError(ApiError):
    """Raised when a recognized credential lacks the required tier."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message, [detail] if detail else None)


class MalformedPayloadError(ApiError):
    """Raised when the request body is not a usable JSON document."""

    kind = ErrorKind.MALFORMED_PAYLOAD

    def __init__(self, detail: str = "Malformed JSON in request body") -> None:
        super().__init__("Invalid JSON payload", [detail])


class RateLimitedError(ApiError):
    """Raised when a client exceeds its request allowance."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, detail: str) -> None:
        super().__init__("Rate limit exceeded", [detail])


class InternalError(ApiError):
    """Unclassified failure. The message is hidden from production clients."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
