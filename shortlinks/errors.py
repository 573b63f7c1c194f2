"""Error types for the link shortener.

Lower layers raise these; the mutation entry points in ``actions`` catch them
and collapse them into ``ActionResult`` error strings.
"""

from typing import Optional


class LinkError(Exception):
    """Base class for link shortener errors."""

    message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class Unauthorized(LinkError):
    """Raised when the caller has no valid identity."""

    message = "Unauthorized"


class ValidationFailed(LinkError):
    """Raised when input violates a field constraint.

    Carries the message of the first violated constraint.
    """

    message = "Validation failed"


class DuplicateShortCode(LinkError):
    """Raised when a requested short code is already in use."""

    message = "Short code already exists"


class NotFoundOrUnauthorized(LinkError):
    """Raised when a link does not exist or is owned by someone else.

    The two cases are deliberately indistinguishable.
    """

    message = "Link not found or unauthorized"


class CodeSpaceExhausted(LinkError):
    """Raised when no free short code was found within the attempt budget."""

    message = "Unable to generate unique short code"


class UniqueConstraintViolation(Exception):
    """Raised by a link store when the short code unique index rejects a write."""

    def __init__(self, short_code: str):
        super().__init__(f"Unique constraint violated for short code '{short_code}'")
        self.short_code = short_code
