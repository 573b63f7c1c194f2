"""Validation utilities for link fields."""

import re
from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048
SHORT_CODE_MIN_LENGTH = 3
SHORT_CODE_MAX_LENGTH = 32

INVALID_URL_MESSAGE = "Please enter a valid URL"

_SHORT_CODE_RE = re.compile(r'^[a-zA-Z0-9_-]+$')
_SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*$')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute URL.

    Any scheme is accepted as long as the URL names a host.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, INVALID_URL_MESSAGE

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, INVALID_URL_MESSAGE

    try:
        result = urlparse(url)
        # Accessing port validates it
        result.port
    except ValueError:
        return False, INVALID_URL_MESSAGE

    if not result.scheme or not _SCHEME_RE.match(result.scheme):
        return False, INVALID_URL_MESSAGE

    if not result.hostname:
        return False, INVALID_URL_MESSAGE

    return True, ""


def is_valid_short_code(
    short_code: str,
    min_length: int = SHORT_CODE_MIN_LENGTH,
    max_length: int = SHORT_CODE_MAX_LENGTH,
) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str):
        return False, "Short code must be a string"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not _SHORT_CODE_RE.match(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    return True, ""
