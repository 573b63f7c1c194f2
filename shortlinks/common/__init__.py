"""Common utilities for the link shortener."""

from .validators import is_valid_url, is_valid_short_code
from .headers import build_base_url
from .url_builder import build_short_url
from .logging_config import get_logger, setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
