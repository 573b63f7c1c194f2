"""Core business logic for the link shortener."""

from .shortcode import ShortCodeGenerator
from .links import LinkRepository
from .actions import LinkActions

__all__ = ["ShortCodeGenerator", "LinkRepository", "LinkActions"]
