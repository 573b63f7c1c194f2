"""Short code generation utilities."""

import logging
import random
import string
from typing import Awaitable, Callable, Optional

from .errors import CodeSpaceExhausted


class ShortCodeGenerator:
    """Generate short codes that are not yet held by any link.

    Codes only need to be unique, not unpredictable, so ``random`` is used
    rather than ``secrets``. The existence check is a best-effort pre-check;
    the store's unique index has the final say.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(
        self,
        default_length: int = 6,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            max_attempts: Candidates to try before giving up
            logger: Optional logger
        """
        self.default_length = default_length
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    def generate_candidate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code drawn uniformly from the base62 alphabet
        """
        if length is None:
            length = self.default_length
        return ''.join(random.choices(self.BASE62_CHARS, k=length))

    async def generate_unique(self, exists: Callable[[str], Awaitable[bool]]) -> str:
        """Generate a short code that ``exists`` reports as free.

        Args:
            exists: Async predicate telling whether a code is already taken

        Returns:
            The first candidate not currently taken

        Raises:
            CodeSpaceExhausted: If every candidate within max_attempts was taken
        """
        for attempt in range(self.max_attempts):
            code = self.generate_candidate()

            if not await exists(code):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code

        self.logger.error(f"No free short code found after {self.max_attempts} attempts")
        raise CodeSpaceExhausted()
