"""Data access layer for links.

``LinkRepository`` is the only code that talks to a link store. Every read
other than short code resolution is scoped to an owner, and every mutation
re-fetches the link for its owner right before writing.
"""

import logging
from typing import Optional, List
from datetime import datetime, timezone

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import DuplicateShortCode, NotFoundOrUnauthorized, UniqueConstraintViolation


class LinkRepository:
    """Ownership-scoped CRUD over the links table."""

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize repository.

        Args:
            store: Link store handle, shared for the process lifetime
            short_code_generator: Optional short code generator
            logger: Optional logger
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def list_by_owner(self, owner_id: str) -> List[Link]:
        """All links owned by ``owner_id``, newest first."""
        links = await self.store.fetch_by_owner(owner_id)
        self.logger.debug(f"Listed {len(links)} links for owner {owner_id}")
        return links

    async def get_by_short_code(self, short_code: str) -> Optional[Link]:
        """Public lookup used by the redirect path. No ownership filter."""
        return await self.store.fetch_by_short_code(short_code)

    async def get_by_id_for_owner(self, link_id: int, owner_id: str) -> Optional[Link]:
        """Return the link only if it exists and belongs to ``owner_id``.

        A link owned by someone else is reported exactly like a missing one.
        """
        link = await self.store.fetch_by_id(link_id)
        if link is None or link.owner_id != owner_id:
            return None
        return link

    async def short_code_exists(self, short_code: str) -> bool:
        return await self.store.short_code_exists(short_code)

    async def create(
        self,
        owner_id: str,
        url: str,
        short_code: Optional[str] = None,
    ) -> Link:
        """Create a link, generating a short code when none is given.

        Args:
            owner_id: Identity of the creating user
            url: Destination URL (already validated)
            short_code: Optional custom short code (already validated)

        Returns:
            The persisted link

        Raises:
            DuplicateShortCode: If the short code is taken, either by the
                pre-check or by the store's unique index at insert time
            CodeSpaceExhausted: If no free code could be generated
        """
        if short_code:
            if await self.get_by_short_code(short_code) is not None:
                self.logger.warning(f"Short code already exists: {short_code}")
                raise DuplicateShortCode()
        else:
            short_code = await self.generator.generate_unique(self.short_code_exists)

        now = datetime.now(timezone.utc)
        try:
            link = await self.store.insert_link(owner_id, short_code, url, now)
        except UniqueConstraintViolation as e:
            # Lost the race between the pre-check and the insert
            self.logger.warning(f"Insert rejected for short code {short_code}: {e}")
            raise DuplicateShortCode() from e

        self.logger.info(f"Created link {link.id}: {link.short_code} -> {link.url} (owner {owner_id})")
        return link

    async def update(
        self,
        link_id: int,
        owner_id: str,
        url: Optional[str] = None,
        short_code: Optional[str] = None,
    ) -> Link:
        """Update url and/or short code of an owned link.

        Fields left as None keep their current values.

        Raises:
            NotFoundOrUnauthorized: If the link is missing or not owned
            DuplicateShortCode: If the new short code is taken
        """
        existing = await self.get_by_id_for_owner(link_id, owner_id)
        if existing is None:
            self.logger.warning(f"Update of link {link_id} refused for owner {owner_id}")
            raise NotFoundOrUnauthorized()

        if short_code and short_code != existing.short_code:
            if await self.get_by_short_code(short_code) is not None:
                self.logger.warning(f"Short code already exists: {short_code}")
                raise DuplicateShortCode()

        try:
            updated = await self.store.update_link(
                link_id,
                url=url if url is not None else existing.url,
                short_code=short_code or existing.short_code,
                updated_at=datetime.now(timezone.utc),
            )
        except UniqueConstraintViolation as e:
            self.logger.warning(f"Update rejected for short code {short_code}: {e}")
            raise DuplicateShortCode() from e

        if updated is None:
            # Deleted between the ownership check and the write
            raise NotFoundOrUnauthorized()

        self.logger.info(f"Updated link {link_id}: {updated.short_code} -> {updated.url}")
        return updated

    async def delete(self, link_id: int, owner_id: str) -> bool:
        """Delete an owned link.

        Raises:
            NotFoundOrUnauthorized: If the link is missing or not owned
        """
        existing = await self.get_by_id_for_owner(link_id, owner_id)
        if existing is None:
            self.logger.warning(f"Delete of link {link_id} refused for owner {owner_id}")
            raise NotFoundOrUnauthorized()

        if not await self.store.delete_link(link_id):
            raise NotFoundOrUnauthorized()

        self.logger.info(f"Deleted link {link_id} ({existing.short_code})")
        return True
