"""In-process link store for local development and tests."""

import itertools
import logging
from typing import Optional, List, Dict
from datetime import datetime

from .base import LinkStoreBase
from .models import Link
from ..errors import UniqueConstraintViolation


class InMemoryLinkStore(LinkStoreBase):
    """Dictionary-backed link store.

    Enforces the same short code uniqueness as the PostgreSQL unique index.
    Data lives for the lifetime of the process only.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[int, Link] = {}
        self._ids = itertools.count(1)

    async def ensure_schema(self) -> None:
        pass

    def _holder_of(self, short_code: str) -> Optional[Link]:
        for link in self._rows.values():
            if link.short_code == short_code:
                return link
        return None

    async def insert_link(
        self,
        owner_id: str,
        short_code: str,
        url: str,
        created_at: datetime,
    ) -> Link:
        if self._holder_of(short_code) is not None:
            raise UniqueConstraintViolation(short_code)

        link = Link(
            id=next(self._ids),
            owner_id=owner_id,
            short_code=short_code,
            url=url,
            created_at=created_at,
            updated_at=created_at,
        )
        self._rows[link.id] = link
        return link

    async def fetch_by_short_code(self, short_code: str) -> Optional[Link]:
        return self._holder_of(short_code)

    async def fetch_by_id(self, link_id: int) -> Optional[Link]:
        return self._rows.get(link_id)

    async def fetch_by_owner(self, owner_id: str) -> List[Link]:
        owned = [link for link in self._rows.values() if link.owner_id == owner_id]
        return sorted(owned, key=lambda link: (link.created_at, link.id), reverse=True)

    async def update_link(
        self,
        link_id: int,
        url: str,
        short_code: str,
        updated_at: datetime,
    ) -> Optional[Link]:
        current = self._rows.get(link_id)
        if current is None:
            return None

        holder = self._holder_of(short_code)
        if holder is not None and holder.id != link_id:
            raise UniqueConstraintViolation(short_code)

        updated = current.with_changes(url=url, short_code=short_code, updated_at=updated_at)
        self._rows[link_id] = updated
        return updated

    async def delete_link(self, link_id: int) -> bool:
        return self._rows.pop(link_id, None) is not None

    async def short_code_exists(self, short_code: str) -> bool:
        return self._holder_of(short_code) is not None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug(f"Discarding {len(self._rows)} in-memory links")
        self._rows.clear()
