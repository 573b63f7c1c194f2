"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Implementations own all query construction. Writes that collide with the
    short code unique index raise ``UniqueConstraintViolation``; any other
    store failure propagates to the caller unchanged.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the links table and its indexes if they don't exist."""
        pass

    @abstractmethod
    async def insert_link(
        self,
        owner_id: str,
        short_code: str,
        url: str,
        created_at: datetime,
    ) -> Link:
        """Insert a new link row.

        Args:
            owner_id: Identity of the creating user
            short_code: The short code to use
            url: Destination URL
            created_at: Creation timestamp, also used as updated_at

        Returns:
            The persisted link including its assigned id

        Raises:
            UniqueConstraintViolation: If short_code is already taken
        """
        pass

    @abstractmethod
    async def fetch_by_short_code(self, short_code: str) -> Optional[Link]:
        """Get the link holding a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def fetch_by_id(self, link_id: int) -> Optional[Link]:
        """Get a link by its id, regardless of owner.

        Args:
            link_id: The link id

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def fetch_by_owner(self, owner_id: str) -> List[Link]:
        """List all links of one owner, newest first.

        Args:
            owner_id: The owner identity

        Returns:
            List of links ordered by created_at descending
        """
        pass

    @abstractmethod
    async def update_link(
        self,
        link_id: int,
        url: str,
        short_code: str,
        updated_at: datetime,
    ) -> Optional[Link]:
        """Overwrite url and short_code of a link.

        Args:
            link_id: The link id
            url: New destination URL
            short_code: New short code
            updated_at: Modification timestamp

        Returns:
            The updated link, or None if the row no longer exists

        Raises:
            UniqueConstraintViolation: If short_code is held by another row
        """
        pass

    @abstractmethod
    async def delete_link(self, link_id: int) -> bool:
        """Delete a link row.

        Args:
            link_id: The link id

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def short_code_exists(self, short_code: str) -> bool:
        """Check if a short code already exists.

        Args:
            short_code: The short code to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
