"""Link store layer."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .memory import InMemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore


def create_link_store(
    database_url: str,
    pool_max_size: int = 10,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Create a link store for a connection URL.

    Args:
        database_url: ``postgresql://...``/``postgres://...`` or ``memory://``
        pool_max_size: Maximum size of the PostgreSQL connection pool
        create_tables: Create the links table on first connection
        logger: Optional logger instance

    Returns:
        Store instance matching the URL scheme

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = database_url.split("://", 1)[0].lower()
    if scheme == "memory":
        return InMemoryLinkStore(database_url, logger=logger)
    if scheme in ("postgres", "postgresql"):
        return PostgresLinkStore(
            database_url,
            pool_max_size=pool_max_size,
            create_tables=create_tables,
            logger=logger,
        )
    raise ValueError(f"Unsupported database URL scheme: {scheme}")


__all__ = [
    "LinkStoreBase",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "Link",
    "create_link_store",
]
