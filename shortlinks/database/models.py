"""Data models for the link store."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping


@dataclass(frozen=True)
class Link:
    """Represents a short code -> URL mapping owned by one user."""

    id: int
    owner_id: str
    short_code: str
    url: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "short_code": self.short_code,
            "url": self.url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def with_changes(self, **changes: Any) -> "Link":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database row or dictionary."""
        created_at = record["created_at"]
        updated_at = record["updated_at"]
        return cls(
            id=record["id"],
            owner_id=record["owner_id"],
            short_code=record["short_code"],
            url=record["url"],
            created_at=created_at if isinstance(created_at, datetime) else datetime.fromisoformat(created_at),
            updated_at=updated_at if isinstance(updated_at, datetime) else datetime.fromisoformat(updated_at),
        )
