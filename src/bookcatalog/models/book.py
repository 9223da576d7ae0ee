"""Book domain entity.

Books live only in memory; the repository owns their lifetime and hands
out copies so that readers never share state with the store.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class Book:
    """A catalogue entry.

    ``id`` and ``created_at`` are assigned by the repository on insertion;
    ``updated_at`` stays ``None`` until the first update. ISBNs are not
    required to be unique.
    """

    title: str
    author: str
    isbn: str
    published_date: date
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None
