"""Profile search index protocol (implemented outside this package)."""

from typing import Protocol
from uuid import UUID


class IProfileSearchIndex(Protocol):
    """Fuzzy/phonetic name search over profiles."""

    async def search(self, query: str) -> list[UUID]:
        """Return matching profile IDs, best match first."""
        ...
