from __future__ import annotations

from typing import Protocol

from sentiment_tracker.domain.entities import Source


class SourceDirectory(Protocol):
    """Read-only view over the candidate / party / news-media registries."""

    async def get_name(self, source: Source) -> str | None:
        """Display name of a source, or None when it cannot be resolved."""
        ...

    async def get_party_name(self, candidate_id: str) -> str | None:
        """Party a candidate belongs to, or None for independents."""
        ...
