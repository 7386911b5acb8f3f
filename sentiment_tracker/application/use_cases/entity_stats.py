"""Use case: live sentiment stats for tracked entities (no persistence)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from sentiment_tracker.domain.entities import Post, Source
from sentiment_tracker.domain.repositories.post_repository import PostRepository
from sentiment_tracker.domain.services.source_directory import SourceDirectory
from sentiment_tracker.domain.value_objects.sentiment import (
    SentimentAggregate,
    SentimentSample,
    aggregate,
    pick_leading,
)

logger = logging.getLogger(__name__)


def compute_entity_stats(posts: Sequence[SentimentSample]) -> SentimentAggregate:
    return aggregate(posts)


@dataclass
class EntityStats:
    source: Source
    name: str
    stats: SentimentAggregate


@dataclass
class EntityComparison:
    entities: list[EntityStats] = field(default_factory=list)
    leader: EntityStats | None = None


class EntityStatsUseCase:
    def __init__(self, post_repo: PostRepository, source_directory: SourceDirectory):
        self._post_repo = post_repo
        self._directory = source_directory

    async def _posts(self, source: Source, start: date | None, end: date | None) -> list[Post]:
        return await self._post_repo.get_by_source(source, start=start, end=end)

    async def execute(
        self, source: Source, start: date | None = None, end: date | None = None
    ) -> SentimentAggregate:
        return compute_entity_stats(await self._posts(source, start, end))

    async def compare(
        self,
        sources: Sequence[Source],
        start: date | None = None,
        end: date | None = None,
    ) -> EntityComparison:
        """Stats for each source plus the one with the highest weighted positive."""
        result = EntityComparison()
        for source in sources:
            try:
                name = await self._directory.get_name(source) or "Unknown"
            except Exception as e:
                logger.warning(f"Name lookup failed for {source.source_type.value}:{source.id}: {e}")
                name = "Unknown"
            stats = compute_entity_stats(await self._posts(source, start, end))
            result.entities.append(EntityStats(source=source, name=name, stats=stats))

        leading = pick_leading((e.name, e.stats) for e in result.entities)
        if leading is not None:
            result.leader = next(e for e in result.entities if e.stats is leading[1])
        return result
