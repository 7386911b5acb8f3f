"""Duplicate-source guard.

Decides what happens when a new measurement arrives for a (source, URL) pair
that was already analyzed. Re-analysis replaces the earlier measurement; it
is never kept as a revision.
"""

from __future__ import annotations

import logging

from sentiment_tracker.domain.entities import Post, Source
from sentiment_tracker.domain.exceptions import DuplicateSourceError
from sentiment_tracker.domain.repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)


class DuplicateSourceGuard:
    def __init__(self, post_repo: PostRepository):
        self._post_repo = post_repo

    async def check(self, source: Source, post_url: str | None, force: bool) -> Post | None:
        """Look for an earlier post of `source` carrying `post_url`.

        Returns None when there is nothing to replace (no URL, or no match).
        Returns the earlier post when `force` is set; the caller removes it
        with `replace` once the new post is ready to be written. Raises
        DuplicateSourceError otherwise.

        Only the same source is checked; identical URLs on different sources
        are independent.
        """
        if not post_url:
            return None

        existing = await self._post_repo.find_by_source_and_url(source, post_url)
        if existing is None:
            return None

        if not force:
            logger.info(
                f"[{source.source_type.value}:{source.id}] duplicate URL blocked "
                f"(existing post {existing.id})"
            )
            raise DuplicateSourceError(existing.id, existing.published_date)

        return existing

    async def replace(self, existing: Post) -> None:
        """Permanently delete the superseded post and its comments."""
        await self._post_repo.delete(existing.id)
        logger.info(f"Superseded post {existing.id} deleted (re-analysis)")

    async def check_duplicate(self, source: Source, post_url: str | None, force: bool) -> None:
        """Check and, when forced, delete the earlier post straight away."""
        existing = await self.check(source, post_url, force)
        if existing is not None:
            await self.replace(existing)
