from __future__ import annotations

from datetime import date
from typing import Protocol

from sentiment_tracker.domain.entities import Comment, Post, Source


class PostRepository(Protocol):
    """Post store interface (dependency inversion)."""

    async def save(self, post: Post) -> Post:
        """Insert a new post and assign its id."""
        ...

    async def get_by_id(self, post_id: str) -> Post | None: ...

    async def get_by_date(self, day: date) -> list[Post]:
        """Every post, of any source type, published on `day`."""
        ...

    async def get_by_source(
        self,
        source: Source,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[Post]:
        """A source's timeline, newest first."""
        ...

    async def find_by_source_and_url(self, source: Source, post_url: str) -> Post | None: ...

    async def delete(self, post_id: str) -> bool:
        """Delete a post together with its comments. False if it did not exist."""
        ...


class CommentRepository(Protocol):
    """User comment store interface."""

    async def save(self, comment: Comment) -> Comment: ...

    async def get_by_post(self, post_id: str, sentiment: str | None = None) -> list[Comment]: ...

    async def delete(self, post_id: str, comment_id: str) -> bool: ...
