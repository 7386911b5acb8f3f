"""Use case: post timelines, post deletion and user comments."""

from __future__ import annotations

import logging
from datetime import date

from sentiment_tracker.domain.entities import COMMENT_SENTIMENTS, Comment, Post, Source
from sentiment_tracker.domain.exceptions import NotFoundError, ValidationError
from sentiment_tracker.domain.repositories.post_repository import CommentRepository, PostRepository

logger = logging.getLogger(__name__)


class ManagePostsUseCase:
    def __init__(self, post_repo: PostRepository, comment_repo: CommentRepository):
        self._post_repo = post_repo
        self._comment_repo = comment_repo

    async def timeline(
        self,
        source: Source,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[Post]:
        return await self._post_repo.get_by_source(source, start=start, end=end, limit=limit)

    async def get(self, post_id: str) -> Post:
        post = await self._post_repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError(f"Post {post_id} not found")
        return post

    async def delete(self, post_id: str) -> None:
        if not await self._post_repo.delete(post_id):
            raise NotFoundError(f"Post {post_id} not found")
        logger.info(f"Post {post_id} deleted with its comments")

    # ─── Comments ───

    async def add_comment(self, post_id: str, content: str, sentiment: str) -> Comment:
        content = (content or "").strip()
        sentiment = (sentiment or "").strip().lower()
        if not content:
            raise ValidationError("Comment content is required")
        if sentiment not in COMMENT_SENTIMENTS:
            raise ValidationError(f"Sentiment must be one of {', '.join(COMMENT_SENTIMENTS)}")
        await self.get(post_id)
        return await self._comment_repo.save(
            Comment(post_id=post_id, content=content, sentiment=sentiment)
        )

    async def list_comments(self, post_id: str, sentiment: str | None = None) -> list[Comment]:
        if sentiment and sentiment not in COMMENT_SENTIMENTS:
            raise ValidationError(f"Sentiment must be one of {', '.join(COMMENT_SENTIMENTS)}")
        return await self._comment_repo.get_by_post(post_id, sentiment)

    async def delete_comment(self, post_id: str, comment_id: str) -> None:
        if not await self._comment_repo.delete(post_id, comment_id):
            raise NotFoundError(f"Comment {comment_id} not found")
