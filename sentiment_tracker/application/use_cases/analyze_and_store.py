"""Use case: analyze a source's comments and store the measurement.

Comment text goes to the external classifier; the returned percentages and
remarks become a new Post. Structured comments (with likes/replies/shares)
are also ranked so the post carries its most engaging comments.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence, Union

from sentiment_tracker.application.use_cases.duplicate_guard import DuplicateSourceGuard
from sentiment_tracker.domain.entities import Post, Source
from sentiment_tracker.domain.exceptions import ExternalServiceError, ValidationError
from sentiment_tracker.domain.repositories.post_repository import PostRepository
from sentiment_tracker.domain.services.sentiment_classifier import SentimentClassifier
from sentiment_tracker.domain.value_objects.engagement import (
    POPULAR_COMMENT_LIMIT,
    rank_popular,
    to_popular_comment,
)
from sentiment_tracker.domain.value_objects.report_date import normalize_report_date

logger = logging.getLogger(__name__)

RawComment = Union[str, Mapping[str, Any]]


def validate_source(source: Source | None) -> None:
    if source is None or not str(source.id or "").strip():
        raise ValidationError("Source identifier is required")


def validate_percentages(
    positive: float, negative: float, neutral: float, tolerance: float = 1.0
) -> None:
    """Each share must be within 0-100 and together they must make ~100."""
    for name, value in (("positive", positive), ("negative", negative), ("neutral", neutral)):
        if value is None or not 0 <= value <= 100:
            raise ValidationError(f"{name} percentage must be between 0 and 100, got {value}")
    total = positive + negative + neutral
    if abs(total - 100) > tolerance:
        raise ValidationError(f"Percentages must sum to 100 (got {total:.2f})")


def _comment_text(comment: RawComment) -> str:
    if isinstance(comment, Mapping):
        return str(comment.get("content", "")).strip()
    return str(comment).strip()


class AnalyzeAndStoreUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        classifier: SentimentClassifier | None,
        popular_limit: int = POPULAR_COMMENT_LIMIT,
        percentage_tolerance: float = 1.0,
        timezone: str = "UTC",
    ):
        self._post_repo = post_repo
        self._classifier = classifier
        self._guard = DuplicateSourceGuard(post_repo)
        # Posts never carry more than POPULAR_COMMENT_LIMIT ranked comments
        self._popular_limit = max(0, min(popular_limit, POPULAR_COMMENT_LIMIT))
        self._tolerance = percentage_tolerance
        self._timezone = timezone

    async def execute(
        self,
        source: Source,
        comments: Sequence[RawComment],
        post_url: str | None = None,
        force: bool = False,
        published_date: date | None = None,
    ) -> Post:
        """Classify `comments` and persist the result as a new post.

        Raises DuplicateSourceError when the URL was already analyzed for this
        source and `force` is not set. With `force`, the earlier post is deleted
        only after the new analysis succeeded.
        """
        validate_source(source)
        post_url = (post_url or "").strip() or None

        texts = [t for t in (_comment_text(c) for c in comments) if t]
        if not texts:
            raise ValidationError("No comment text to analyze")

        superseded = await self._guard.check(source, post_url, force)

        if self._classifier is None:
            raise ExternalServiceError("Sentiment classifier is not configured")

        logger.info(
            f"[{source.source_type.value}:{source.id}] classifying {len(texts)} comments"
        )
        analysis = await self._classifier.classify(texts)
        validate_percentages(
            analysis.positive_pct, analysis.negative_pct, analysis.neutral_pct, self._tolerance
        )

        # Unstructured blobs have no engagement data, so nothing is ranked
        structured = [c for c in comments if isinstance(c, Mapping)]
        if len(structured) == len(comments):
            structured = [c for c in structured if _comment_text(c)]
            popular = rank_popular(structured, limit=self._popular_limit)
            engagement = sum(to_popular_comment(c).engagement_score for c in structured)
        else:
            popular, engagement = [], 0

        post = Post(
            source=source,
            published_date=published_date or normalize_report_date(None, self._timezone),
            post_url=post_url,
            positive_pct=analysis.positive_pct,
            negative_pct=analysis.negative_pct,
            neutral_pct=analysis.neutral_pct,
            comment_count=len(texts),
            engagement_count=engagement,
            positive_remarks=analysis.positive_remarks,
            negative_remarks=analysis.negative_remarks,
            neutral_remarks=analysis.neutral_remarks,
            conclusion=analysis.conclusion,
            popular_comments=popular,
        )

        if superseded is not None:
            await self._guard.replace(superseded)

        post = await self._post_repo.save(post)
        logger.info(
            f"[{source.source_type.value}:{source.id}] post {post.id} stored "
            f"({post.positive_pct:.1f}% / {post.negative_pct:.1f}% / {post.neutral_pct:.1f}%)"
        )
        return post

    async def record(self, post: Post, force: bool = False) -> Post:
        """Store a manually entered post under the same rules as an analysis."""
        validate_source(post.source)
        post.post_url = (post.post_url or "").strip() or None
        if post.comment_count is None or post.comment_count < 0:
            raise ValidationError("comment_count cannot be negative")
        validate_percentages(post.positive_pct, post.negative_pct, post.neutral_pct, self._tolerance)

        await self._guard.check_duplicate(post.source, post.post_url, force)

        post.popular_comments = sorted(
            post.popular_comments, key=lambda c: c.engagement_score, reverse=True
        )[: self._popular_limit]
        post.id = None
        post = await self._post_repo.save(post)
        logger.info(f"[{post.source.source_type.value}:{post.source.id}] manual post {post.id} stored")
        return post
