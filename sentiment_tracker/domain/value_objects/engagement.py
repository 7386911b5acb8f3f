from __future__ import annotations

from typing import Any, Iterable, Mapping

from sentiment_tracker.domain.entities import PopularComment

POPULAR_COMMENT_LIMIT = 10


def engagement_score(likes: int, replies: int, shares: int) -> int:
    """Replies and shares count progressively more than a passive like."""
    return (likes or 0) + 2 * (replies or 0) + 3 * (shares or 0)


def to_popular_comment(raw: Mapping[str, Any]) -> PopularComment:
    likes = int(raw.get("likes") or 0)
    replies = int(raw.get("replies") or 0)
    shares = int(raw.get("shares") or 0)
    return PopularComment(
        content=str(raw.get("content", "")),
        likes=likes,
        replies=replies,
        shares=shares,
        engagement_score=engagement_score(likes, replies, shares),
    )


def rank_popular(
    comments: Iterable[Mapping[str, Any]],
    limit: int = POPULAR_COMMENT_LIMIT,
) -> list[PopularComment]:
    """Score structured comments and return the top `limit` by engagement.

    The sort is stable, so equal scores keep their input order.
    """
    scored = [to_popular_comment(c) for c in comments]
    scored.sort(key=lambda c: c.engagement_score, reverse=True)
    return scored[: max(limit, 0)]
