"""Comment-volume weighted sentiment aggregation.

Every consumer (entity cards, comparisons, leading-entity selection, daily
reports) goes through `aggregate`, so the numbers always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence


class SentimentSample(Protocol):
    positive_pct: float
    negative_pct: float
    neutral_pct: float
    comment_count: int


@dataclass(frozen=True)
class SentimentAggregate:
    avg_positive: float = 0.0
    avg_negative: float = 0.0
    avg_neutral: float = 0.0
    total_comments: int = 0
    post_count: int = 0
    total_engagement: int = 0


def aggregate(posts: Sequence[SentimentSample]) -> SentimentAggregate:
    """Aggregate post percentages into one sentiment picture.

    With no comments at all every post counts equally. Otherwise each post is
    weighted by its share of the total comment volume, so a post with 10,000
    comments outweighs one with 5. No rounding happens here.
    """
    if not posts:
        return SentimentAggregate()

    total_comments = sum(p.comment_count or 0 for p in posts)
    total_engagement = sum(getattr(p, "engagement_count", 0) or 0 for p in posts)

    if total_comments == 0:
        n = len(posts)
        return SentimentAggregate(
            avg_positive=sum(p.positive_pct or 0 for p in posts) / n,
            avg_negative=sum(p.negative_pct or 0 for p in posts) / n,
            avg_neutral=sum(p.neutral_pct or 0 for p in posts) / n,
            total_comments=0,
            post_count=n,
            total_engagement=total_engagement,
        )

    weighted_pos = weighted_neg = weighted_neu = 0.0
    for p in posts:
        weight = p.comment_count or 0
        weighted_pos += (p.positive_pct or 0) * weight
        weighted_neg += (p.negative_pct or 0) * weight
        weighted_neu += (p.neutral_pct or 0) * weight

    return SentimentAggregate(
        avg_positive=weighted_pos / total_comments,
        avg_negative=weighted_neg / total_comments,
        avg_neutral=weighted_neu / total_comments,
        total_comments=total_comments,
        post_count=len(posts),
        total_engagement=total_engagement,
    )


_METRICS = {
    "positive": lambda a: a.avg_positive,
    "negative": lambda a: a.avg_negative,
    "neutral": lambda a: a.avg_neutral,
}


def pick_leading(
    entries: Iterable[tuple[str, SentimentAggregate]],
    metric: str = "positive",
) -> tuple[str, SentimentAggregate] | None:
    """Return the entry with the highest average for `metric`.

    Entries without posts never lead. Ties go to the alphabetically first name
    (case-insensitive), independent of input order.
    """
    value = _METRICS[metric]
    candidates = [(name, agg) for name, agg in entries if agg.post_count > 0]
    if not candidates:
        return None
    candidates.sort(key=lambda e: (-value(e[1]), e[0].casefold(), e[0]))
    return candidates[0]
