from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from sentiment_tracker.domain.entities.source import Source

COMMENT_SENTIMENTS = ("positive", "negative", "neutral")


@dataclass
class PopularComment:
    """A ranked audience comment kept on its post."""

    content: str
    likes: int = 0
    replies: int = 0
    shares: int = 0
    engagement_score: int = 0


@dataclass
class Post:
    """One sentiment-scored unit of analyzed content for a single source."""

    source: Source
    published_date: date

    id: Optional[str] = None
    post_url: Optional[str] = None

    positive_pct: float = 0.0
    negative_pct: float = 0.0
    neutral_pct: float = 0.0
    comment_count: int = 0
    engagement_count: int = 0

    positive_remarks: str = ""
    negative_remarks: str = ""
    neutral_remarks: str = ""
    conclusion: str = ""
    popular_comments: list[PopularComment] = field(default_factory=list)

    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """User-entered annotation on a post, independent of the AI remarks."""

    post_id: str
    content: str
    sentiment: str

    id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
