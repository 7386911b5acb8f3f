from sentiment_tracker.domain.entities.post import COMMENT_SENTIMENTS, Comment, PopularComment, Post
from sentiment_tracker.domain.entities.report import DailyReport, ReportSourceSummary
from sentiment_tracker.domain.entities.source import (
    CandidateSource,
    NewsMediaSource,
    PartySource,
    Source,
    SourceType,
    make_source,
)

__all__ = [
    "COMMENT_SENTIMENTS",
    "CandidateSource",
    "Comment",
    "DailyReport",
    "NewsMediaSource",
    "PartySource",
    "PopularComment",
    "Post",
    "ReportSourceSummary",
    "Source",
    "SourceType",
    "make_source",
]
