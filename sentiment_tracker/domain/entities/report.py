from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from sentiment_tracker.domain.entities.source import SourceType


@dataclass
class ReportSourceSummary:
    """Per-group aggregate owned by a daily report."""

    source_type: SourceType
    source_name: str

    source_id: Optional[str] = None
    report_id: Optional[str] = None
    post_count: int = 0
    comment_count: int = 0
    engagement_count: int = 0
    avg_positive: float = 0.0
    avg_negative: float = 0.0
    avg_neutral: float = 0.0
    positive_remarks: str = ""
    negative_remarks: str = ""


@dataclass
class DailyReport:
    """One persisted sentiment snapshot per calendar date."""

    report_date: date

    id: Optional[str] = None
    total_posts_analyzed: int = 0
    total_comments_analyzed: int = 0
    total_sources: int = 0
    overall_positive: float = 0.0
    overall_negative: float = 0.0
    overall_neutral: float = 0.0
    summary_text: str = ""
    summary_source: str = "algorithmic"  # ai, algorithmic
    generated_at: datetime = field(default_factory=datetime.utcnow)
    source_summaries: list[ReportSourceSummary] = field(default_factory=list)
