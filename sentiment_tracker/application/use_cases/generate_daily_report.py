"""Use case: generate the daily sentiment report for one date.

Collects every post of the date, aggregates it overall and per source, asks
for a narrative (falling back to an algorithmic one) and persists a single
report per date. Regenerating a date replaces the stored report and all of
its source summaries.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from sentiment_tracker.application.use_cases.group_sources import group_and_aggregate
from sentiment_tracker.application.use_cases.summarize_report import ReportNarrator
from sentiment_tracker.domain.entities import CandidateSource, DailyReport, Post
from sentiment_tracker.domain.exceptions import NoDataError
from sentiment_tracker.domain.repositories.post_repository import PostRepository
from sentiment_tracker.domain.repositories.report_repository import ReportRepository
from sentiment_tracker.domain.services.source_directory import SourceDirectory
from sentiment_tracker.domain.value_objects.sentiment import aggregate

logger = logging.getLogger(__name__)


def count_sources(posts: list[Post]) -> int:
    """Distinct party/news-media sources, plus one bucket for all candidates."""
    distinct = {
        (p.source.source_type, p.source.id)
        for p in posts
        if not isinstance(p.source, CandidateSource)
    }
    has_candidates = any(isinstance(p.source, CandidateSource) for p in posts)
    return len(distinct) + (1 if has_candidates else 0)


class GenerateDailyReportUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        report_repo: ReportRepository,
        source_directory: SourceDirectory,
        narrator: ReportNarrator,
    ):
        self._post_repo = post_repo
        self._report_repo = report_repo
        self._directory = source_directory
        self._narrator = narrator

    async def execute(self, report_date: date) -> DailyReport:
        """Generate and persist the report. Raises NoDataError for an empty date."""
        day = report_date.isoformat()

        # 1. Collect
        posts = await self._post_repo.get_by_date(report_date)
        if not posts:
            logger.info(f"[report {day}] no posts, nothing persisted")
            raise NoDataError(report_date)
        logger.info(f"[report {day}] {len(posts)} posts collected")

        # 2. Aggregate
        overall = aggregate(posts)
        summaries = await group_and_aggregate(posts, self._directory)

        report = DailyReport(
            report_date=report_date,
            total_posts_analyzed=overall.post_count,
            total_comments_analyzed=overall.total_comments,
            total_sources=count_sources(posts),
            overall_positive=overall.avg_positive,
            overall_negative=overall.avg_negative,
            overall_neutral=overall.avg_neutral,
            source_summaries=summaries,
        )
        logger.info(
            f"[report {day}] {report.total_sources} sources, {len(summaries)} summaries, "
            f"{report.overall_positive:.1f}% positive / {report.overall_negative:.1f}% negative"
        )

        # 3. Summarize
        narrative = await self._narrator.summarize(report)
        report.summary_text = narrative.text
        report.summary_source = narrative.source
        logger.info(f"[report {day}] summary source: {narrative.source}")

        # 4. Persist
        report.generated_at = datetime.utcnow()
        report = await self._report_repo.upsert(report)
        logger.info(f"[report {day}] saved (id {report.id})")
        return report
