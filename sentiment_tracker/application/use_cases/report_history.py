"""Use case: reading stored daily reports."""

from __future__ import annotations

from datetime import date
from typing import Any

from sentiment_tracker.domain.entities import DailyReport
from sentiment_tracker.domain.repositories.report_repository import ReportRepository

POSITIVE_COLOR = "#10B981"
NEGATIVE_COLOR = "#EF4444"
NEUTRAL_COLOR = "#6B7280"


class ReportHistoryUseCase:
    def __init__(self, report_repo: ReportRepository, default_limit: int = 30):
        self._report_repo = report_repo
        self._default_limit = default_limit

    async def get_by_date(self, day: date) -> DailyReport | None:
        return await self._report_repo.get_by_date(day)

    async def get_history(self, limit: int | None = None) -> list[DailyReport]:
        return await self._report_repo.get_history(limit or self._default_limit)

    async def delete(self, day: date) -> bool:
        return await self._report_repo.delete(day)

    async def get_trends(self, days: int = 7) -> dict[str, Any]:
        """Overall sentiment of the last `days` reports, oldest first."""
        reports = list(reversed(await self._report_repo.get_history(days)))
        return {
            "labels": [r.report_date.isoformat() for r in reports],
            "datasets": [
                {"label": "Positive", "data": [r.overall_positive for r in reports], "color": POSITIVE_COLOR},
                {"label": "Negative", "data": [r.overall_negative for r in reports], "color": NEGATIVE_COLOR},
                {"label": "Neutral", "data": [r.overall_neutral for r in reports], "color": NEUTRAL_COLOR},
            ],
        }

    async def get_chart_data(self, day: date) -> dict[str, Any] | None:
        report = await self._report_repo.get_by_date(day)
        if report is None:
            return None
        summaries = report.source_summaries
        return {
            "sentiment_pie": {
                "labels": ["Positive", "Negative", "Neutral"],
                "data": [report.overall_positive, report.overall_negative, report.overall_neutral],
                "colors": [POSITIVE_COLOR, NEGATIVE_COLOR, NEUTRAL_COLOR],
            },
            "source_bar": {
                "labels": [s.source_name for s in summaries],
                "datasets": [
                    {"label": "Positive %", "data": [s.avg_positive for s in summaries], "color": POSITIVE_COLOR},
                    {"label": "Negative %", "data": [s.avg_negative for s in summaries], "color": NEGATIVE_COLOR},
                ],
            },
            "stats": {
                "total_posts": report.total_posts_analyzed,
                "total_comments": report.total_comments_analyzed,
                "total_sources": report.total_sources,
                "report_date": report.report_date.isoformat(),
            },
        }
