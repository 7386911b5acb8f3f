from __future__ import annotations

from datetime import date
from typing import Protocol

from sentiment_tracker.domain.entities import DailyReport


class ReportRepository(Protocol):
    """Daily report store interface."""

    async def upsert(self, report: DailyReport) -> DailyReport:
        """Atomically create or replace the report for `report.report_date`.

        The report row is unique per date. On replace, numeric and summary
        fields are overwritten and every existing child summary is removed
        before the new ones are written.
        """
        ...

    async def get_by_date(self, day: date) -> DailyReport | None:
        """Report with its source summaries, largest post count first."""
        ...

    async def get_history(self, limit: int = 30) -> list[DailyReport]:
        """Most recent reports first, without source summaries."""
        ...

    async def delete(self, day: date) -> bool: ...
