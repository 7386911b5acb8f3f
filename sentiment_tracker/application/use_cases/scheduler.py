"""Scheduler orchestration.

APScheduler generates the previous day's report once a day, when enabled.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from sentiment_tracker.domain.exceptions import NoDataError
from sentiment_tracker.infrastructure.config.container import Container

logger = logging.getLogger(__name__)


class Orchestrator:
    """Schedule-driven job runner."""

    def __init__(self, container: Container):
        self._c = container
        self._tz = ZoneInfo(container.config.timezone)
        self.scheduler = AsyncIOScheduler(timezone=self._tz)

    def setup_jobs(self) -> None:
        daily_time = self._c.config.report.daily_time
        hour, minute = map(int, daily_time.split(":"))
        self.scheduler.add_job(
            self._run_daily_report,
            trigger=CronTrigger(hour=hour, minute=minute),
            id="daily_report",
            name="Daily Report",
            max_instances=1,
        )
        logger.info(f"Daily report job registered at {daily_time}")

    def start(self) -> None:
        self.scheduler.start()
        logger.info("Scheduler started")

    def stop(self) -> None:
        self.scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")

    async def _run_daily_report(self) -> None:
        report_date = (datetime.now(tz=self._tz) - timedelta(days=1)).date()
        logger.info(f"[scheduler] generating report for {report_date}")
        try:
            uc = self._c.generate_daily_report_use_case()
            report = await uc.execute(report_date)
            logger.info(
                f"[scheduler] report for {report_date} done "
                f"({report.total_posts_analyzed} posts, {report.summary_source})"
            )
        except NoDataError:
            logger.info(f"[scheduler] nothing to report for {report_date}")
        except Exception as e:
            logger.error(f"[scheduler] report generation failed for {report_date}: {e}")
