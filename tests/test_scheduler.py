from datetime import date, datetime, timedelta

from fakes import CONGRESS, InMemoryContainer, make_post
from sentiment_tracker.application.use_cases.scheduler import Orchestrator
from sentiment_tracker.infrastructure.config.settings import AppConfig


def _yesterday() -> date:
    return (datetime.utcnow() - timedelta(days=1)).date()


def test_daily_job_registered():
    container = InMemoryContainer(AppConfig({"app": {"timezone": "UTC"}, "report": {"daily_time": "01:15"}}))
    orchestrator = Orchestrator(container)

    orchestrator.setup_jobs()

    job = orchestrator.scheduler.get_job("daily_report")
    assert job is not None
    assert str(job.trigger.fields[5]) == "1"
    assert str(job.trigger.fields[6]) == "15"


async def test_job_reports_yesterday():
    container = InMemoryContainer()
    await container.post_repo.save(make_post(CONGRESS, 60, 30, 10, comments=4, day=_yesterday()))

    await Orchestrator(container)._run_daily_report()

    assert list(container.report_repo.reports) == [_yesterday()]


async def test_job_without_posts_does_not_raise():
    container = InMemoryContainer()

    await Orchestrator(container)._run_daily_report()

    assert container.report_repo.reports == {}
