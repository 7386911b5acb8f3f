from datetime import date, timedelta

from fakes import REPORT_DAY
from sentiment_tracker.application.use_cases.report_history import ReportHistoryUseCase
from sentiment_tracker.domain.entities import DailyReport, ReportSourceSummary, SourceType


async def _store(report_repo, day, positive, summaries=()):
    await report_repo.upsert(
        DailyReport(
            report_date=day,
            total_posts_analyzed=3,
            total_comments_analyzed=40,
            total_sources=2,
            overall_positive=positive,
            overall_negative=100 - positive - 10,
            overall_neutral=10,
            source_summaries=list(summaries),
        )
    )


async def test_history_newest_first_without_summaries(report_repo):
    summary = ReportSourceSummary(SourceType.POLITICAL_PARTY, "Nepali Congress", source_id="party-1", post_count=3)
    for offset in range(3):
        await _store(report_repo, REPORT_DAY - timedelta(days=offset), 50, [summary])
    use_case = ReportHistoryUseCase(report_repo, default_limit=2)

    history = await use_case.get_history()

    assert [r.report_date for r in history] == [REPORT_DAY, REPORT_DAY - timedelta(days=1)]
    assert all(r.source_summaries == [] for r in history)
    assert len((await use_case.get_by_date(REPORT_DAY)).source_summaries) == 1


async def test_trends_oldest_first(report_repo):
    for offset, positive in enumerate([60, 50, 40]):
        await _store(report_repo, REPORT_DAY - timedelta(days=offset), positive)
    use_case = ReportHistoryUseCase(report_repo)

    trends = await use_case.get_trends(days=2)

    assert trends["labels"] == ["2026-02-13", "2026-02-14"]
    positive = next(d for d in trends["datasets"] if d["label"] == "Positive")
    assert positive["data"] == [50, 60]


async def test_chart_data(report_repo):
    summaries = [
        ReportSourceSummary(SourceType.POLITICAL_PARTY, "Nepali Congress", avg_positive=70, avg_negative=20),
        ReportSourceSummary(SourceType.NEWS_MEDIA, "Kantipur", avg_positive=30, avg_negative=50),
    ]
    await _store(report_repo, REPORT_DAY, 55, summaries)
    use_case = ReportHistoryUseCase(report_repo)

    charts = await use_case.get_chart_data(REPORT_DAY)

    assert charts["sentiment_pie"]["data"] == [55, 35, 10]
    assert charts["source_bar"]["labels"] == ["Nepali Congress", "Kantipur"]
    assert charts["stats"]["report_date"] == "2026-02-14"
    assert await use_case.get_chart_data(date(2020, 1, 1)) is None


async def test_delete(report_repo):
    await _store(report_repo, REPORT_DAY, 50)
    use_case = ReportHistoryUseCase(report_repo)

    assert await use_case.delete(REPORT_DAY) is True
    assert await use_case.delete(REPORT_DAY) is False
    assert await use_case.get_by_date(REPORT_DAY) is None
