from datetime import datetime

import pytest

from fakes import REPORT_DAY, FakeFirestore
from sentiment_tracker.domain.entities import DailyReport, ReportSourceSummary, SourceType
from sentiment_tracker.domain.exceptions import StorageError
from sentiment_tracker.infrastructure.database.repositories.report_repo import FirestoreReportRepository

REPORT_PATH = ("daily_reports", "2026-02-14")


def _report(generated_at: datetime, *names: str, positive: float = 50.0) -> DailyReport:
    return DailyReport(
        report_date=REPORT_DAY,
        total_posts_analyzed=len(names),
        overall_positive=positive,
        summary_text="briefing",
        generated_at=generated_at,
        source_summaries=[
            ReportSourceSummary(SourceType.POLITICAL_PARTY, name, source_id=f"party-{i}", post_count=1)
            for i, name in enumerate(names)
        ],
    )


async def test_upsert_writes_report_keyed_by_date():
    db = FakeFirestore()
    repo = FirestoreReportRepository(db)

    saved = await repo.upsert(_report(datetime(2026, 2, 15, 0, 30), "Nepali Congress", "CPN-UML"))

    assert saved.id == "2026-02-14"
    assert all(s.report_id == "2026-02-14" for s in saved.source_summaries)
    assert db.docs[REPORT_PATH]["report_date"] == "2026-02-14"
    assert sorted(c["source_name"] for c in db.children(*REPORT_PATH, "summaries")) == ["CPN-UML", "Nepali Congress"]
    assert db.commits == 1


async def test_regeneration_replaces_children_and_keeps_created_at():
    db = FakeFirestore()
    repo = FirestoreReportRepository(db)
    first_run = datetime(2026, 2, 15, 0, 30)
    second_run = datetime(2026, 2, 15, 9, 0)

    await repo.upsert(_report(first_run, "Nepali Congress", "CPN-UML", "Kantipur"))
    await repo.upsert(_report(second_run, "Nepali Congress", positive=72.5))

    report_docs = [p for p in db.docs if p[0] == "daily_reports" and len(p) == 2]
    children = db.children(*REPORT_PATH, "summaries")
    assert report_docs == [REPORT_PATH]
    assert [c["source_name"] for c in children] == ["Nepali Congress"]
    assert db.docs[REPORT_PATH]["created_at"] == first_run
    assert db.docs[REPORT_PATH]["generated_at"] == second_run
    assert db.docs[REPORT_PATH]["overall_positive"] == 72.5

    stored = await repo.get_by_date(REPORT_DAY)
    assert [s.source_name for s in stored.source_summaries] == ["Nepali Congress"]
    assert stored.overall_positive == 72.5


async def test_exhausted_transaction_is_storage_error():
    db = FakeFirestore(abort_commits=True)
    repo = FirestoreReportRepository(db)

    with pytest.raises(StorageError):
        await repo.upsert(_report(datetime(2026, 2, 15), "Nepali Congress"))

    (txn,) = db.transactions
    assert txn.attempts == 2
    assert txn.rolled_back
    assert db.docs == {}


async def test_delete_removes_report_and_children():
    db = FakeFirestore()
    repo = FirestoreReportRepository(db)
    await repo.upsert(_report(datetime(2026, 2, 15), "Nepali Congress", "CPN-UML"))

    assert await repo.delete(REPORT_DAY) is True
    assert db.docs == {}
    assert await repo.delete(REPORT_DAY) is False

