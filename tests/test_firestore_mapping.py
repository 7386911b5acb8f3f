from datetime import date, datetime

from fakes import CANDIDATE_A, make_post
from sentiment_tracker.domain.entities import DailyReport, PopularComment, ReportSourceSummary, SourceType
from sentiment_tracker.infrastructure.database.repositories.post_repo import _post_from_doc, _post_to_dict
from sentiment_tracker.infrastructure.database.repositories.report_repo import (
    _report_from_doc,
    _report_to_dict,
    _summary_from_doc,
    _summary_to_dict,
)


class FakeDoc:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data
        self.exists = True

    def to_dict(self):
        return dict(self._data)


def test_post_document_keeps_source_and_date():
    post = make_post(
        CANDIDATE_A,
        55.5,
        30,
        14.5,
        comments=42,
        url="https://x.com/p/1",
        engagement_count=17,
        popular_comments=[PopularComment("great", likes=5, shares=4, engagement_score=17)],
        created_at=datetime(2026, 2, 14, 9, 30),
    )

    data = _post_to_dict(post)
    restored = _post_from_doc(FakeDoc("abc", data))

    assert data["source_type"] == "candidate"
    assert data["published_date"] == "2026-02-14"
    assert restored.id == "abc"
    assert restored.source == CANDIDATE_A
    assert restored.published_date == date(2026, 2, 14)
    assert restored.popular_comments == post.popular_comments
    assert restored.comment_count == 42


def test_legacy_post_document_with_timestamp_date():
    doc = FakeDoc("old", {"source_type": "political_party", "source_id": "party-1", "published_date": "2026-02-14T18:00:00"})

    post = _post_from_doc(doc)

    assert post.published_date == date(2026, 2, 14)
    assert post.popular_comments == []
    assert post.positive_pct == 0.0


def test_report_document_id_is_its_date():
    report = DailyReport(report_date=date(2026, 2, 14), overall_positive=61.2, summary_source="ai")
    summary = ReportSourceSummary(SourceType.CANDIDATE, "CPN-UML Candidates", post_count=2)

    restored = _report_from_doc(FakeDoc("2026-02-14", _report_to_dict(report)), [summary])
    restored_summary = _summary_from_doc(FakeDoc("s1", _summary_to_dict(summary, "2026-02-14")))

    assert restored.id == "2026-02-14"
    assert restored.report_date == report.report_date
    assert restored.summary_source == "ai"
    assert restored.source_summaries == [summary]
    assert restored_summary.report_id == "2026-02-14"
    assert restored_summary.source_id is None
    assert restored_summary.source_type == SourceType.CANDIDATE
