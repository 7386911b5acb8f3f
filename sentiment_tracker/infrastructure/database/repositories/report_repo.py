"""ReportRepository: Firebase Firestore implementation.

Firestore collection: 'daily_reports'
Document id: ISO report date (YYYY-MM-DD), so a date can only ever hold one
report. Source summaries live in the report's 'summaries' subcollection.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from google.cloud.firestore import transactional

from sentiment_tracker.domain.entities import DailyReport, ReportSourceSummary, SourceType
from sentiment_tracker.domain.exceptions import StorageError
from sentiment_tracker.infrastructure.database.firebase_client import run_in_thread


def _report_to_dict(r: DailyReport) -> dict[str, Any]:
    return {
        "report_date": r.report_date.isoformat(),
        "total_posts_analyzed": r.total_posts_analyzed,
        "total_comments_analyzed": r.total_comments_analyzed,
        "total_sources": r.total_sources,
        "overall_positive": r.overall_positive,
        "overall_negative": r.overall_negative,
        "overall_neutral": r.overall_neutral,
        "summary_text": r.summary_text,
        "summary_source": r.summary_source,
        "generated_at": r.generated_at,
    }


def _summary_to_dict(s: ReportSourceSummary, report_id: str) -> dict[str, Any]:
    return {
        "report_id": report_id,
        "source_type": s.source_type.value,
        "source_id": s.source_id,
        "source_name": s.source_name,
        "post_count": s.post_count,
        "comment_count": s.comment_count,
        "engagement_count": s.engagement_count,
        "avg_positive": s.avg_positive,
        "avg_negative": s.avg_negative,
        "avg_neutral": s.avg_neutral,
        "positive_remarks": s.positive_remarks,
        "negative_remarks": s.negative_remarks,
    }


def _report_from_doc(doc, summaries: list[ReportSourceSummary] | None = None) -> DailyReport:
    d = doc.to_dict()
    return DailyReport(
        id=doc.id,
        report_date=date.fromisoformat(d.get("report_date", doc.id)),
        total_posts_analyzed=d.get("total_posts_analyzed", 0),
        total_comments_analyzed=d.get("total_comments_analyzed", 0),
        total_sources=d.get("total_sources", 0),
        overall_positive=d.get("overall_positive", 0.0),
        overall_negative=d.get("overall_negative", 0.0),
        overall_neutral=d.get("overall_neutral", 0.0),
        summary_text=d.get("summary_text", ""),
        summary_source=d.get("summary_source", "algorithmic"),
        generated_at=d.get("generated_at") or datetime.utcnow(),
        source_summaries=summaries or [],
    )


def _summary_from_doc(doc) -> ReportSourceSummary:
    d = doc.to_dict()
    return ReportSourceSummary(
        report_id=d.get("report_id"),
        source_type=SourceType(d.get("source_type", "news_media")),
        source_id=d.get("source_id"),
        source_name=d.get("source_name", "Unknown"),
        post_count=d.get("post_count", 0),
        comment_count=d.get("comment_count", 0),
        engagement_count=d.get("engagement_count", 0),
        avg_positive=d.get("avg_positive", 0.0),
        avg_negative=d.get("avg_negative", 0.0),
        avg_neutral=d.get("avg_neutral", 0.0),
        positive_remarks=d.get("positive_remarks", ""),
        negative_remarks=d.get("negative_remarks", ""),
    )


class FirestoreReportRepository:
    COLLECTION = "daily_reports"
    SUMMARIES = "summaries"

    def __init__(self, db):
        self._db = db

    def _col(self):
        return self._db.collection(self.COLLECTION)

    async def upsert(self, report: DailyReport) -> DailyReport:
        report_id = report.report_date.isoformat()
        report_ref = self._col().document(report_id)
        summaries_ref = report_ref.collection(self.SUMMARIES)

        @transactional
        def _replace(transaction):
            # Reads must all happen before the first write
            snapshot = report_ref.get(transaction=transaction)
            old_children = list(summaries_ref.stream(transaction=transaction))

            data = _report_to_dict(report)
            data["created_at"] = (
                snapshot.to_dict().get("created_at", report.generated_at)
                if snapshot.exists
                else report.generated_at
            )

            for child in old_children:
                transaction.delete(child.reference)
            transaction.set(report_ref, data)
            for summary in report.source_summaries:
                transaction.set(summaries_ref.document(), _summary_to_dict(summary, report_id))

        def _upsert():
            try:
                _replace(self._db.transaction())
            except ValueError as e:
                # Raised once the transaction gave up retrying under contention
                raise StorageError(f"Report {report_id} could not be committed: {e}") from e
            report.id = report_id
            for summary in report.source_summaries:
                summary.report_id = report_id
            return report

        return await run_in_thread(_upsert)

    async def get_by_date(self, day: date) -> DailyReport | None:
        def _get():
            report_ref = self._col().document(day.isoformat())
            doc = report_ref.get()
            if not doc.exists:
                return None
            summaries = [
                _summary_from_doc(s) for s in report_ref.collection(self.SUMMARIES).stream()
            ]
            summaries.sort(key=lambda s: (-s.post_count, s.source_name))
            return _report_from_doc(doc, summaries)

        return await run_in_thread(_get)

    async def get_history(self, limit: int = 30) -> list[DailyReport]:
        def _get():
            query = (
                self._col()
                .order_by("report_date", direction="DESCENDING")
                .limit(limit)
            )
            return [_report_from_doc(d) for d in query.stream()]

        return await run_in_thread(_get)

    async def delete(self, day: date) -> bool:
        def _delete():
            report_ref = self._col().document(day.isoformat())
            if not report_ref.get().exists:
                return False
            batch = self._db.batch()
            for child in report_ref.collection(self.SUMMARIES).stream():
                batch.delete(child.reference)
            batch.delete(report_ref)
            batch.commit()
            return True

        return await run_in_thread(_delete)
