"""SourceDirectory: Firebase Firestore implementation.

Read-only lookups against the registry collections maintained by the
source management screens: 'political_parties', 'news_media', 'candidates'.
"""

from __future__ import annotations

from sentiment_tracker.domain.entities import CandidateSource, NewsMediaSource, PartySource, Source
from sentiment_tracker.infrastructure.database.firebase_client import run_in_thread


class FirestoreSourceDirectory:
    PARTIES = "political_parties"
    NEWS_MEDIA = "news_media"
    CANDIDATES = "candidates"

    def __init__(self, db):
        self._db = db

    def _get_doc(self, collection: str, doc_id: str) -> dict | None:
        doc = self._db.collection(collection).document(doc_id).get()
        return doc.to_dict() if doc.exists else None

    async def get_name(self, source: Source) -> str | None:
        if isinstance(source, PartySource):
            collection, field = self.PARTIES, "name_en"
        elif isinstance(source, NewsMediaSource):
            collection, field = self.NEWS_MEDIA, "name_en"
        elif isinstance(source, CandidateSource):
            collection, field = self.CANDIDATES, "name"
        else:
            raise TypeError(f"Unsupported source: {source!r}")

        def _get():
            data = self._get_doc(collection, source.id)
            return data.get(field) if data else None

        return await run_in_thread(_get)

    async def get_party_name(self, candidate_id: str) -> str | None:
        def _get():
            data = self._get_doc(self.CANDIDATES, candidate_id)
            return (data or {}).get("party_name") or None

        return await run_in_thread(_get)
