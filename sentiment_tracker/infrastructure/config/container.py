"""Dependency injection container.

All concrete implementations are assembled here, at the composition root,
and injected into the use cases. Nothing below this layer reaches for a
global client.
"""

from __future__ import annotations

from sentiment_tracker.application.use_cases.analyze_and_store import AnalyzeAndStoreUseCase
from sentiment_tracker.application.use_cases.entity_stats import EntityStatsUseCase
from sentiment_tracker.application.use_cases.generate_daily_report import GenerateDailyReportUseCase
from sentiment_tracker.application.use_cases.manage_posts import ManagePostsUseCase
from sentiment_tracker.application.use_cases.report_history import ReportHistoryUseCase
from sentiment_tracker.application.use_cases.summarize_report import ReportNarrator
from sentiment_tracker.domain.value_objects.sentiment_label import SentimentLabelPolicy
from sentiment_tracker.infrastructure.ai.openai_classifier import OpenAISentimentClassifier
from sentiment_tracker.infrastructure.ai.openai_narrator import OpenAINarrativeGenerator
from sentiment_tracker.infrastructure.config.settings import AppConfig, Settings
from sentiment_tracker.infrastructure.database.repositories.post_repo import (
    FirestoreCommentRepository,
    FirestorePostRepository,
)
from sentiment_tracker.infrastructure.database.repositories.report_repo import (
    FirestoreReportRepository,
)
from sentiment_tracker.infrastructure.database.repositories.source_directory import (
    FirestoreSourceDirectory,
)


class Container:
    """Application dependency container."""

    def __init__(
        self,
        settings: Settings,
        app_config: AppConfig,
        firestore_db,
    ):
        self.settings = settings
        self.config = app_config

        # ─── Repositories (Firebase Firestore) ───
        self._init_repositories(firestore_db)

        # ─── External AI services (disabled without an API key) ───
        self._init_ai_services()

    def _init_repositories(self, db) -> None:
        self.post_repo = FirestorePostRepository(db)
        self.comment_repo = FirestoreCommentRepository(db)
        self.report_repo = FirestoreReportRepository(db)
        self.source_directory = FirestoreSourceDirectory(db)

    def _init_ai_services(self) -> None:
        self.narrative_generator = None
        self.classifier = None
        if self.settings.openai_api_key:
            self.narrative_generator = OpenAINarrativeGenerator(
                api_key=self.settings.openai_api_key,
                config=self.config.ai,
            )
            self.classifier = OpenAISentimentClassifier(
                api_key=self.settings.openai_api_key,
                config=self.config.ai,
            )

    # ─── Use case factories ───

    def analyze_and_store_use_case(self) -> AnalyzeAndStoreUseCase:
        return AnalyzeAndStoreUseCase(
            post_repo=self.post_repo,
            classifier=self.classifier,
            popular_limit=self.config.report.popular_comment_limit,
            percentage_tolerance=self.config.report.percentage_tolerance,
            timezone=self.config.timezone,
        )

    def manage_posts_use_case(self) -> ManagePostsUseCase:
        return ManagePostsUseCase(post_repo=self.post_repo, comment_repo=self.comment_repo)

    def entity_stats_use_case(self) -> EntityStatsUseCase:
        return EntityStatsUseCase(post_repo=self.post_repo, source_directory=self.source_directory)

    def report_narrator(self) -> ReportNarrator:
        return ReportNarrator(
            generator=self.narrative_generator,
            label_policy=SentimentLabelPolicy(margin=self.config.report.sentiment_margin),
            top_sources=self.config.report.top_sources_in_prompt,
        )

    def generate_daily_report_use_case(self) -> GenerateDailyReportUseCase:
        return GenerateDailyReportUseCase(
            post_repo=self.post_repo,
            report_repo=self.report_repo,
            source_directory=self.source_directory,
            narrator=self.report_narrator(),
        )

    def report_history_use_case(self) -> ReportHistoryUseCase:
        return ReportHistoryUseCase(
            report_repo=self.report_repo,
            default_limit=self.config.report.history_limit,
        )
