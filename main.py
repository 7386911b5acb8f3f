"""Political Sentiment Tracker: entry point.

1. Load settings (.env + config/settings.yaml)
2. Initialize Firebase Firestore
3. Assemble the dependency container
4. Start the scheduler (optional)
5. Start the web server

`generate-report` builds one daily report from the command line instead.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import uvicorn

from sentiment_tracker.application.use_cases.scheduler import Orchestrator
from sentiment_tracker.domain.exceptions import DomainError, NoDataError
from sentiment_tracker.domain.value_objects.report_date import normalize_report_date
from sentiment_tracker.infrastructure.config.container import Container
from sentiment_tracker.infrastructure.config.settings import AppConfig, Settings, load_app_config
from sentiment_tracker.infrastructure.database.firebase_client import init_firebase
from sentiment_tracker.presentation.web.app import create_app

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    Path("logs").mkdir(exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("logs/app.log", encoding="utf-8"),
        ],
    )


def build_container(settings: Settings, config: AppConfig) -> Container:
    db = init_firebase(
        credential_path=settings.firebase_credential_path,
        project_id=settings.firebase_project_id or None,
    )
    return Container(settings=settings, app_config=config, firestore_db=db)


async def run_server(
    settings: Settings,
    config: AppConfig,
    no_scheduler: bool = False,
) -> None:
    """Run the web server (and the report scheduler)."""
    container = build_container(settings, config)

    orchestrator = None
    if config.report.schedule_enabled and not no_scheduler:
        orchestrator = Orchestrator(container)
        orchestrator.setup_jobs()
        orchestrator.start()

    app = create_app(container)
    server_config = uvicorn.Config(
        app,
        host=config.web.host,
        port=config.web.port,
        log_level="info",
    )
    server = uvicorn.Server(server_config)

    logger.info(
        f"Server starting: http://{config.web.host}:{config.web.port} "
        f"(scheduler: {'ON' if orchestrator else 'OFF'})"
    )

    try:
        await server.serve()
    finally:
        if orchestrator:
            orchestrator.stop()


async def run_generate_report(settings: Settings, config: AppConfig, report_date: str | None) -> int:
    """Generate one daily report and print its summary."""
    container = build_container(settings, config)
    try:
        day = normalize_report_date(report_date, config.timezone)
        report = await container.generate_daily_report_use_case().execute(day)
    except NoDataError as e:
        print(f"Nothing to report: {e}")
        return 0
    except DomainError as e:
        print(f"Report generation failed: {e}")
        return 1

    print(
        f"Report {report.report_date.isoformat()}: {report.total_posts_analyzed} posts, "
        f"{report.total_sources} sources, summary by {report.summary_source}\n"
    )
    print(report.summary_text)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Political Sentiment Tracker")
    subparsers = parser.add_subparsers(dest="command", help="command to run")

    serve_parser = subparsers.add_parser("serve", help="start the web server")
    serve_parser.add_argument("--no-scheduler", action="store_true", help="start without the report scheduler")

    report_parser = subparsers.add_parser("generate-report", help="generate a daily report now")
    report_parser.add_argument("date", nargs="?", default=None, help="YYYY-MM-DD (default: today)")

    args = parser.parse_args()

    setup_logging()
    settings = Settings()
    try:
        config = load_app_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        raise SystemExit(2) from e

    if args.command == "serve":
        asyncio.run(run_server(settings, config, args.no_scheduler))
    elif args.command == "generate-report":
        raise SystemExit(asyncio.run(run_generate_report(settings, config, args.date)))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
