from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic_settings import BaseSettings

from sentiment_tracker.domain.value_objects.engagement import POPULAR_COMMENT_LIMIT

logger = logging.getLogger(__name__)

_DAILY_TIME = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


# ──────────────────────────────────────────
# Secrets from the environment (.env)
# ──────────────────────────────────────────
class Settings(BaseSettings):
    openai_api_key: str = ""

    # Firebase
    firebase_credential_path: str = "firebase-service-account.json"
    firebase_project_id: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# ──────────────────────────────────────────
# App configuration (config/settings.yaml)
# ──────────────────────────────────────────
class AIConfig:
    def __init__(self, data: dict[str, Any]):
        self.model_narrative: str = data.get("model_narrative", "gpt-4o-mini")
        self.model_classifier: str = data.get("model_classifier", "gpt-4o-mini")
        self.narrative_max_tokens: int = data.get("narrative_max_tokens", 1500)
        self.classifier_max_tokens: int = data.get("classifier_max_tokens", 2048)
        # Comments beyond this are counted but not sent to the model
        self.max_comments: int = data.get("max_comments", 2000)


class ReportConfig:
    def __init__(self, data: dict[str, Any]):
        self.daily_time: str = data.get("daily_time", "00:30")
        self.schedule_enabled: bool = data.get("schedule_enabled", False)
        self.top_sources_in_prompt: int = data.get("top_sources_in_prompt", 5)
        self.sentiment_margin: float = data.get("sentiment_margin", 10.0)
        self.popular_comment_limit: int = data.get("popular_comment_limit", 10)
        self.percentage_tolerance: float = data.get("percentage_tolerance", 1.0)
        self.history_limit: int = data.get("history_limit", 30)


class WebConfig:
    def __init__(self, data: dict[str, Any]):
        self.host: str = data.get("host", "0.0.0.0")
        self.port: int = data.get("port", 8000)


class AppConfig:
    """Full app configuration loaded from YAML."""

    def __init__(self, data: dict[str, Any]):
        self.name: str = data.get("app", {}).get("name", "Political Sentiment Tracker")
        self.timezone: str = data.get("app", {}).get("timezone", "Asia/Kathmandu")

        self.ai = AIConfig(data.get("ai", {}))
        self.report = ReportConfig(data.get("report", {}))
        self.web = WebConfig(data.get("web", {}))


def validate_app_config(config: AppConfig) -> AppConfig:
    """Reject values that would only fail later, at schedule or analysis time."""
    report = config.report
    if not _DAILY_TIME.match(str(report.daily_time)):
        raise ValueError(f"report.daily_time must be HH:MM, got {report.daily_time!r}")
    if not 0 <= report.popular_comment_limit <= POPULAR_COMMENT_LIMIT:
        raise ValueError(
            f"report.popular_comment_limit must be between 0 and {POPULAR_COMMENT_LIMIT}, "
            f"got {report.popular_comment_limit}"
        )
    if report.sentiment_margin < 0 or report.percentage_tolerance < 0:
        raise ValueError("report.sentiment_margin and report.percentage_tolerance cannot be negative")
    try:
        ZoneInfo(config.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"app.timezone {config.timezone!r} is not a known timezone") from e
    return config


def load_app_config(path: str = "config/settings.yaml") -> AppConfig:
    """Load and validate the YAML config file. Missing file means defaults."""
    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"{config_path} not found, using built-in defaults")
        return validate_app_config(AppConfig({}))

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level")

    config = validate_app_config(AppConfig(data))
    logger.info(
        f"Config loaded from {config_path} (timezone {config.timezone}, "
        f"scheduler {'on at ' + config.report.daily_time if config.report.schedule_enabled else 'off'})"
    )
    return config
