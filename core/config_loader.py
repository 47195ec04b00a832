import yaml
import os
from typing import Optional, Dict
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./campus_os.db"


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    confession_rate_limit: str = "5/minute"  # slowapi limit string for new confessions


class ModerationConfig(BaseModel):
    """
    Thresholds for confession moderation.

    Lengths are measured on sanitized text.
    """
    min_length: int = 10
    max_length: int = 500
    spam_repetition_threshold: int = 10  # warn when a single word repeats more than this
    caps_ratio_threshold: float = 0.7
    caps_min_length: int = 20


class CompatibilityConfig(BaseModel):
    """
    Candidate ranking policy for matrimony matching.

    The scoring rubric itself is fixed; these only control which
    scored candidates are kept.
    """
    min_match_score: int = 40
    max_results: int = 10
    candidate_pool_size: int = 50  # active profiles fetched per search


class AlertsConfig(BaseModel):
    """Configuration for the proactive alert evaluator."""
    reminder_window_minutes: int = 15
    high_priority_minutes: int = 5
    attendance_stale_days: int = 7
    attendance_renotify_hours: int = 24

    # Polling cadence of the alert driver (main.py)
    poll_interval_seconds: int = 300


class NotificationConfig(BaseModel):
    """
    Configuration for alert delivery tracking.

    Controls how repeated alerts are suppressed across polling intervals.
    """
    deduplication_enabled: bool = True
    strategy: str = "default"  # "default" or "aggressive"
    resend_interval_hours: int = 24
    dismiss_expiry_hours: int = 24  # how long a dismissed alert stays hidden


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    moderation: ModerationConfig = Field(default_factory=ModerationConfig)
    compatibility: CompatibilityConfig = Field(default_factory=CompatibilityConfig)
    alerts: AlertsConfig = Field(default_factory=AlertsConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)


def _apply_env_overrides(data: Dict) -> Dict:
    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    env_host = os.environ.get("WEB_HOST")
    if env_host:
        data.setdefault('web', {})
        data['web']['host'] = env_host

    env_port = os.environ.get("WEB_PORT")
    if env_port:
        data.setdefault('web', {})
        data['web']['port'] = int(env_port)

    env_poll = os.environ.get("ALERT_POLL_INTERVAL_SECONDS")
    if env_poll:
        data.setdefault('alerts', {})
        data['alerts']['poll_interval_seconds'] = int(env_poll)

    return data


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    """
    Load application configuration.

    Reads the YAML file when present (falling back to the config.yaml at the
    project root), then applies environment variable overrides. A missing
    file yields the defaults.
    """
    if not config_path or not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)

    return AppConfig(**data)
