"""Runtime configuration, read from environment variables once at start-up."""

import os
from dataclasses import dataclass

DEFAULT_KEY_PREFIX = "game:"
DEFAULT_SESSION_TTL_SECONDS = 86400  # 24 hours


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Centralized runtime configuration for the backend."""

    # empty: keep sessions in process memory
    database_url: str = ""
    key_prefix: str = DEFAULT_KEY_PREFIX
    session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    log_level: str = "INFO"
    echo_sql: bool = False


def load_config(prefix: str = "") -> AppConfig:
    """Load application configuration from environment variables."""

    def _get_env(key: str, default: str = "") -> str:
        return os.getenv(f"{prefix}{key}", default)

    def _parse_int(raw: str, fallback: int) -> int:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return fallback
        return value if value > 0 else fallback

    return AppConfig(
        database_url=_get_env("DATABASE_URL"),
        key_prefix=_get_env("SESSION_KEY_PREFIX", DEFAULT_KEY_PREFIX),
        session_ttl_seconds=_parse_int(
            _get_env("SESSION_TTL_SECONDS"), DEFAULT_SESSION_TTL_SECONDS
        ),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        echo_sql=_get_env("ECHO_SQL", "").lower() in ("1", "true", "yes"),
    )
