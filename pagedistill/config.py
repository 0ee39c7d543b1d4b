"""Process-wide settings, read once from the environment at startup.

The extraction and validation core never reads ``os.environ``; the HTTP
service and the CLI build a :class:`Settings` and pass it down.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from pagedistill.errors import ConfigurationError

DEFAULT_MODEL = "google/gemini-2.0-flash-001"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_BACKEND_URL = "https://openrouter.ai/api/v1"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class Settings:
    """Immutable service configuration.

    Attributes:
        api_key:       Generation backend credential (``OPENROUTER_API_KEY``).
                       Empty means requests that need the backend fail with
                       :class:`~pagedistill.errors.ConfigurationError`.
        default_model: Model used when a request names none (``DISTILL_MODEL``).
        backend_url:   Base URL of the chat-completions API (``OPENROUTER_BASE_URL``).
        host, port:    Listening address (``HOST``, ``PORT``).
        log_level:     Root log level (``LOG_LEVEL``).
        user_agent:    User-Agent for source page fetches (``DISTILL_USER_AGENT``).
    """

    api_key: str = ""
    default_model: str = DEFAULT_MODEL
    backend_url: str = DEFAULT_BACKEND_URL
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        port_raw = env.get("PORT", "").strip() or "3000"
        try:
            port = int(port_raw)
        except ValueError as exc:
            raise ConfigurationError(f"PORT must be an integer, got {port_raw!r}") from exc

        log_level = (env.get("LOG_LEVEL", "").strip() or "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}",
            )

        return cls(
            api_key=env.get("OPENROUTER_API_KEY", "").strip(),
            default_model=env.get("DISTILL_MODEL", "").strip() or DEFAULT_MODEL,
            backend_url=(env.get("OPENROUTER_BASE_URL", "").strip() or DEFAULT_BACKEND_URL).rstrip("/"),
            host=env.get("HOST", "").strip() or "0.0.0.0",
            port=port,
            log_level=log_level,
            user_agent=env.get("DISTILL_USER_AGENT", "").strip() or DEFAULT_USER_AGENT,
        )
