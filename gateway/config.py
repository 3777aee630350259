"""Centralised settings for the accessibility gateway.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Completion service
    # ------------------------------------------------------------------
    completion_api_url: str = field(
        default_factory=lambda: os.environ.get(
            "COMPLETION_API_URL", "https://router.huggingface.co/v1/chat/completions"
        )
    )
    completion_model: str = field(
        default_factory=lambda: os.environ.get(
            "COMPLETION_MODEL", "Qwen/Qwen2.5-72B-Instruct:fastest"
        )
    )
    huggingface_api_key: str = field(
        default_factory=lambda: os.environ.get("HUGGINGFACE_API_KEY", "")
    )
    completion_temperature: float = field(
        default_factory=lambda: float(os.environ.get("COMPLETION_TEMPERATURE", "0.3"))
    )
    rewrite_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("REWRITE_MAX_TOKENS", "2048"))
    )
    summary_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("SUMMARY_MAX_TOKENS", "512"))
    )
    rewrite_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REWRITE_TIMEOUT", "45.0"))
    )
    summary_completion_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SUMMARY_COMPLETION_TIMEOUT", "55.0"))
    )

    # ------------------------------------------------------------------
    # Remote fetch
    # ------------------------------------------------------------------
    page_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_FETCH_TIMEOUT", "15.0"))
    )
    summary_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SUMMARY_FETCH_TIMEOUT", "12.0"))
    )

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    summary_char_budget: int = field(
        default_factory=lambda: int(os.environ.get("SUMMARY_CHAR_BUDGET", "6000"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


def configure_logging(level: str | None = None) -> None:
    """Install the root log handler used by the API server and the CLI."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Module-level singleton; import this everywhere:
#   from gateway.config import settings
settings = Settings()
