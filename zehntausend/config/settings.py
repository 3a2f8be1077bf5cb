"""
Zehntausend - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

_SECRET_KEYS = (
    "GEMINI_API_KEY",
    "CUSTOM_AGENT_URI",
    "WINNING_SCORE",
    "SCORING_VARIANT",
    "DEBUG",
    "LOG_LEVEL",
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        # No streamlit runtime or no secrets file: plain env vars only
        pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game
    winning_score: int = 10000
    scoring_variant: Literal["doubling", "fixed_table"] = "doubling"

    # Hosted model agent (Gemini REST API)
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-3-flash-preview"
    gemini_endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout: float = 60.0
    gemini_max_retries: int = 50
    gemini_base_delay: float = 1.0
    gemini_max_delay: float = 16.0

    # Remote HTTP agent
    custom_agent_uri: str | None = None
    custom_agent_timeout: float = 15.0
    custom_max_network_retries: int = 5
    custom_base_delay: float = 1.0
    custom_max_delay: float = 30.0
    custom_max_legal_retries: int = 3

    # Pacing (seconds)
    greedy_think_delay: float = 1.0
    move_pause: float = 1.0
    bust_pause: float = 4.0

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Point the root logger at stderr using the configured level."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()

    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_zehntausend", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._zehntausend = True  # type: ignore[attr-defined]
        root.addHandler(handler)
