"""Settings for filedock, loaded from FILEDOCK_* environment variables."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from filedock.auth.app_info import OAuthAppInfo

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class FileDockSettings(BaseSettings):
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = ""

    api_base_url: str = "http://localhost:5000"
    session_token: Optional[str] = None
    request_timeout_seconds: float = 30.0

    token_store_path: str = Field(default="~/.filedock/tokens.json")
    walker_max_concurrency: int = Field(default=16, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FILEDOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def oauth_app_info(self) -> OAuthAppInfo:
        """Build the OAuth client registration. Raises ValueError if incomplete."""
        return OAuthAppInfo(
            client_id=self.google_client_id,
            client_secret=self.google_client_secret,
            redirect_uri=self.google_redirect_uri,
        )


@lru_cache
def get_settings() -> FileDockSettings:
    return FileDockSettings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler to the package logger.

    Safe to call repeatedly; only the level is updated after the first call.
    """
    logger = logging.getLogger("filedock")
    level_name = (level or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(log_level)
    return logger
