"""
Patent Insights Configuration
patent_insights/config.py

Connection settings for the remote patent API, loaded from environment
variables (or a .env file).
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, SecretStr, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.patents.com/v1"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


class ApiConfig(BaseModel):
    """Base URL and bearer token for the patent API."""

    base_url: str = DEFAULT_BASE_URL
    bearer_token: SecretStr = SecretStr("")
    timeout: Optional[float] = None  # None = wait indefinitely

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_base_url(cls, v):
        return (v or "").strip()

    @field_validator("bearer_token", mode="before")
    @classmethod
    def strip_token(cls, v):
        if isinstance(v, SecretStr):
            v = v.get_secret_value()
        return (v or "").strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and bool(self.bearer_token.get_secret_value())

    def with_overrides(
        self,
        base_url: Optional[str] = None,
        bearer_token: Optional[str] = None,
    ) -> "ApiConfig":
        """Copy with the given non-empty values replaced."""
        overrides = {}
        if base_url:
            overrides["base_url"] = base_url
        if bearer_token:
            overrides["bearer_token"] = bearer_token
        if not overrides:
            return self
        return ApiConfig(**{**self.model_dump(), **overrides})

    def masked_token(self) -> str:
        """Short prefix of the token, safe for logs."""
        token = self.bearer_token.get_secret_value()
        if len(token) <= 12:
            return "***"
        return f"{token[:6]}..."


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"PATENT_API_TIMEOUT must be a number of seconds, got {raw!r}") from None
    return timeout if timeout > 0 else None


def get_api_config() -> ApiConfig:
    """Build the API configuration from the environment."""
    return ApiConfig(
        base_url=os.getenv("PATENT_API_BASE_URL", DEFAULT_BASE_URL),
        bearer_token=os.getenv("PATENT_API_BEARER_TOKEN", ""),
        timeout=_parse_timeout(os.getenv("PATENT_API_TIMEOUT")),
    )


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
