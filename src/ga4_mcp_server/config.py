"""
Configuration for the GA4 MCP Server.

Settings are read once from the environment (and an optional `.env` file)
at startup and never change afterwards.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_START_DATE = "30daysAgo"
DEFAULT_END_DATE = "today"
DEFAULT_REALTIME_METRIC = "activeUsers"

READONLY_SCOPE = "https://www.googleapis.com/auth/analytics.readonly"

_TRUTHY = {"1", "true", "yes", "on"}


def _log_level(value: str) -> str:
    """Return a level name logging accepts, falling back to INFO."""
    level = value.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return "INFO"


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults shared by every tool call."""

    default_property_id: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    quiet: bool = False
    log_level: str = "INFO"

    @property
    def has_service_account(self) -> bool:
        return bool(self.client_email and self.private_key)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Variables already present in the environment win over `.env` entries.
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        private_key = os.getenv("GOOGLE_PRIVATE_KEY")
        if private_key:
            # Keys pasted into env files usually carry escaped newlines
            private_key = private_key.replace("\\n", "\n")

        return cls(
            default_property_id=os.getenv("GA_PROPERTY_ID") or None,
            client_email=os.getenv("GOOGLE_CLIENT_EMAIL") or None,
            private_key=private_key or None,
            quiet=os.getenv("GA4_MCP_QUIET", "").strip().lower() in _TRUTHY,
            log_level=_log_level(os.getenv("GA4_MCP_LOG_LEVEL", "INFO")),
        )
