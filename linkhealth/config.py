"""Centralised settings for the link health checker.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).  Command-line options
take precedence over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Confluence (document source / sink)
    # ------------------------------------------------------------------
    confluence_url: str = field(
        default_factory=lambda: os.environ.get(
            "CONFLUENCE_URL", "https://blubb.atlassian.net/wiki"
        )
    )
    confluence_content_id: str = field(
        default_factory=lambda: os.environ.get("CONFLUENCE_CONTENT_ID", "2428384")
    )
    confluence_username: str = field(
        default_factory=lambda: os.environ.get("CONFLUENCE_USERNAME", "")
    )
    confluence_password: str = field(
        default_factory=lambda: os.environ.get("CONFLUENCE_PASSWORD", "")
    )

    # ------------------------------------------------------------------
    # Target environment
    # ------------------------------------------------------------------
    host_url: str = field(
        default_factory=lambda: os.environ.get("HOST_URL", "https://google.com")
    )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    max_concurrent_checks: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_CHECKS", "8"))
    )
    require_ok_status: bool = field(
        default_factory=lambda: _env_flag("REQUIRE_OK_STATUS")
    )


# Module-level singleton, import this everywhere:
#   from linkhealth.config import settings
settings = Settings()
