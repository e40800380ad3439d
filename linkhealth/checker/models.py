"""Data models for the link checking pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ValidationTarget:
    """A relative link resolved against the environment under test."""

    url: str
    full_url: str

    @classmethod
    def for_host(cls, url: str, host_url: str) -> ValidationTarget:
        return cls(url=url, full_url=host_url + url)


@dataclass
class ValidationResult:
    """Outcome of a single redirect check.

    ``message`` holds the response body on success and the diagnostic text on
    failure.  ``status_code`` is ``None`` when no response was received.
    """

    url: str
    success: bool
    message: str
    full_url: str = ""
    status_code: int | None = None


@dataclass
class RewriteOutcome:
    """The rewritten document plus bookkeeping from the rewrite pass."""

    document: str
    glyphs_changed: int = 0
    unmatched_urls: List[str] = field(default_factory=list)
