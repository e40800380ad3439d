"""Dataclass models for Confluence REST payloads.

These are plain Python objects.  The client serialises / deserialises to and
from the JSON the ``/rest/api/content`` endpoints speak.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass
class PageContent:
    id: str
    type: str
    title: str
    version: int
    body: str
    space_key: str | None = None

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PageContent:
        """Build a page from a ``GET /content/{id}`` response body."""
        return cls(
            id=str(data["id"]),
            type=data.get("type", "page"),
            title=data.get("title", ""),
            version=int(data.get("version", {}).get("number", 0)),
            body=data.get("body", {}).get("storage", {}).get("value", ""),
            space_key=data.get("space", {}).get("key"),
        )

    def next_version(self, body: str) -> PageContent:
        """Return a copy carrying *body* and the incremented version number."""
        return replace(self, body=body, version=self.version + 1)

    def to_update_payload(self) -> dict[str, Any]:
        """Serialise for ``PUT /content/{id}``; ``version`` must already be bumped."""
        payload: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "version": {"number": self.version},
            "body": {
                "storage": {"value": self.body, "representation": "storage"}
            },
        }
        if self.space_key:
            payload["space"] = {"key": self.space_key}
        return payload
