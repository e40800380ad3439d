"""Thin Confluence REST client: fetch a page and save a new version of it."""

from __future__ import annotations

import httpx

from linkhealth.config import settings
from linkhealth.confluence.models import PageContent

DEFAULT_EXPAND = ("history", "space", "version", "body.storage")


class ConfluenceError(RuntimeError):
    """Raised when Confluence cannot be read from or written to."""


class ConfluenceClient:
    """Read and update pages through ``{base_url}/rest/api/content``.

    Credentials are sent as HTTP basic auth when a username is configured.
    Use as a context manager, or call :meth:`close` when done.
    """

    def __init__(
        self,
        base_url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.confluence_url).rstrip("/")
        username = settings.confluence_username if username is None else username
        password = settings.confluence_password if password is None else password

        self._client = httpx.Client(
            auth=(username, password) if username else None,
            headers={"Accept": "application/json"},
            timeout=settings.request_timeout if timeout is None else timeout,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ConfluenceClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Content API
    # ------------------------------------------------------------------
    def _content_url(self, content_id: str) -> str:
        return f"{self.base_url}/rest/api/content/{content_id}"

    def _send(self, method: str, url: str, **kwargs) -> dict:
        try:
            resp = self._client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            raise ConfluenceError(
                f"{method} {url} failed with HTTP {exc.response.status_code}: "
                f"{exc.response.text[:200]}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ConfluenceError(f"{method} {url} failed: {exc}") from exc

    def get_content(
        self,
        content_id: str,
        expand: tuple[str, ...] = DEFAULT_EXPAND,
    ) -> PageContent:
        """Fetch page *content_id* including its storage-format body.

        Raises:
            ConfluenceError: On transport errors, non-2xx responses or a
                response that is not JSON.
        """
        url = self._content_url(content_id)
        print(f"[CONFLUENCE] Fetching content {content_id} …")
        data = self._send("GET", url, params={"expand": ",".join(expand)})
        page = PageContent.from_api(data)
        print(f"[CONFLUENCE] Got {page.title!r} (version {page.version}).")
        return page

    def update_content(self, page: PageContent) -> PageContent:
        """Store *page* as a new version and return the page Confluence saved.

        *page* must already carry the incremented version number, see
        :meth:`PageContent.next_version`.

        Raises:
            ConfluenceError: If the update is rejected (e.g. a version
                conflict) or Confluence is unreachable.
        """
        url = self._content_url(page.id)
        print(f"[CONFLUENCE] Saving {page.title!r} as version {page.version} …")
        data = self._send("PUT", url, json=page.to_update_payload())
        saved = PageContent.from_api(data)
        print(f"[CONFLUENCE] ✓ Saved version {saved.version}.")
        return saved
