"""Tests for the end-to-end sync round.

Mocking strategy:
- The Confluence client is a ``MagicMock`` so fetch / update calls can be
  asserted directly.
- Link checks go through ``respx`` so the real validator and coordinator run.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from linkhealth.confluence.client import ConfluenceClient, ConfluenceError
from linkhealth.confluence.models import PageContent
from linkhealth.sync.runner import check_document, sync_page

_HOST = "https://env.example.com"


def _row(url: str, glyph: str) -> str:
    return (
        f'<tr><td><a href="{_HOST}{url}">{url}</a></td>'
        f'<td><ac:emoticon ac:name="{glyph}" /></td></tr>'
    )


def _body(*rows: str) -> str:
    return "<table><tbody>" + "".join(rows) + "</tbody></table>"


_STALE = _body(_row("/ok", "cross"), _row("/broken", "tick"))
_FRESH = _body(_row("/ok", "tick"), _row("/broken", "cross"))


def _page(body: str) -> PageContent:
    return PageContent(
        id="2428384", type="page", title="Links", version=3, body=body, space_key="ASD"
    )


def _client(body: str) -> MagicMock:
    client = MagicMock(spec=ConfluenceClient)
    client.get_content.return_value = _page(body)
    client.update_content.side_effect = lambda page: page
    return client


def _mock_host() -> None:
    respx.get(host="env.example.com", path="/ok").mock(
        return_value=httpx.Response(200, text="fine")
    )
    respx.get(host="env.example.com", path="/broken").mock(
        side_effect=httpx.ConnectError("refused")
    )


# ---------------------------------------------------------------------------
# check_document
# ---------------------------------------------------------------------------

class TestCheckDocument:
    def test_rewrites_glyphs(self) -> None:
        with respx.mock:
            _mock_host()
            report = check_document(_STALE, _HOST)

        assert report.rewritten == _FRESH
        assert report.glyphs_changed == 2
        assert len(report.results) == 2
        assert [r.url for r in report.failed] == ["/broken"]
        assert report.changed is True

    def test_prints_status_line_per_link(self, capsys) -> None:
        with respx.mock:
            _mock_host()
            check_document(_STALE, _HOST)

        out = capsys.readouterr().out
        assert "URL: /ok\n    Success: true" in out
        assert "URL: /broken\n    Success: false" in out

    def test_document_without_links(self) -> None:
        report = check_document("<p>nothing here</p>", _HOST)
        assert report.results == []
        assert report.rewritten == "<p>nothing here</p>"
        assert report.changed is False


# ---------------------------------------------------------------------------
# sync_page
# ---------------------------------------------------------------------------

class TestSyncPage:
    def test_saves_incremented_version(self) -> None:
        client = _client(_STALE)
        with respx.mock:
            _mock_host()
            report = sync_page(client, "2428384", _HOST)

        client.get_content.assert_called_once_with("2428384")
        saved: PageContent = client.update_content.call_args.args[0]
        assert saved.version == 4
        assert saved.body == _FRESH
        assert report.updated is True
        assert report.new_version == 4
        assert report.content_id == "2428384"

    def test_dry_run_does_not_save(self) -> None:
        client = _client(_STALE)
        with respx.mock:
            _mock_host()
            report = sync_page(client, "2428384", _HOST, dry_run=True)

        client.update_content.assert_not_called()
        assert report.updated is False
        assert report.rewritten == _FRESH

    def test_unchanged_page_is_not_saved(self) -> None:
        client = _client(_FRESH)
        with respx.mock:
            _mock_host()
            report = sync_page(client, "2428384", _HOST)

        client.update_content.assert_not_called()
        assert report.changed is False

    def test_fetch_failure_is_fatal(self) -> None:
        client = MagicMock(spec=ConfluenceClient)
        client.get_content.side_effect = ConfluenceError("GET failed with HTTP 401")

        with pytest.raises(ConfluenceError):
            sync_page(client, "2428384", _HOST)

    def test_update_failure_is_fatal(self) -> None:
        client = _client(_STALE)
        client.update_content.side_effect = ConfluenceError("HTTP 409")

        with respx.mock:
            _mock_host()
            with pytest.raises(ConfluenceError, match="409"):
                sync_page(client, "2428384", _HOST)
