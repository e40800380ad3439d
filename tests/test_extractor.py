"""Tests for link extraction from a page's status table."""

from __future__ import annotations

import inspect

from linkhealth.checker.extractor import extract_links, iter_links


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_STATUS_TABLE = (
    "<h1>Service endpoints</h1>"
    "<table><tbody>"
    "<tr><th>Link</th><th>Status</th></tr>"
    '<tr><td><a href="https://env.example.com/orders?wsdl">/orders?wsdl</a></td>'
    '<td><ac:emoticon ac:name="tick" /></td></tr>'
    '<tr><td><a href="https://env.example.com/schemas/order.xsd">/schemas/order.xsd</a></td>'
    '<td><ac:emoticon ac:name="cross" /></td></tr>'
    '<tr><td><a href="https://env.example.com/health">/health</a></td>'
    '<td><ac:emoticon ac:name="tick" /></td></tr>'
    "</tbody></table>"
)


# ---------------------------------------------------------------------------
# iter_links
# ---------------------------------------------------------------------------

class TestIterLinks:
    def test_preserves_document_order(self) -> None:
        assert list(iter_links(_STATUS_TABLE)) == [
            "/orders?wsdl",
            "/schemas/order.xsd",
            "/health",
        ]

    def test_keeps_duplicates(self) -> None:
        html = (
            "<table>"
            "<tr><td><a>/a</a></td></tr>"
            "<tr><td><a>/b</a></td></tr>"
            "<tr><td><a>/a</a></td></tr>"
            "</table>"
        )
        assert list(iter_links(html)) == ["/a", "/b", "/a"]

    def test_is_lazy_generator(self) -> None:
        links = iter_links(_STATUS_TABLE)
        assert inspect.isgenerator(links)
        assert next(links) == "/orders?wsdl"

    def test_ignores_anchors_outside_table_cells(self) -> None:
        html = '<p><a href="/x">/x</a></p><table><tr><td><a>/in</a></td></tr></table>'
        assert list(iter_links(html)) == ["/in"]

    def test_ignores_cell_not_starting_with_anchor(self) -> None:
        html = (
            "<table><tr>"
            "<td><p><a>/wrapped</a></p></td>"
            "<td> <a>/after-space</a></td>"
            "<td>plain text</td>"
            "<td><a>/kept</a></td>"
            "</tr></table>"
        )
        assert list(iter_links(html)) == ["/kept"]

    def test_ignores_anchor_without_leading_text(self) -> None:
        html = (
            "<table><tr>"
            "<td><a></a></td>"
            "<td><a><strong>/bold</strong></a></td>"
            "<td><a><!-- note -->/commented</a></td>"
            "</tr></table>"
        )
        assert list(iter_links(html)) == []

    def test_strips_surrounding_whitespace(self) -> None:
        html = "<table><tr><td><a href='/p'>  /padded \n</a></td></tr></table>"
        assert list(iter_links(html)) == ["/padded"]

    def test_header_cells_are_not_links(self) -> None:
        html = "<table><tr><th><a>/header</a></th></tr></table>"
        assert list(iter_links(html)) == []

    def test_empty_document(self) -> None:
        assert list(iter_links("")) == []

    def test_truncated_markup_does_not_raise(self) -> None:
        html = '<table><tr><td><a href="/one">/one</a></td></tr><tr><td><a href="/tw'
        links = list(iter_links(html))
        assert links[0] == "/one"


# ---------------------------------------------------------------------------
# extract_links
# ---------------------------------------------------------------------------

class TestExtractLinks:
    def test_returns_list(self) -> None:
        links = extract_links(_STATUS_TABLE)
        assert isinstance(links, list)
        assert len(links) == 3

    def test_logs_count(self, capsys) -> None:
        extract_links(_STATUS_TABLE)
        assert "[EXTRACT] Found 3 link(s)." in capsys.readouterr().out
