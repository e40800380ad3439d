"""Link extraction: finds the links listed in a page's status table.

A status table row looks like::

    <tr>
      <td><a href="...">/path/to/service?wsdl</a></td>
      <td><ac:emoticon ac:name="tick" /></td>
    </tr>

Only anchors that open a table cell count; the anchor *text* is the link that
gets checked.
"""

from __future__ import annotations

from typing import Iterator, List

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _first_child(tag: Tag) -> PageElement | None:
    """Return the node immediately following *tag*'s opening tag, if any."""
    return tag.contents[0] if tag.contents else None


def _is_text(node: PageElement | None) -> bool:
    # Comments, CDATA and doctypes are strings too, but never link text.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def iter_links(document: str) -> Iterator[str]:
    """Yield the link of every ``<td><a>link</a>`` cell in *document*, in order.

    Duplicates are preserved.  A cell whose first node is anything other than
    an anchor (whitespace, a paragraph wrapper, plain text) is skipped, as is
    an anchor that does not start with text.  Malformed markup never raises;
    it just yields fewer links.
    """
    soup = BeautifulSoup(f"<html>{document}</html>", "html.parser")

    for cell in soup.find_all("td"):
        anchor = _first_child(cell)
        if not isinstance(anchor, Tag) or anchor.name != "a":
            continue

        text = _first_child(anchor)
        if not _is_text(text):
            continue

        url = str(text).strip()
        if url:
            yield url


def extract_links(document: str) -> List[str]:
    """Return every link found by :func:`iter_links` as a list."""
    links = list(iter_links(document))
    print(f"[EXTRACT] Found {len(links)} link(s).")
    return links
