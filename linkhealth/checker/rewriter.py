"""Rewrite the status glyph next to every checked link.

The page is scanned once, front to back, in *chunks*: each chunk is the text
up to and including the next ``>``, i.e. any character data followed by one
tag.  A chunk that mentions a checked link opens that link's *scope*; the
first ``ac:emoticon`` tag inside a scope gets its glyph name switched
between ``tick`` and ``cross`` and closes the scope.  Every other character
is copied through untouched.
"""

from __future__ import annotations

import html
from typing import Iterable

from linkhealth.checker.models import RewriteOutcome, ValidationResult

GLYPH_MARKER = "ac:emoticon"
TICK = "tick"
CROSS = "cross"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _health_by_url(results: Iterable[ValidationResult]) -> dict[str, bool]:
    """Collapse *results* to one verdict per URL.

    A URL listed more than once is healthy only if every check passed.
    Empty URLs would match every chunk and are dropped.
    """
    health: dict[str, bool] = {}
    for result in results:
        if not result.url:
            continue
        health[result.url] = health.get(result.url, True) and result.success
    return health


def _markup_forms(urls: Iterable[str]) -> list[tuple[str, str]]:
    """Return ``(form, url)`` pairs, longest form first.

    Links are extracted with entities decoded, so ``/svc?a=1&b=2`` is
    written ``/svc?a=1&amp;b=2`` in the raw page.  Both spellings match.
    """
    forms: dict[str, str] = {}
    for url in urls:
        forms.setdefault(url, url)
        forms.setdefault(html.escape(url, quote=False), url)
    return sorted(forms.items(), key=lambda pair: len(pair[0]), reverse=True)


def _match(
    chunk: str,
    forms_longest_first: list[tuple[str, str]],
    scope: str | None,
) -> str | None:
    # Longest first so "/foo" does not claim the row of "/foo/bar"; among
    # equally long hits the open scope keeps the chunk.
    hits = [(form, url) for form, url in forms_longest_first if form in chunk]
    if not hits:
        return None
    longest = len(hits[0][0])
    if any(url == scope and len(form) == longest for form, url in hits):
        return scope
    return hits[0][1]


def _split_tag(chunk: str) -> tuple[str, str]:
    """Split *chunk* into its leading character data and its closing tag."""
    start = chunk.rfind("<")
    if start == -1:
        return chunk, ""
    return chunk[:start], chunk[start:]


def _swap_glyph(tag: str, success: bool) -> str:
    if success:
        return tag.replace(CROSS, TICK)
    return tag.replace(TICK, CROSS)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def rewrite_status_with_stats(
    original: str,
    results: Iterable[ValidationResult],
) -> RewriteOutcome:
    """Rewrite *original* and report what the pass did.

    A scope that never reaches a glyph (the next link starts first, or the
    document ends) is closed with a warning rather than being carried over to
    the following row.
    """
    health = _health_by_url(results)
    forms = _markup_forms(health)

    output: list[str] = []
    chunk: list[str] = []
    scope: str | None = None
    changed = 0
    unmatched: list[str] = []

    for char in original:
        chunk.append(char)
        if char != ">":
            continue

        text = "".join(chunk)
        chunk.clear()

        matched = _match(text, forms, scope)
        if matched is not None:
            if scope is not None and scope != matched:
                print(f"[REWRITE] ⚠ No status glyph found for {scope!r}")
                unmatched.append(scope)
            scope = matched
        else:
            data, tag = _split_tag(text)
            if scope is not None and GLYPH_MARKER in tag:
                swapped = _swap_glyph(tag, health[scope])
                if swapped != tag:
                    changed += 1
                    text = data + swapped
                scope = None

        output.append(text)

    # Character data after the last tag.
    output.append("".join(chunk))

    if scope is not None:
        print(f"[REWRITE] ⚠ No status glyph found for {scope!r}")
        unmatched.append(scope)

    return RewriteOutcome(
        document="".join(output),
        glyphs_changed=changed,
        unmatched_urls=unmatched,
    )


def rewrite_status(original: str, results: Iterable[ValidationResult]) -> str:
    """Return *original* with each checked link's glyph set from *results*."""
    return rewrite_status_with_stats(original, results).document
