"""High-level runner for a link health round.

``check_document`` runs extract → validate → rewrite over a storage-format
string.  ``sync_page`` wraps it with the Confluence fetch and update so the
CLI (and any future scheduler) can keep a page's status table current in one
call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from linkhealth.checker.coordinator import validate_all
from linkhealth.checker.extractor import extract_links
from linkhealth.checker.models import RewriteOutcome, ValidationResult
from linkhealth.checker.report import format_status_line, summarise
from linkhealth.checker.rewriter import rewrite_status_with_stats
from linkhealth.confluence.client import ConfluenceClient


@dataclass
class SyncReport:
    """Everything one round produced."""

    original: str
    rewritten: str
    results: list[ValidationResult] = field(default_factory=list)
    glyphs_changed: int = 0
    unmatched_urls: list[str] = field(default_factory=list)
    content_id: str | None = None
    updated: bool = False
    new_version: int | None = None

    @property
    def changed(self) -> bool:
        return self.rewritten != self.original

    @property
    def failed(self) -> list[ValidationResult]:
        return [r for r in self.results if not r.success]


def check_document(
    document: str,
    host_url: str,
    *,
    max_workers: int | None = None,
    overall_timeout: float | None = None,
    require_ok_status: bool | None = None,
    verbose: bool = False,
) -> SyncReport:
    """Validate every status-table link in *document* and rewrite its glyphs.

    One status line per link is printed as each check completes.  The
    rewrite only starts once every check has finished.

    Returns:
        A :class:`SyncReport` with ``content_id`` unset and ``updated`` false.
    """
    urls = extract_links(document)

    results = validate_all(
        urls,
        host_url,
        max_workers=max_workers,
        overall_timeout=overall_timeout,
        require_ok_status=require_ok_status,
        on_result=lambda result: print(format_status_line(result, verbose=verbose)),
    )

    outcome: RewriteOutcome = rewrite_status_with_stats(document, results)
    print(
        f"[REWRITE] {outcome.glyphs_changed} glyph(s) changed; "
        f"{summarise(results)}."
    )

    return SyncReport(
        original=document,
        rewritten=outcome.document,
        results=results,
        glyphs_changed=outcome.glyphs_changed,
        unmatched_urls=outcome.unmatched_urls,
    )


def sync_page(
    client: ConfluenceClient,
    content_id: str,
    host_url: str,
    *,
    dry_run: bool = False,
    max_workers: int | None = None,
    overall_timeout: float | None = None,
    require_ok_status: bool | None = None,
    verbose: bool = False,
) -> SyncReport:
    """Refresh the link status table of Confluence page *content_id*.

    The page is saved as ``version + 1`` only when the rewrite changed it and
    *dry_run* is not set.

    Args:
        client: Open Confluence client.
        content_id: Page to process.
        host_url: Prefix of the environment the links are checked against.
        dry_run: Check and rewrite, but never write back.
        max_workers: See :func:`~linkhealth.checker.coordinator.validate_all`.
        overall_timeout: See :func:`~linkhealth.checker.coordinator.validate_all`.
        require_ok_status: See
            :func:`~linkhealth.checker.validator.check_redirect`.
        verbose: Print failure diagnostics under each status line.

    Returns:
        The :class:`SyncReport` for this round.

    Raises:
        ConfluenceError: If the page cannot be fetched or saved.  Link
            failures never raise.
    """
    page = client.get_content(content_id)

    report = check_document(
        page.body,
        host_url,
        max_workers=max_workers,
        overall_timeout=overall_timeout,
        require_ok_status=require_ok_status,
        verbose=verbose,
    )
    report.content_id = page.id

    if not report.changed:
        print("[SYNC] Page already up to date; nothing to save.")
        return report

    if dry_run:
        print(f"[SYNC] Dry run: version {page.version + 1} not saved.")
        return report

    saved = client.update_content(page.next_version(report.rewritten))
    report.updated = True
    report.new_version = saved.version
    return report
