"""Link health CLI — entry-point for all checker operations.

Usage:
    python cli/main.py --help

Commands:
    sync        → check a Confluence page's links and save the updated glyphs
    check-file  → same round against a local storage-format file
    links       → list the links the status table contains
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkhealth.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from linkhealth.checker.extractor import iter_links
from linkhealth.config import settings
from linkhealth.confluence.client import ConfluenceClient, ConfluenceError
from linkhealth.sync.runner import check_document, sync_page

app = typer.Typer(
    name="linkhealth",
    help="Keep the link status table of a Confluence page in sync.",
    no_args_is_help=True,
)


def _read_document(path: Path) -> str:
    if not path.is_file():
        typer.echo(f"❌ No such file: {path}")
        raise typer.Exit(code=1)
    # newline="" keeps CRLF line endings intact on the round trip.
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


# ---------------------------------------------------------------------------
# Confluence round
# ---------------------------------------------------------------------------
@app.command("sync")
def sync(
    confluence_url: Optional[str] = typer.Option(
        None, "--confluence-url", help="Confluence base URL, e.g. https://x.atlassian.net/wiki."
    ),
    content_id: Optional[str] = typer.Option(
        None, "--content-id", help="Content ID of the Confluence page."
    ),
    username: Optional[str] = typer.Option(
        None, "--username", help="Username for the Confluence API."
    ),
    password: Optional[str] = typer.Option(
        None, "--password", help="Password or API token for the Confluence API."
    ),
    host_url: Optional[str] = typer.Option(
        None, "--host-url", help="Environment URL the links are checked against."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Maximum number of concurrent checks."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds the whole batch of checks may take."
    ),
    require_ok: bool = typer.Option(
        False, "--require-ok", help="Treat non-2xx responses as failures."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not save the page."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print failure reasons."),
) -> None:
    """Check every link on a Confluence page and update its status glyphs."""
    content_id = content_id or settings.confluence_content_id
    host_url = host_url or settings.host_url

    typer.echo(f"[sync] Page {content_id}  host={host_url!r}")
    try:
        with ConfluenceClient(
            base_url=confluence_url, username=username, password=password
        ) as client:
            report = sync_page(
                client,
                content_id,
                host_url,
                dry_run=dry_run,
                max_workers=workers,
                overall_timeout=timeout,
                require_ok_status=True if require_ok else None,
                verbose=verbose,
            )
    except ConfluenceError as exc:
        typer.echo(f"❌ Error: {exc}")
        raise typer.Exit(code=1)

    if report.updated:
        typer.echo(f"✅ Page saved as version {report.new_version}.")
    elif report.changed:
        typer.echo("✅ Dry run complete; page not saved.")
    else:
        typer.echo("✅ Page already up to date.")


# ---------------------------------------------------------------------------
# Local files
# ---------------------------------------------------------------------------
@app.command("check-file")
def check_file(
    path: Path = typer.Argument(..., help="Storage-format file to check."),
    host_url: Optional[str] = typer.Option(
        None, "--host-url", help="Environment URL the links are checked against."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the result here instead of in place."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Maximum number of concurrent checks."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds the whole batch of checks may take."
    ),
    require_ok: bool = typer.Option(
        False, "--require-ok", help="Treat non-2xx responses as failures."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write any file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print failure reasons."),
) -> None:
    """Check the links of a local file and rewrite its status glyphs."""
    document = _read_document(path)
    host_url = host_url or settings.host_url

    report = check_document(
        document,
        host_url,
        max_workers=workers,
        overall_timeout=timeout,
        require_ok_status=True if require_ok else None,
        verbose=verbose,
    )

    if dry_run:
        typer.echo(f"[check-file] Dry run: {report.glyphs_changed} glyph(s) would change.")
        return

    target = output or path
    if report.changed or target != path:
        target.write_text(report.rewritten, encoding="utf-8", newline="")
        typer.echo(f"✅ Wrote {target}")
    else:
        typer.echo("✅ File already up to date.")


@app.command("links")
def links(
    path: Path = typer.Argument(..., help="Storage-format file to scan."),
) -> None:
    """List the links found in the status table of a local file."""
    found = 0
    for url in iter_links(_read_document(path)):
        typer.echo(url)
        found += 1
    if not found:
        typer.echo("[links] No links found.")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
