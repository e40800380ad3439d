"""Operator-facing status lines for a validation round."""

from __future__ import annotations

from typing import Iterable

from linkhealth.checker.models import ValidationResult

# Diagnostics can be whole response bodies; keep status lines readable.
_MAX_MESSAGE_CHARS = 200


def format_status_line(result: ValidationResult, verbose: bool = False) -> str:
    """Render *result* as a two-line ``URL / Success`` block.

    With *verbose* set, failed results get a third line carrying the
    (truncated) diagnostic.
    """
    lines = [
        f"URL: {result.url}",
        f"    Success: {str(result.success).lower()}",
    ]
    if verbose and not result.success and result.message:
        message = " ".join(result.message.split())
        if len(message) > _MAX_MESSAGE_CHARS:
            message = message[: _MAX_MESSAGE_CHARS - 1] + "…"
        lines.append(f"    Reason: {message}")
    return "\n".join(lines)


def summarise(results: Iterable[ValidationResult]) -> str:
    """Return a one-line tally such as ``"3 of 4 link(s) OK, 1 failed"``."""
    results = list(results)
    ok = sum(1 for r in results if r.success)
    return f"{ok} of {len(results)} link(s) OK, {len(results) - ok} failed"
