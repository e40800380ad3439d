"""Checker package — link extraction, validation & status rewriting."""

from linkhealth.checker.coordinator import validate_all
from linkhealth.checker.extractor import extract_links, iter_links
from linkhealth.checker.models import RewriteOutcome, ValidationResult, ValidationTarget
from linkhealth.checker.report import format_status_line, summarise
from linkhealth.checker.rewriter import rewrite_status, rewrite_status_with_stats
from linkhealth.checker.validator import check_redirect

__all__ = [
    "iter_links",
    "extract_links",
    "check_redirect",
    "validate_all",
    "rewrite_status",
    "rewrite_status_with_stats",
    "format_status_line",
    "summarise",
    "ValidationResult",
    "ValidationTarget",
    "RewriteOutcome",
]
