"""Sync package — end-to-end link health round for one page."""

from linkhealth.sync.runner import SyncReport, check_document, sync_page

__all__ = ["SyncReport", "check_document", "sync_page"]
