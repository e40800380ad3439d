"""Confluence package — REST client & page models."""

from linkhealth.confluence.client import ConfluenceClient, ConfluenceError
from linkhealth.confluence.models import PageContent

__all__ = ["ConfluenceClient", "ConfluenceError", "PageContent"]
