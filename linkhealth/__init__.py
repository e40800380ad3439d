"""Confluence link health: keep a page's link status table in sync."""
