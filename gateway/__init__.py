"""Accessibility gateway: fetch, sanitize, and rewrite webpages for readers."""
