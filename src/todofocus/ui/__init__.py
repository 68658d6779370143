"""Presentation helpers (console, formatters, menus)."""
