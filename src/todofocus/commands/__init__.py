"""Command groups of the todofocus CLI."""
