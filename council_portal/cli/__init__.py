"""Command-line tools for Council Portal."""
