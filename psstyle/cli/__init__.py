"""Command-line interface for psstyle."""
