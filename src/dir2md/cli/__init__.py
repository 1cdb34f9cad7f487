"""Command-line interface for dir2md."""
