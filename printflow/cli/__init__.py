"""Command-line interface for printflow."""
