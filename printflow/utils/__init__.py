"""Utility functions for printflow."""

from printflow.utils.helpers import ensure_dir, now_ms, safe_filename

__all__ = ["ensure_dir", "now_ms", "safe_filename"]
