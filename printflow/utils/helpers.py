"""Utility functions for printflow."""

import re
from datetime import datetime
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(name: str) -> str:
    """Convert a string to a safe filename."""
    # Replace unsafe characters
    unsafe = '<>:"/\\|?*'
    for char in unsafe:
        name = name.replace(char, "_")
    return re.sub(r"\s+", "_", name.strip())


def now_ms(now: datetime | None = None) -> int:
    """Milliseconds since the epoch, the unit used for ids and memo timestamps."""
    now = now or datetime.now()
    return int(now.timestamp() * 1000)
