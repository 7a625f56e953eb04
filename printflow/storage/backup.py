"""Backup export and import.

A backup is one JSON object::

    {"projects": [...], "availableTags": [...], "appTitle": "...",
     "version": "1.0", "timestamp": "<ISO-8601>"}

``tagColors`` and ``memos`` are written too and are optional on import.
Import is all-or-nothing: a rejected file leaves the snapshot untouched.
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Optional, Union

from loguru import logger

from printflow.exceptions import BackupError
from printflow.projects.models import Memo, Project
from printflow.projects.store import Snapshot

BACKUP_VERSION = "1.0"


def decode_projects(raw: Any, strict: bool = True) -> list[Project]:
    """
    Decode a JSON list of projects.

    With ``strict=False`` invalid entries are skipped (and logged) instead of
    failing the whole list.

    Raises:
        ValueError: If ``raw`` is not a list, or in strict mode if an entry
            is not a valid project.
    """
    if not isinstance(raw, list):
        raise ValueError("projects must be a list")
    projects = []
    for i, item in enumerate(raw):
        try:
            if not isinstance(item, dict):
                raise ValueError("not an object")
            projects.append(Project.from_dict(item))
        except ValueError as e:
            if strict:
                raise ValueError(f"project #{i}: {e}") from e
            logger.warning(f"Skipping project #{i}: {e}")
    return projects


def decode_tags(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise ValueError("tags must be a list")
    tags: list[str] = []
    for item in raw:
        if isinstance(item, str) and item and item not in tags:
            tags.append(item)
    return tags


def decode_tag_colors(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        raise ValueError("tag colors must be an object")
    return {k: v for k, v in raw.items() if isinstance(k, str) and isinstance(v, str) and v}


def decode_memos(raw: Any) -> list[Memo]:
    if not isinstance(raw, list):
        raise ValueError("memos must be a list")
    return [Memo.from_dict(item) for item in raw if isinstance(item, dict) and item.get("id")]


@dataclass
class BackupData:
    """Decoded content of a backup file."""

    projects: list[Project]
    available_tags: Optional[list[str]] = None
    app_title: Optional[str] = None
    tag_colors: Optional[dict[str, str]] = None
    memos: Optional[list[Memo]] = None
    version: Optional[str] = None
    timestamp: Optional[str] = None


def export_backup(snapshot: Snapshot, now: Optional[datetime] = None) -> dict[str, Any]:
    """Build the backup object for a snapshot."""
    now = now or datetime.now(timezone.utc)
    return {
        "projects": [p.to_dict() for p in snapshot.projects],
        "availableTags": list(snapshot.available_tags),
        "appTitle": snapshot.app_title,
        "tagColors": dict(snapshot.tag_colors),
        "memos": [m.to_dict() for m in snapshot.memos],
        "version": BACKUP_VERSION,
        "timestamp": now.isoformat(),
    }


def dump_backup(snapshot: Snapshot, now: Optional[datetime] = None) -> str:
    return json.dumps(export_backup(snapshot, now), ensure_ascii=False, indent=2)


def backup_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"printflow-backup-{now.date().isoformat()}.json"


def load_backup(text: Union[str, bytes]) -> BackupData:
    """
    Parse and validate a backup.

    Raises:
        BackupError: If the text is not UTF-8 JSON, ``projects`` is not a
            list, or a project record cannot be decoded.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BackupError(f"Backup is not UTF-8 text: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackupError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("projects"), list):
        raise BackupError("Invalid backup format: missing project data")

    try:
        projects = decode_projects(data["projects"])
    except ValueError as e:
        raise BackupError(f"Invalid backup format: {e}") from e

    backup = BackupData(projects=projects)
    if isinstance(data.get("availableTags"), list):
        backup.available_tags = decode_tags(data["availableTags"])
    if isinstance(data.get("appTitle"), str) and data["appTitle"]:
        backup.app_title = data["appTitle"]
    if isinstance(data.get("tagColors"), dict):
        backup.tag_colors = decode_tag_colors(data["tagColors"])
    if isinstance(data.get("memos"), list):
        backup.memos = decode_memos(data["memos"])
    if isinstance(data.get("version"), str):
        backup.version = data["version"]
    if isinstance(data.get("timestamp"), str):
        backup.timestamp = data["timestamp"]

    logger.debug(f"Loaded backup with {len(projects)} projects (version {backup.version})")
    return backup


def apply_backup(snapshot: Snapshot, backup: BackupData) -> Snapshot:
    """Replace the snapshot's contents with the backup's; absent slices are kept."""
    updated = replace(snapshot, projects=tuple(backup.projects))
    if backup.available_tags is not None:
        updated = replace(updated, available_tags=tuple(backup.available_tags))
    if backup.app_title:
        updated = replace(updated, app_title=backup.app_title)
    if backup.tag_colors is not None:
        updated = replace(updated, tag_colors=dict(backup.tag_colors))
    if backup.memos:
        updated = replace(updated, memos=tuple(backup.memos))
    return updated
