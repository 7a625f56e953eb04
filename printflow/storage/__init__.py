"""Persistence: storage keys, backups and debounced writes."""

from printflow.storage.autosave import AutoSaver
from printflow.storage.backup import BackupData, apply_backup, dump_backup, export_backup, load_backup
from printflow.storage.repository import ProjectRepository

__all__ = [
    "AutoSaver",
    "BackupData",
    "ProjectRepository",
    "apply_backup",
    "dump_backup",
    "export_backup",
    "load_backup",
]
