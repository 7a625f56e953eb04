"""JSON key/value persistence for snapshots.

Each storage key is one JSON file under the data directory. A snapshot is
read once at startup and only the slices that changed are rewritten after a
mutation.
"""

import json
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from printflow.exceptions import StorageError
from printflow.projects.memos import ensure_memo
from printflow.projects.store import DEFAULT_TAGS, DEFAULT_TITLE, Snapshot, sample_project
from printflow.storage.autosave import AutoSaver
from printflow.storage.backup import decode_memos, decode_projects, decode_tag_colors, decode_tags
from printflow.utils.helpers import ensure_dir, now_ms, safe_filename

PROJECTS_KEY = "printProjectSystem_v1"
TAGS_KEY = "printProjectSystem_allTags"
TITLE_KEY = "printProjectSystem_appTitle"
TAG_COLORS_KEY = "printProjectSystem_tagColors"
MEMOS_KEY = "printProjectSystem_memos"

STORAGE_KEYS = (PROJECTS_KEY, TAGS_KEY, TITLE_KEY, TAG_COLORS_KEY, MEMOS_KEY)


def _encode_slice(snapshot: Snapshot, key: str) -> Any:
    if key == PROJECTS_KEY:
        return [p.to_dict() for p in snapshot.projects]
    if key == TAGS_KEY:
        return list(snapshot.available_tags)
    if key == TITLE_KEY:
        return snapshot.app_title
    if key == TAG_COLORS_KEY:
        return dict(snapshot.tag_colors)
    if key == MEMOS_KEY:
        return [m.to_dict() for m in snapshot.memos]
    raise KeyError(key)


def _decode_stored_projects(raw: Any) -> list:
    return decode_projects(raw, strict=False)


def _decode_title(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ValueError("title must be a string")
    return raw


class ProjectRepository:
    """
    Storage for the project snapshot.

    A key/value store with one JSON value per key, read at
    startup and rewritten whole whenever its slice changes.
    """

    def __init__(
        self,
        data_dir: Path,
        default_title: str = DEFAULT_TITLE,
        autosave_delay_ms: int = 800,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.data_dir = ensure_dir(data_dir)
        self.default_title = default_title
        self._last_written: dict[str, Any] = {}
        self.quarantined: list[Path] = []  # unusable files moved aside during load
        saver_kwargs = {"clock": clock} if clock is not None else {}
        self.autosaver = AutoSaver(self._write_key, delay_ms=autosave_delay_ms, **saver_kwargs)

    # -------------------------------------------------------------------------
    # Path Helpers
    # -------------------------------------------------------------------------

    def _key_path(self, key: str) -> Path:
        return self.data_dir / f"{safe_filename(key)}.json"

    def has_key(self, key: str) -> bool:
        return self._key_path(key).exists()

    # -------------------------------------------------------------------------
    # Raw Access
    # -------------------------------------------------------------------------

    def read_key(self, key: str) -> Any:
        """
        Read a stored value.

        Returns:
            The decoded JSON value, or None if missing or unreadable (an
            unreadable file is moved aside first).
        """
        path = self._key_path(key)
        if not path.exists():
            return None
        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Unreadable storage key {key}: {e}")
            self._quarantine(key)
            return None
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e
        logger.debug(f"Read storage key {key}")
        return value

    def _quarantine(self, key: str) -> Path:
        """
        Move a stored value that cannot be used out of the way.

        The file is renamed to ``<key>.json.corrupt`` (with a timestamp if that
        name is taken) so its bytes survive the defaults written in its place.
        """
        path = self._key_path(key)
        target = path.with_name(f"{path.name}.corrupt")
        if target.exists():
            target = path.with_name(f"{path.name}.{now_ms()}.corrupt")
        try:
            path.replace(target)
        except OSError as e:
            logger.error(f"Failed to move aside storage key {key}: {e}")
            raise StorageError(f"Could not move {path} aside: {e}") from e
        logger.warning(f"Moved storage key {key} to {target}")
        self.quarantined.append(target)
        self._last_written.pop(key, None)
        return target

    def _write_key(self, key: str, value: Any) -> None:
        path = self._key_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to write storage key {key}: {e}")
            raise StorageError(f"Could not write {path}: {e}") from e
        self._last_written[key] = value
        logger.debug(f"Wrote storage key {key}")

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def load(self) -> Snapshot:
        """
        Load the snapshot, falling back to first-run defaults per slice.

        A slice that cannot be used is moved aside (see ``_quarantine``) and
        replaced by its default, so it never reaches the derivation code.
        Project records that cannot be decoded are dropped one by one, with
        the original file kept as well. Defaults are written back right away
        so generated ids stay stable between runs.
        """
        self._last_written = {}
        self.quarantined = []

        projects = self._load_slice(PROJECTS_KEY, _decode_stored_projects, None)
        if projects is None:
            projects = [sample_project()]

        tags = self._load_slice(TAGS_KEY, decode_tags, None)
        if tags is None:
            tags = list(DEFAULT_TAGS)

        title = self._load_slice(TITLE_KEY, _decode_title, self.default_title)
        colors = self._load_slice(TAG_COLORS_KEY, decode_tag_colors, {})
        memos = self._load_slice(MEMOS_KEY, decode_memos, [])

        snapshot = ensure_memo(Snapshot(
            projects=tuple(projects),
            available_tags=tuple(tags),
            tag_colors=colors,
            app_title=title,
            memos=tuple(memos),
        ))
        self.save(snapshot)
        return snapshot

    def _load_slice(self, key: str, decode: Callable[[Any], Any], default: Any) -> Any:
        raw = self.read_key(key)
        if raw is None:
            return default
        try:
            value = decode(raw)
        except ValueError as e:
            logger.warning(f"Malformed storage key {key}: {e}")
            self._quarantine(key)
            return default
        if key == PROJECTS_KEY and len(value) != len(raw):
            # Keep the untouched original next to the filtered list
            self._quarantine(key)
            return value
        self._last_written[key] = raw
        return value

    def save(self, snapshot: Snapshot) -> list[str]:
        """
        Write every slice that differs from what is on disk.

        Returns:
            Keys that were written.
        """
        written = []
        for key in STORAGE_KEYS:
            value = _encode_slice(snapshot, key)
            if key in self._last_written and self._last_written[key] == value:
                continue
            self.autosaver.cancel(key)
            self._write_key(key, value)
            written.append(key)
        return written

    def commit(self, before: Snapshot, after: Snapshot) -> Snapshot:
        """Persist ``after`` if a mutation produced a new snapshot."""
        if after is not before:
            keys = self.save(after)
            if keys:
                logger.info(f"Saved {', '.join(keys)}")
        return after

    def save_debounced(self, snapshot: Snapshot, key: str) -> None:
        """Queue a slice for the autosaver instead of writing it now."""
        self.autosaver.touch(key, _encode_slice(snapshot, key))

    def flush(self) -> int:
        """Write any debounced slices still pending."""
        return self.autosaver.flush()

    def replace_all(self, snapshot: Snapshot) -> Snapshot:
        """Write every slice unconditionally (used after an import)."""
        for key in STORAGE_KEYS:
            self.autosaver.cancel(key)
            self._write_key(key, _encode_slice(snapshot, key))
        return snapshot
