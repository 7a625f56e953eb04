"""Coalescing writer for free-text edits."""

import time
from dataclasses import dataclass
from typing import Any, Callable

from loguru import logger


@dataclass
class PendingWrite:
    value: Any
    due_at: float


class AutoSaver:
    """
    Debounces writes per key.

    Every ``touch`` replaces the pending value for its key and restarts that
    key's timer. ``tick`` commits keys whose quiet period has elapsed, so a
    burst of edits results in a single write carrying the last value.
    """

    def __init__(
        self,
        commit: Callable[[str, Any], None],
        delay_ms: int = 800,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the saver.

        Args:
            commit: Called with (key, value) when a write is due.
            delay_ms: Quiet period before a pending write is committed.
            clock: Time source in seconds (injectable for tests).
        """
        self.commit = commit
        self.delay_s = delay_ms / 1000
        self.clock = clock
        self._pending: dict[str, PendingWrite] = {}

    def touch(self, key: str, value: Any) -> None:
        """Record an edit and restart the key's timer."""
        self._pending[key] = PendingWrite(value=value, due_at=self.clock() + self.delay_s)

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    @property
    def pending_keys(self) -> list[str]:
        return list(self._pending)

    def tick(self) -> int:
        """
        Commit every write whose quiet period has elapsed.

        Returns:
            Number of writes committed.
        """
        now = self.clock()
        due = [key for key, write in self._pending.items() if write.due_at <= now]
        for key in due:
            self._commit(key)
        return len(due)

    def flush(self) -> int:
        """Commit everything pending right away."""
        keys = list(self._pending)
        for key in keys:
            self._commit(key)
        return len(keys)

    def cancel(self, key: str) -> None:
        self._pending.pop(key, None)

    def _commit(self, key: str) -> None:
        write = self._pending.pop(key)
        logger.debug(f"Autosave committing {key}")
        self.commit(key, write.value)
