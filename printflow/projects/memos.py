"""Memo notebook mutations.

Memos live on the snapshot next to the projects and follow the same rules:
every function returns a new snapshot, unknown ids are no-ops.
"""

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from printflow.projects.models import DEFAULT_FONT_SIZE, Memo, clamp_font_size
from printflow.projects.store import Snapshot
from printflow.utils.helpers import now_ms

FIRST_MEMO_TITLE = "未命名筆記"
FIRST_MEMO_CONTENT = "開始寫下您的想法..."
NEW_MEMO_TITLE = "新記事"


def get_memo(snapshot: Snapshot, memo_id: str) -> Optional[Memo]:
    for memo in snapshot.memos:
        if memo.id == memo_id:
            return memo
    return None


def ensure_memo(snapshot: Snapshot, now: Optional[datetime] = None) -> Snapshot:
    """Make sure the notebook has at least one page."""
    if snapshot.memos:
        return snapshot
    memo = Memo(
        id=str(uuid.uuid4()),
        title=FIRST_MEMO_TITLE,
        content=FIRST_MEMO_CONTENT,
        font_size_index=DEFAULT_FONT_SIZE,
        updated_at=now_ms(now),
    )
    return replace(snapshot, memos=(memo,))


def add_memo(snapshot: Snapshot, title: str = NEW_MEMO_TITLE, now: Optional[datetime] = None) -> Snapshot:
    memo = Memo(id=str(uuid.uuid4()), title=title, updated_at=now_ms(now))
    return replace(snapshot, memos=snapshot.memos + (memo,))


def _replace_memo(snapshot: Snapshot, memo: Memo) -> Snapshot:
    return replace(snapshot, memos=tuple(memo if m.id == memo.id else m for m in snapshot.memos))


def rename_memo(snapshot: Snapshot, memo_id: str, title: str) -> Snapshot:
    """Rename a page. Blank titles are ignored."""
    memo = get_memo(snapshot, memo_id)
    if memo is None or not title.strip():
        return snapshot
    return _replace_memo(snapshot, replace(memo, title=title))


def update_memo_content(
    snapshot: Snapshot,
    memo_id: str,
    content: str,
    now: Optional[datetime] = None,
) -> Snapshot:
    memo = get_memo(snapshot, memo_id)
    if memo is None:
        return snapshot
    return _replace_memo(snapshot, replace(memo, content=content, updated_at=now_ms(now)))


def set_memo_font_size(snapshot: Snapshot, memo_id: str, index: int) -> Snapshot:
    memo = get_memo(snapshot, memo_id)
    if memo is None:
        return snapshot
    return _replace_memo(snapshot, replace(memo, font_size_index=clamp_font_size(index)))


def delete_memo(snapshot: Snapshot, memo_id: str) -> Snapshot:
    """Delete a page; the last remaining page is kept."""
    if len(snapshot.memos) <= 1 or get_memo(snapshot, memo_id) is None:
        return snapshot
    return replace(snapshot, memos=tuple(m for m in snapshot.memos if m.id != memo_id))


def move_memo(snapshot: Snapshot, memo_id: str, position: int) -> Snapshot:
    """Move a page to ``position`` in the tab order (clamped)."""
    memo = get_memo(snapshot, memo_id)
    if memo is None:
        return snapshot
    others = [m for m in snapshot.memos if m.id != memo_id]
    position = max(0, min(len(others), position))
    others.insert(position, memo)
    return replace(snapshot, memos=tuple(others))
