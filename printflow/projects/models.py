"""Data model for print projects, stages and memos.

All records are frozen dataclasses with tuple collections, so a snapshot can
be shared between views without anyone mutating it. ``from_dict`` and
``to_dict`` convert to and from the JSON wire shape used by storage and
backups (camelCase keys, optional fields omitted when absent).
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


class DeliveryMethod(str, Enum):
    """How a finished job leaves the shop. Values are the persisted strings."""

    SELF_PICKUP = "自取"
    DELIVERY = "宅配"

    @classmethod
    def parse(cls, value: Any) -> Optional["DeliveryMethod"]:
        """Return the matching member, or None for anything unknown."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value or value == member.name.lower():
                return member
        return None


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _flag(value: Any) -> bool:
    """Only a real JSON boolean counts; strings like "false" do not."""
    return value is True


def _unique(items: Any) -> tuple[str, ...]:
    """Keep string items in order, dropping duplicates and non-strings."""
    if not isinstance(items, (list, tuple)):
        return ()
    seen: list[str] = []
    for item in items:
        if isinstance(item, str) and item not in seen:
            seen.append(item)
    return tuple(seen)


@dataclass(frozen=True)
class Stage:
    """One step of a project's workflow."""

    name: str
    deadline: str = ""
    completed: bool = False
    tag: Optional[str] = None  # Calendar/visual grouping only

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stage":
        tag = data.get("tag")
        return cls(
            name=_text(data.get("name")),
            deadline=_text(data.get("deadline")),
            completed=_flag(data.get("completed")),
            tag=tag if isinstance(tag, str) and tag else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "deadline": self.deadline,
            "completed": self.completed,
        }
        if self.tag:
            data["tag"] = self.tag
        return data


@dataclass(frozen=True)
class Project:
    """
    A trackable print job.

    ``stages`` order defines the progression; an empty tuple means the
    project is not planned yet. Status and current stage are derived, see
    ``printflow.projects.stages``.
    """

    id: int
    name: str
    deadline: str = ""
    tags: tuple[str, ...] = ()
    delivery_method: Optional[DeliveryMethod] = None
    notes: Optional[str] = None
    archived: bool = False
    stages: tuple[Stage, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """
        Build a project from its JSON form.

        Unknown or wrongly typed optional fields fall back to absent/empty.

        Raises:
            ValueError: If ``id`` is missing or not an integer.
        """
        raw_id = data.get("id")
        if isinstance(raw_id, float) and raw_id.is_integer():
            raw_id = int(raw_id)
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"Project id must be an integer, got {raw_id!r}")

        raw_stages = data.get("stages")
        stages = tuple(
            Stage.from_dict(s) for s in raw_stages if isinstance(s, dict)
        ) if isinstance(raw_stages, list) else ()

        notes = data.get("notes")
        return cls(
            id=raw_id,
            name=_text(data.get("name")),
            deadline=_text(data.get("deadline")),
            tags=_unique(data.get("tags")),
            delivery_method=DeliveryMethod.parse(data.get("deliveryMethod")),
            notes=notes if isinstance(notes, str) else None,
            archived=_flag(data.get("archived")),
            stages=stages,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "deadline": self.deadline,
            "tags": list(self.tags),
        }
        if self.delivery_method is not None:
            data["deliveryMethod"] = self.delivery_method.value
        if self.notes is not None:
            data["notes"] = self.notes
        data["archived"] = self.archived
        data["stages"] = [stage.to_dict() for stage in self.stages]
        return data

    def with_stage_toggled(self, index: int) -> "Project":
        """Return a copy with stage ``index`` flipped; out-of-range is a no-op."""
        if index < 0 or index >= len(self.stages):
            return self
        stages = list(self.stages)
        stages[index] = replace(stages[index], completed=not stages[index].completed)
        return replace(self, stages=tuple(stages))


MIN_FONT_SIZE = 0
MAX_FONT_SIZE = 9
DEFAULT_FONT_SIZE = 2


def clamp_font_size(index: Any) -> int:
    if isinstance(index, bool) or not isinstance(index, (int, float)):
        return DEFAULT_FONT_SIZE
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, int(index)))


@dataclass(frozen=True)
class Memo:
    """A free-text notebook page."""

    id: str
    title: str
    content: str = ""
    font_size_index: int = DEFAULT_FONT_SIZE
    updated_at: int = field(default=0)  # epoch milliseconds

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Memo":
        updated = data.get("updatedAt")
        return cls(
            id=_text(data.get("id")),
            title=_text(data.get("title")),
            content=_text(data.get("content")),
            font_size_index=clamp_font_size(data.get("fontSizeIndex")),
            updated_at=int(updated) if isinstance(updated, (int, float)) and not isinstance(updated, bool) else 0,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "fontSizeIndex": self.font_size_index,
            "updatedAt": self.updated_at,
        }
