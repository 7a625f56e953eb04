"""Snapshot state and the mutations the UI layer may apply to it.

A ``Snapshot`` is immutable. Every mutation takes a snapshot and returns a
new one (copy-on-write), so a view that is halfway through rendering never
sees a partially updated project. Mutations are total: an unknown id, an
out-of-range stage index or a tag that is not registered leaves the snapshot
unchanged and the same object is returned.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Optional

from printflow.projects.dates import parse_date
from printflow.projects.models import DeliveryMethod, Memo, Project, Stage
from printflow.utils.helpers import now_ms

DEFAULT_TITLE = "PrintFlow Pro"
DEFAULT_TAGS = ("數位印刷", "燙金", "凸版", "UV 浮雕", "斬型", "後加工")
DEFAULT_STAGE_NAME = "階段 1"


@dataclass(frozen=True)
class Snapshot:
    """Everything the views need: projects, tag registry, colors, title, memos."""

    projects: tuple[Project, ...] = ()
    available_tags: tuple[str, ...] = ()
    tag_colors: dict[str, str] = field(default_factory=dict)
    app_title: str = DEFAULT_TITLE
    memos: tuple[Memo, ...] = ()

    def get_project(self, project_id: int) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    @property
    def active_projects(self) -> list[Project]:
        return [p for p in self.projects if not p.archived]

    @property
    def archived_projects(self) -> list[Project]:
        return [p for p in self.projects if p.archived]


# -------------------------------------------------------------------------
# Projects
# -------------------------------------------------------------------------

def next_project_id(snapshot: Snapshot, now: Optional[datetime] = None) -> int:
    """Millisecond timestamp, bumped past existing ids on collision."""
    candidate = now_ms(now)
    existing = {p.id for p in snapshot.projects}
    if candidate in existing:
        candidate = max(existing) + 1
    return candidate


def validate_project_form(name: str, deadline: str) -> list[str]:
    """
    Check the fields required to open a project.

    Returns:
        List of issues; empty when the form can be saved.
    """
    issues = []
    if not name or not name.strip():
        issues.append("Project name is required")
    if not deadline or not deadline.strip():
        issues.append("Total deadline is required")
    elif parse_date(deadline) is None:
        issues.append(f"Deadline '{deadline}' is not a valid YYYY-MM-DD date")
    return issues


def new_project(
    snapshot: Snapshot,
    name: str,
    deadline: str,
    tags: Iterable[str] = (),
    stages: Optional[Iterable[Stage]] = None,
    delivery_method: Optional[DeliveryMethod] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Project:
    """
    Build a project ready for ``create_project``.

    Without explicit stages the project starts with a single empty stage,
    like the blank project form.
    """
    unique_tags: list[str] = []
    for tag in tags:
        if tag not in unique_tags:
            unique_tags.append(tag)

    if stages is None:
        stages = (Stage(name=DEFAULT_STAGE_NAME),)

    return Project(
        id=next_project_id(snapshot, now),
        name=name.strip(),
        deadline=deadline.strip(),
        tags=tuple(unique_tags),
        delivery_method=delivery_method,
        notes=notes,
        archived=False,
        stages=tuple(stages),
    )


def create_project(snapshot: Snapshot, project: Project) -> Snapshot:
    """Append a new, unarchived project. A clashing id is replaced."""
    if snapshot.get_project(project.id) is not None:
        project = replace(project, id=next_project_id(snapshot))
    project = replace(project, archived=False)
    return replace(snapshot, projects=snapshot.projects + (project,))


def update_project(snapshot: Snapshot, project: Project) -> Snapshot:
    """Replace the project with the same id wholesale."""
    if snapshot.get_project(project.id) is None:
        return snapshot
    return replace(
        snapshot,
        projects=tuple(project if p.id == project.id else p for p in snapshot.projects),
    )


def delete_project(snapshot: Snapshot, project_id: int) -> Snapshot:
    if snapshot.get_project(project_id) is None:
        return snapshot
    return replace(snapshot, projects=tuple(p for p in snapshot.projects if p.id != project_id))


def toggle_archive(snapshot: Snapshot, project_id: int) -> Snapshot:
    project = snapshot.get_project(project_id)
    if project is None:
        return snapshot
    return update_project(snapshot, replace(project, archived=not project.archived))


def toggle_stage_completed(snapshot: Snapshot, project_id: int, stage_index: int) -> Snapshot:
    project = snapshot.get_project(project_id)
    if project is None:
        return snapshot
    toggled = project.with_stage_toggled(stage_index)
    if toggled is project:
        return snapshot
    return update_project(snapshot, toggled)


def clear_archived(snapshot: Snapshot) -> Snapshot:
    """Permanently drop every archived project."""
    if not snapshot.archived_projects:
        return snapshot
    return replace(snapshot, projects=tuple(snapshot.active_projects))


# -------------------------------------------------------------------------
# Tags
# -------------------------------------------------------------------------

def add_global_tag(snapshot: Snapshot, tag: str) -> Snapshot:
    tag = tag.strip()
    if not tag or tag in snapshot.available_tags:
        return snapshot
    return replace(snapshot, available_tags=snapshot.available_tags + (tag,))


def remove_global_tag(snapshot: Snapshot, tag: str) -> Snapshot:
    """Drop a tag from the registry. Projects keep their own copy of it."""
    if tag not in snapshot.available_tags:
        return snapshot
    return replace(snapshot, available_tags=tuple(t for t in snapshot.available_tags if t != tag))


def set_tag_color(snapshot: Snapshot, tag: str, color: Optional[str]) -> Snapshot:
    """Pin a color token to a tag; an empty color removes the override."""
    colors = dict(snapshot.tag_colors)
    if color:
        if colors.get(tag) == color:
            return snapshot
        colors[tag] = color
    else:
        if tag not in colors:
            return snapshot
        del colors[tag]
    return replace(snapshot, tag_colors=colors)


# -------------------------------------------------------------------------
# Title
# -------------------------------------------------------------------------

def set_app_title(snapshot: Snapshot, title: str) -> Snapshot:
    if title == snapshot.app_title:
        return snapshot
    return replace(snapshot, app_title=title)


def sample_project(today: Optional[datetime] = None) -> Project:
    """The example project shown on first start."""
    today = today or datetime.now()
    deadline = datetime.fromordinal(today.toordinal() + 5).date().isoformat()
    return Project(
        id=now_ms(today),
        name="範例：2024 夏季新品海報",
        deadline=deadline,
        tags=("數位印刷", "燙金"),
        stages=(
            Stage(name="設計完稿", deadline="2023-10-01", completed=True),
            Stage(name="打樣確認"),
        ),
    )
