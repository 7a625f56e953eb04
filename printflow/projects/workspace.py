"""Craft-area grouping of active projects by tag."""

from dataclasses import dataclass
from typing import Iterable

from printflow.projects.dates import DateLike, diff_days, parse_date
from printflow.projects.deadlines import URGENT_DAYS
from printflow.projects.models import Project
from printflow.projects.stages import ProjectStatus, current_stage_name, project_status


def _code_unit_order(tag: str) -> bytes:
    # Big-endian UTF-16 bytes compare like UTF-16 code units
    return tag.encode("utf-16-be")


def group_by_tag(projects: Iterable[Project]) -> dict[str, list[Project]]:
    """
    Partition active projects by tag.

    Tags are ordered lexicographically; a project with several tags shows up
    in each of their groups. Tags with no active project are omitted.
    """
    active = [p for p in projects if not p.archived]
    used = sorted({tag for p in active for tag in p.tags}, key=_code_unit_order)

    groups: dict[str, list[Project]] = {}
    for tag in used:
        tagged = [p for p in active if tag in p.tags]
        if tagged:
            groups[tag] = tagged
    return groups


@dataclass(frozen=True)
class WorkspaceRow:
    project: Project
    current_stage: str
    deadline_emphasis: str  # "overdue", "urgent" or "plain"
    status: ProjectStatus

    @property
    def badge(self) -> str:
        if self.status is ProjectStatus.DONE:
            return "完成"
        if self.status is ProjectStatus.IN_PROGRESS:
            return "進行"
        return "--"


def deadline_emphasis(deadline: str, today: DateLike = None) -> str:
    if parse_date(deadline) is None:
        return "plain"
    diff = diff_days(deadline, today)
    if diff < 0:
        return "overdue"
    if diff <= URGENT_DAYS:
        return "urgent"
    return "plain"


def workspace_rows(projects: Iterable[Project], today: DateLike = None) -> list[WorkspaceRow]:
    """Table rows for one craft group."""
    return [
        WorkspaceRow(
            project=p,
            current_stage=current_stage_name(p),
            deadline_emphasis=deadline_emphasis(p.deadline, today),
            status=project_status(p),
        )
        for p in projects
    ]
