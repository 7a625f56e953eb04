"""Lifecycle status derived from a project's stage list."""

from enum import Enum

from printflow.projects.dates import parse_date
from printflow.projects.models import Project

DONE_MARKER = "已完成"
NO_STAGES_MARKER = "無階段"
UNKNOWN_STAGE_MARKER = "未知"


class ProjectStatus(str, Enum):
    """Aggregate status of a project. Never stored, always recomputed."""

    UNPLANNED = "unplanned"
    DONE = "done"
    IN_PROGRESS = "in_progress"
    NOT_STARTED = "not_started"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    ProjectStatus.UNPLANNED: "未規劃",
    ProjectStatus.DONE: "已完成",
    ProjectStatus.IN_PROGRESS: "進行中",
    ProjectStatus.NOT_STARTED: "未開始",
}


def project_status(project: Project) -> ProjectStatus:
    """Fold the stage list into a single status."""
    if not project.stages:
        return ProjectStatus.UNPLANNED
    if all(stage.completed for stage in project.stages):
        return ProjectStatus.DONE
    if any(stage.completed for stage in project.stages):
        return ProjectStatus.IN_PROGRESS
    return ProjectStatus.NOT_STARTED


def current_stage_name(project: Project) -> str:
    """
    Name of the stage being worked on.

    This is the first incomplete stage in list order, regardless of its
    deadline. Board ordering uses the earliest deadline instead, see
    ``printflow.projects.sorting.sort_key``.
    """
    if project_status(project) is ProjectStatus.DONE:
        return DONE_MARKER
    if not project.stages:
        return NO_STAGES_MARKER
    for stage in project.stages:
        if not stage.completed:
            return stage.name
    return UNKNOWN_STAGE_MARKER


def active_stage_deadline(project: Project) -> str:
    """
    Deadline the project is currently working towards.

    Scans incomplete stages in list order and returns the first one that has
    a usable deadline; falls back to the project's own deadline.
    """
    for stage in project.stages:
        if not stage.completed and parse_date(stage.deadline) is not None:
            return stage.deadline
    return project.deadline
