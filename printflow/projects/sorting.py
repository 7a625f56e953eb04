"""Board and archive ordering."""

import sys
from typing import Iterable

from printflow.projects.dates import parse_date
from printflow.projects.models import Project

# Projects without any deadline sort after everything else
MAX_SORT_KEY = sys.maxsize


def sort_key(project: Project) -> int:
    """
    Priority key for the board, as a date ordinal.

    Uses the earliest deadline among incomplete stages, else the project's
    total deadline, else MAX_SORT_KEY. Malformed dates count as missing.
    """
    stage_dates = [
        parsed
        for parsed in (parse_date(s.deadline) for s in project.stages if not s.completed)
        if parsed is not None
    ]
    if stage_dates:
        return min(stage_dates).toordinal()

    total = parse_date(project.deadline)
    if total is not None:
        return total.toordinal()
    return MAX_SORT_KEY


def sort_board(projects: Iterable[Project]) -> list[Project]:
    """Active projects, most pressing first. Ties keep their original order."""
    return sorted((p for p in projects if not p.archived), key=sort_key)


def sort_archive(projects: Iterable[Project]) -> list[Project]:
    """Archived projects, latest total deadline first; dateless ones last."""
    def key(project: Project) -> tuple[int, int]:
        parsed = parse_date(project.deadline)
        if parsed is None:
            return (1, 0)
        return (0, -parsed.toordinal())

    return sorted((p for p in projects if p.archived), key=key)
