"""Calendar projection of projects and stages."""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Literal, Mapping, Optional

from printflow.projects.dates import DateLike, parse_date
from printflow.projects.models import Project
from printflow.projects.stages import active_stage_deadline
from printflow.projects.tags import NEUTRAL_TOKEN, color_for

EventKind = Literal["stage", "deadline"]


@dataclass(frozen=True)
class CalendarEvent:
    """
    A dated entry on the calendar. Derived on every query, never stored.

    ``stage_index`` is set for stage events only.
    """

    day: date
    kind: EventKind
    project: Project
    label: str
    stage_index: Optional[int] = None

    @property
    def key(self) -> tuple[int, str, Optional[int]]:
        """Identity used to address the event for click-through editing."""
        return (self.project.id, self.kind, self.stage_index)


def events_on(day: DateLike, projects: Iterable[Project]) -> list[CalendarEvent]:
    """
    All events falling on ``day``.

    Each active project contributes a ``deadline`` event when its total
    deadline matches, plus one ``stage`` event per incomplete stage due that
    day. Events are never merged.
    """
    target = parse_date(day)
    if target is None:
        return []

    events: list[CalendarEvent] = []
    for project in projects:
        if project.archived:
            continue
        if parse_date(project.deadline) == target:
            events.append(CalendarEvent(target, "deadline", project, project.name))
        for index, stage in enumerate(project.stages):
            if stage.completed or parse_date(stage.deadline) != target:
                continue
            events.append(
                CalendarEvent(target, "stage", project, stage.tag or stage.name, stage_index=index)
            )
    return events


def display_date(project: Project) -> str:
    """Single date a project is pinned to in the compact month view."""
    return active_stage_deadline(project)


def projects_on(day: DateLike, projects: Iterable[Project]) -> list[Project]:
    """Active projects whose display date is ``day`` (one chip per project)."""
    target = parse_date(day)
    if target is None:
        return []
    return [
        p for p in projects
        if not p.archived and parse_date(display_date(p)) == target
    ]


def event_color(event: CalendarEvent, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Stage tag color, else the project's first tag color, else neutral."""
    if event.kind == "stage" and event.stage_index is not None:
        tag = event.project.stages[event.stage_index].tag
        if tag:
            return color_for(tag, overrides)
    if event.project.tags:
        return color_for(event.project.tags[0], overrides)
    return NEUTRAL_TOKEN


def month_grid(year: int, month: int) -> list[list[Optional[date]]]:
    """Weeks of the month, Sunday first, padded with None."""
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    return [
        [d if d.month == month else None for d in week]
        for week in cal.monthdatescalendar(year, month)
    ]


def events_in_month(year: int, month: int, projects: Iterable[Project]) -> dict[date, list[CalendarEvent]]:
    """Events per day for every day of the month that has at least one."""
    projects = list(projects)
    result: dict[date, list[CalendarEvent]] = {}
    for day_number in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_number)
        events = events_on(day, projects)
        if events:
            result[day] = events
    return result


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward or back, wrapping the year."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
