"""Tests for the calendar projection."""

from datetime import date

from printflow.projects.calendar import (
    event_color,
    events_in_month,
    events_on,
    month_grid,
    projects_on,
    shift_month,
)
from printflow.projects.models import Stage
from printflow.projects.tags import NEUTRAL_TOKEN, color_for


class TestEventsOn:
    """Tests for events_on."""

    def test_deadline_and_stage_on_same_day(self, make_project):
        project = make_project(
            "Poster",
            deadline="2024-05-03",
            stages=[Stage("Proof", "2024-05-03"), Stage("Cut", "2024-05-04")],
        )
        events = events_on("2024-05-03", [project])

        assert [(e.kind, e.label) for e in events] == [("deadline", "Poster"), ("stage", "Proof")]
        assert events[1].stage_index == 0
        assert events[0].key != events[1].key

    def test_stage_label_prefers_tag(self, make_project):
        project = make_project(stages=[Stage("Foil", "2024-05-03", tag="燙金")])
        assert events_on(date(2024, 5, 3), [project])[0].label == "燙金"

    def test_completed_stage_hidden(self, make_project):
        project = make_project(stages=[Stage("Proof", "2024-05-03", completed=True)])
        assert events_on("2024-05-03", [project]) == []

    def test_archived_project_hidden(self, make_project):
        project = make_project(deadline="2024-05-03", archived=True)
        assert events_on("2024-05-03", [project]) == []

    def test_invalid_day(self, make_project):
        assert events_on("nope", [make_project(deadline="2024-05-03")]) == []


class TestEventColor:
    """Tests for event_color."""

    def test_stage_tag_first(self, make_project):
        project = make_project(tags=["凸版"], stages=[Stage("Foil", "2024-05-03", tag="燙金")])
        event = events_on("2024-05-03", [project])[0]
        assert event_color(event) == color_for("燙金")

    def test_project_tag_fallback(self, make_project):
        project = make_project(deadline="2024-05-03", tags=["凸版", "燙金"])
        event = events_on("2024-05-03", [project])[0]
        assert event_color(event) == color_for("凸版")

    def test_neutral(self, make_project):
        event = events_on("2024-05-03", [make_project(deadline="2024-05-03")])[0]
        assert event_color(event) == NEUTRAL_TOKEN


class TestProjectsOn:
    """Tests for the compact one-chip-per-project view."""

    def test_pinned_to_active_stage(self, make_project):
        project = make_project(deadline="2024-05-30", stages=[Stage("Proof", "2024-05-10")])
        assert projects_on("2024-05-10", [project]) == [project]
        assert projects_on("2024-05-30", [project]) == []


class TestMonthGrid:
    """Tests for month_grid and month navigation."""

    def test_sunday_first_with_padding(self):
        grid = month_grid(2024, 5)  # 1 May 2024 is a Wednesday
        assert grid[0][:3] == [None, None, None]
        assert grid[0][3] == date(2024, 5, 1)
        assert all(len(week) == 7 for week in grid)
        days = [d for week in grid for d in week if d is not None]
        assert len(days) == 31

    def test_events_in_month(self, make_project):
        project = make_project(deadline="2024-05-03", stages=[Stage("Proof", "2024-04-28")])
        by_day = events_in_month(2024, 5, [project])
        assert list(by_day) == [date(2024, 5, 3)]

    def test_shift_month(self):
        assert shift_month(2024, 12, 1) == (2025, 1)
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 5, 0) == (2024, 5)
