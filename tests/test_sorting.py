"""Tests for board and archive ordering."""

from datetime import date

from printflow.projects.models import Stage
from printflow.projects.sorting import MAX_SORT_KEY, sort_archive, sort_board, sort_key


class TestSortKey:
    """Tests for sort_key."""

    def test_earliest_open_stage_deadline(self, make_project):
        """The earliest stage date wins, not the first stage in the list."""
        project = make_project(
            deadline="2024-06-01",
            stages=[Stage("A", "2024-05-01"), Stage("B", "2024-04-10"), Stage("C")],
        )
        assert sort_key(project) == date(2024, 4, 10).toordinal()

    def test_completed_stages_ignored(self, make_project):
        project = make_project(
            deadline="2024-06-01",
            stages=[Stage("A", "2024-03-01", completed=True), Stage("B", "2024-05-01")],
        )
        assert sort_key(project) == date(2024, 5, 1).toordinal()

    def test_falls_back_to_total_deadline(self, make_project):
        project = make_project(deadline="2024-06-01", stages=[Stage("A"), Stage("B", "bad")])
        assert sort_key(project) == date(2024, 6, 1).toordinal()

    def test_no_dates_sorts_last(self, make_project):
        assert sort_key(make_project()) == MAX_SORT_KEY


class TestSortBoard:
    """Tests for sort_board."""

    def test_orders_and_excludes_archived(self, make_project):
        late = make_project("late", deadline="2024-09-01")
        soon = make_project("soon", deadline="2024-04-05")
        hidden = make_project("hidden", deadline="2024-01-01", archived=True)
        dateless = make_project("dateless")

        names = [p.name for p in sort_board([dateless, late, hidden, soon])]
        assert names == ["soon", "late", "dateless"]

    def test_stage_deadline_beats_total(self, make_project):
        a = make_project("a", deadline="2024-04-10")
        b = make_project("b", deadline="2024-12-31", stages=[Stage("proof", "2024-04-05")])
        assert [p.name for p in sort_board([a, b])] == ["b", "a"]

    def test_ties_keep_input_order(self, make_project):
        """Equal keys should not reshuffle projects."""
        first = make_project("first", deadline="2024-05-01")
        second = make_project("second", deadline="2024-05-01")
        assert [p.name for p in sort_board([first, second])] == ["first", "second"]
        assert [p.name for p in sort_board([second, first])] == ["second", "first"]


class TestSortArchive:
    """Tests for sort_archive."""

    def test_latest_first_dateless_last(self, make_project):
        old = make_project("old", deadline="2023-01-01", archived=True)
        new = make_project("new", deadline="2024-01-01", archived=True)
        none = make_project("none", archived=True)
        active = make_project("active", deadline="2024-02-01")

        assert [p.name for p in sort_archive([none, old, active, new])] == ["new", "old", "none"]
