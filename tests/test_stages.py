"""Tests for stage-derived project status."""

from printflow.projects.models import Stage
from printflow.projects.stages import (
    DONE_MARKER,
    NO_STAGES_MARKER,
    ProjectStatus,
    active_stage_deadline,
    current_stage_name,
    project_status,
)


class TestProjectStatus:
    """Tests for project_status."""

    def test_no_stages_is_unplanned(self, make_project):
        assert project_status(make_project()) is ProjectStatus.UNPLANNED

    def test_all_done(self, make_project):
        project = make_project(stages=[Stage("A", completed=True), Stage("B", completed=True)])
        assert project_status(project) is ProjectStatus.DONE

    def test_some_done(self, make_project):
        project = make_project(stages=[Stage("A", completed=True), Stage("B")])
        assert project_status(project) is ProjectStatus.IN_PROGRESS

    def test_none_done(self, make_project):
        project = make_project(stages=[Stage("A"), Stage("B")])
        assert project_status(project) is ProjectStatus.NOT_STARTED

    def test_labels(self):
        assert ProjectStatus.DONE.label == "已完成"
        assert ProjectStatus.IN_PROGRESS.label == "進行中"
        assert ProjectStatus.NOT_STARTED.label == "未開始"
        assert ProjectStatus.UNPLANNED.label == "未規劃"


class TestCurrentStage:
    """Tests for current_stage_name."""

    def test_first_incomplete_in_list_order(self, make_project):
        project = make_project(stages=[Stage("done", completed=True), Stage("A"), Stage("B")])
        assert current_stage_name(project) == "A"

    def test_ignores_deadlines(self, make_project):
        """A later stage with an earlier deadline does not become current."""
        project = make_project(stages=[Stage("A", "2024-06-01"), Stage("B", "2024-05-01")])
        assert current_stage_name(project) == "A"

    def test_all_done_marker(self, make_project):
        project = make_project(stages=[Stage("A", completed=True)])
        assert current_stage_name(project) == DONE_MARKER

    def test_no_stages_marker(self, make_project):
        assert current_stage_name(make_project()) == NO_STAGES_MARKER


class TestActiveStageDeadline:
    """Tests for active_stage_deadline."""

    def test_first_incomplete_with_deadline(self, make_project):
        project = make_project(
            deadline="2024-06-30",
            stages=[Stage("A", "2024-04-01", completed=True), Stage("B"), Stage("C", "2024-05-10")],
        )
        assert active_stage_deadline(project) == "2024-05-10"

    def test_falls_back_to_project_deadline(self, make_project):
        project = make_project(deadline="2024-06-30", stages=[Stage("A"), Stage("B", "garbage")])
        assert active_stage_deadline(project) == "2024-06-30"
