"""Tests for snapshot mutations."""

from dataclasses import replace
from datetime import datetime

import pytest

from printflow.projects.models import DeliveryMethod, Project, Stage
from printflow.projects.store import (
    DEFAULT_STAGE_NAME,
    Snapshot,
    add_global_tag,
    clear_archived,
    create_project,
    delete_project,
    new_project,
    next_project_id,
    remove_global_tag,
    sample_project,
    set_app_title,
    set_tag_color,
    toggle_archive,
    toggle_stage_completed,
    update_project,
    validate_project_form,
)

NOW = datetime(2024, 4, 1, 9, 30)


class TestProjectMutations:
    """Tests for project create/update/delete."""

    def test_create_appends_unarchived(self, snapshot):
        project = new_project(snapshot, "New job", "2024-05-01", now=NOW)
        updated = create_project(snapshot, replace(project, archived=True))

        assert updated is not snapshot
        assert updated.projects[-1].name == "New job"
        assert not updated.projects[-1].archived
        assert len(snapshot.projects) == 3  # original untouched

    def test_new_project_defaults(self, snapshot):
        project = new_project(snapshot, "  Job  ", "2024-05-01", tags=["a", "a", "b"], now=NOW)
        assert project.name == "Job"
        assert project.tags == ("a", "b")
        assert project.stages == (Stage(DEFAULT_STAGE_NAME),)
        assert project.id == int(NOW.timestamp() * 1000)

    def test_new_project_keeps_delivery_and_notes(self, snapshot):
        project = new_project(
            snapshot, "Job", "2024-05-01",
            stages=[], delivery_method=DeliveryMethod.DELIVERY, notes="call first", now=NOW,
        )
        assert project.stages == ()
        assert project.delivery_method is DeliveryMethod.DELIVERY
        assert project.notes == "call first"

    def test_id_collision_bumped(self):
        """Two projects created in the same millisecond get distinct ids."""
        taken = int(NOW.timestamp() * 1000)
        snapshot = Snapshot(projects=(Project(id=taken, name="x"),))
        assert next_project_id(snapshot, NOW) == taken + 1

    def test_update_replaces_wholesale(self, snapshot):
        project = snapshot.projects[1]
        updated = update_project(snapshot, replace(project, name="Renamed", tags=()))
        assert updated.get_project(project.id).name == "Renamed"
        assert updated.get_project(project.id).tags == ()

    def test_delete(self, snapshot):
        updated = delete_project(snapshot, snapshot.projects[0].id)
        assert len(updated.projects) == 2
        assert updated.get_project(snapshot.projects[0].id) is None

    def test_toggle_archive_both_ways(self, snapshot):
        project_id = snapshot.projects[0].id
        archived = toggle_archive(snapshot, project_id)
        assert archived.get_project(project_id).archived
        restored = toggle_archive(archived, project_id)
        assert not restored.get_project(project_id).archived

    def test_toggle_stage(self, snapshot):
        project_id = snapshot.projects[0].id
        updated = toggle_stage_completed(snapshot, project_id, 1)
        assert updated.get_project(project_id).stages[1].completed
        assert not snapshot.get_project(project_id).stages[1].completed

    def test_clear_archived(self, snapshot):
        updated = clear_archived(snapshot)
        assert updated.archived_projects == []
        assert len(updated.active_projects) == 2


class TestNoOps:
    """Invalid targets return the very same snapshot."""

    @pytest.mark.parametrize(
        "mutation",
        [
            lambda s: update_project(s, Project(id=-1, name="ghost")),
            lambda s: delete_project(s, -1),
            lambda s: toggle_archive(s, -1),
            lambda s: toggle_stage_completed(s, -1, 0),
            lambda s: toggle_stage_completed(s, s.projects[0].id, 99),
            lambda s: toggle_stage_completed(s, s.projects[0].id, -1),
            lambda s: add_global_tag(s, "燙金"),
            lambda s: add_global_tag(s, "   "),
            lambda s: remove_global_tag(s, "unknown"),
            lambda s: set_tag_color(s, "燙金", None),
            lambda s: set_app_title(s, s.app_title),
        ],
    )
    def test_returns_same_object(self, snapshot, mutation):
        assert mutation(snapshot) is snapshot

    def test_clear_archived_without_archive(self):
        snapshot = Snapshot(projects=(Project(id=1, name="a"),))
        assert clear_archived(snapshot) is snapshot


class TestTagsAndTitle:
    """Tests for tag registry, colors and title."""

    def test_add_tag_strips(self, snapshot):
        updated = add_global_tag(snapshot, "  斬型 ")
        assert updated.available_tags[-1] == "斬型"

    def test_remove_tag_keeps_projects(self, snapshot):
        updated = remove_global_tag(snapshot, "燙金")
        assert "燙金" not in updated.available_tags
        assert "燙金" in updated.projects[0].tags

    def test_set_and_reset_color(self, snapshot):
        token = "bg-[#000000] text-[#ffffff] border-[#111111]"
        colored = set_tag_color(snapshot, "燙金", token)
        assert colored.tag_colors == {"燙金": token}
        assert snapshot.tag_colors == {}
        reset = set_tag_color(colored, "燙金", "")
        assert reset.tag_colors == {}

    def test_set_title(self, snapshot):
        assert set_app_title(snapshot, "Studio").app_title == "Studio"


class TestValidation:
    """Tests for validate_project_form."""

    def test_ok(self):
        assert validate_project_form("Job", "2024-05-01") == []

    def test_missing_fields(self):
        assert len(validate_project_form(" ", "")) == 2

    def test_bad_date(self):
        issues = validate_project_form("Job", "tomorrow")
        assert len(issues) == 1
        assert "tomorrow" in issues[0]


class TestSampleProject:
    """Tests for the first-run example project."""

    def test_shape(self):
        project = sample_project(NOW)
        assert project.deadline == "2024-04-06"
        assert project.tags == ("數位印刷", "燙金")
        assert [s.completed for s in project.stages] == [True, False]
