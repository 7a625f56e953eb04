"""Tests for the JSON wire shape of records."""

import pytest

from printflow.projects.models import Project, Stage


class TestProjectFromDict:
    """Tests for Project.from_dict."""

    def test_integral_float_id_accepted(self):
        assert Project.from_dict({"id": 1712000000000.0, "name": "a"}).id == 1712000000000

    @pytest.mark.parametrize("raw_id", [1.5, "7", None, True])
    def test_non_integer_id_rejected(self, raw_id):
        with pytest.raises(ValueError):
            Project.from_dict({"id": raw_id, "name": "a"})

    def test_string_flag_is_not_true(self):
        """A stringly-typed "false" must not archive the project."""
        project = Project.from_dict({"id": 1, "name": "a", "archived": "false"})
        assert project.archived is False

    def test_real_flag(self):
        assert Project.from_dict({"id": 1, "name": "a", "archived": True}).archived is True


class TestStageFromDict:
    """Tests for Stage.from_dict."""

    @pytest.mark.parametrize("value", ["false", "true", 1, None])
    def test_only_booleans_complete_a_stage(self, value):
        assert Stage.from_dict({"name": "Proof", "completed": value}).completed is False

    def test_completed(self):
        assert Stage.from_dict({"name": "Proof", "completed": True}).completed is True

    def test_empty_tag_dropped(self):
        assert Stage.from_dict({"name": "Proof", "tag": ""}).to_dict() == {
            "name": "Proof", "deadline": "", "completed": False,
        }
