"""Shared fixtures."""

from datetime import date

import pytest

from printflow.projects.models import Project, Stage
from printflow.projects.store import Snapshot

TODAY = date(2024, 4, 1)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_project():
    """Factory for projects with sensible defaults."""
    counter = {"next": 1}

    def _make(name="Poster", deadline="", tags=(), stages=(), archived=False, **kwargs) -> Project:
        project_id = kwargs.pop("id", None)
        if project_id is None:
            project_id = counter["next"]
            counter["next"] += 1
        return Project(
            id=project_id,
            name=name,
            deadline=deadline,
            tags=tuple(tags),
            stages=tuple(stages),
            archived=archived,
            **kwargs,
        )

    return _make


@pytest.fixture
def snapshot(make_project) -> Snapshot:
    return Snapshot(
        projects=(
            make_project(
                "Summer poster",
                deadline="2024-04-20",
                tags=("燙金", "數位印刷"),
                stages=(
                    Stage("設計完稿", "2024-04-03", completed=True),
                    Stage("打樣確認", "2024-04-05"),
                    Stage("燙金加工", "2024-04-10", tag="燙金"),
                ),
            ),
            make_project("Business cards", deadline="2024-04-02", tags=("凸版",)),
            make_project("Old catalogue", deadline="2024-03-01", tags=("燙金",), archived=True),
        ),
        available_tags=("數位印刷", "燙金", "凸版"),
    )
