"""Tests for backup export and import."""

import json
from datetime import datetime, timezone

import pytest

from printflow.exceptions import BackupError
from printflow.projects.models import DeliveryMethod, Project
from printflow.projects.store import Snapshot
from printflow.storage.backup import (
    BACKUP_VERSION,
    apply_backup,
    backup_filename,
    dump_backup,
    export_backup,
    load_backup,
)

NOW = datetime(2024, 4, 1, 9, 30, tzinfo=timezone.utc)


class TestExport:
    """Tests for export_backup."""

    def test_shape(self, snapshot):
        data = export_backup(snapshot, NOW)
        assert set(data) == {"projects", "availableTags", "appTitle", "tagColors", "memos", "version", "timestamp"}
        assert data["version"] == BACKUP_VERSION
        assert data["timestamp"] == "2024-04-01T09:30:00+00:00"
        assert data["projects"][0]["stages"][2] == {
            "name": "燙金加工", "deadline": "2024-04-10", "completed": False, "tag": "燙金",
        }

    def test_optional_fields_omitted(self):
        data = export_backup(Snapshot(projects=(Project(id=1, name="a"),)), NOW)
        assert "deliveryMethod" not in data["projects"][0]
        assert "notes" not in data["projects"][0]

    def test_dump_keeps_unicode(self, snapshot):
        assert "燙金" in dump_backup(snapshot, NOW)

    def test_filename(self):
        assert backup_filename(NOW) == "printflow-backup-2024-04-01.json"


class TestImport:
    """Tests for load_backup and apply_backup."""

    def test_round_trip(self, snapshot):
        restored = apply_backup(Snapshot(), load_backup(dump_backup(snapshot, NOW)))
        assert restored.projects == snapshot.projects
        assert restored.available_tags == snapshot.available_tags
        assert restored.app_title == snapshot.app_title

    def test_wire_values(self):
        text = json.dumps({
            "projects": [{"id": 1, "name": "a", "deadline": "2024-05-01", "tags": ["x"],
                          "deliveryMethod": "宅配", "archived": False, "stages": []}],
        })
        backup = load_backup(text)
        assert backup.projects[0].delivery_method is DeliveryMethod.DELIVERY
        assert backup.available_tags is None

    def test_utf8_bytes(self, snapshot):
        backup = load_backup(dump_backup(snapshot, NOW).encode("utf-8"))
        assert backup.projects[0].tags == ("燙金", "數位印刷")

    def test_missing_slices_keep_current(self, snapshot):
        backup = load_backup(json.dumps({"projects": []}))
        restored = apply_backup(snapshot, backup)
        assert restored.projects == ()
        assert restored.available_tags == snapshot.available_tags

    @pytest.mark.parametrize(
        "text",
        [
            "{not json",
            json.dumps([1, 2]),
            json.dumps({"availableTags": []}),
            json.dumps({"projects": "nope"}),
            json.dumps({"projects": [{"name": "no id"}]}),
            json.dumps({"projects": ["string"]}),
            json.dumps({"projects": [{"id": 1.5, "name": "fractional id"}]}),
            b'{"projects": [], "appTitle": "\xff\xfe"}',
        ],
    )
    def test_rejected(self, text):
        with pytest.raises(BackupError) as exc_info:
            load_backup(text)
        assert exc_info.value.exit_code == 2
        assert exc_info.value.hint
