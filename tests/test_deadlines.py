"""Tests for deadline urgency classification."""

from datetime import date, timedelta

import pytest

from printflow.projects.deadlines import UrgencyTier, classify, is_stage_urgent
from printflow.projects.models import Stage

TODAY = date(2024, 4, 1)


def _in(days: int) -> str:
    return (TODAY + timedelta(days=days)).isoformat()


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "days, tier",
        [
            (-1, UrgencyTier.OVERDUE),
            (0, UrgencyTier.URGENT),
            (3, UrgencyTier.URGENT),
            (4, UrgencyTier.WATCH),
            (7, UrgencyTier.WATCH),
            (8, UrgencyTier.NORMAL),
        ],
    )
    def test_tier_boundaries(self, days, tier):
        assert classify(_in(days), TODAY).tier is tier

    def test_overdue_flags(self):
        status = classify(_in(-5), TODAY)
        assert status.is_overdue
        assert status.is_urgent
        assert status.label == "已逾期"

    def test_urgent_flags_and_label(self):
        status = classify(_in(2), TODAY)
        assert status.is_urgent
        assert not status.is_overdue
        assert status.label == "急迫 (2天)"

    def test_watch_is_not_urgent(self):
        status = classify(_in(5), TODAY)
        assert not status.is_urgent
        assert status.label == "留意 (5天)"

    def test_no_deadline_is_normal(self):
        status = classify("", TODAY)
        assert status.tier is UrgencyTier.NORMAL
        assert not status.is_urgent
        assert status.label == "無期限"

    def test_malformed_deadline_is_normal(self):
        assert classify("soon", TODAY).tier is UrgencyTier.NORMAL

    def test_each_tier_has_style(self):
        styles = {classify(_in(d), TODAY).style for d in (-1, 1, 5, 30)}
        assert len(styles) == 4


class TestStageUrgency:
    """Tests for is_stage_urgent."""

    def test_open_stage_due_soon(self):
        assert is_stage_urgent(Stage("Proof", _in(3)), TODAY)

    def test_completed_stage_never_urgent(self):
        assert not is_stage_urgent(Stage("Proof", _in(1), completed=True), TODAY)

    def test_stage_without_deadline(self):
        assert not is_stage_urgent(Stage("Proof"), TODAY)

    def test_stage_far_away(self):
        assert not is_stage_urgent(Stage("Proof", _in(4)), TODAY)
