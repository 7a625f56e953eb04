"""Urgency classification of deadlines."""

from dataclasses import dataclass
from enum import Enum

from printflow.projects.dates import DateLike, diff_days, parse_date
from printflow.projects.models import Stage

URGENT_DAYS = 3
WATCH_DAYS = 7


class UrgencyTier(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    WATCH = "watch"
    NORMAL = "normal"


TIER_STYLES = {
    UrgencyTier.OVERDUE: "bg-stone-100 text-stone-500 border-stone-200 line-through",
    UrgencyTier.URGENT: "bg-red-50 text-red-700 border-red-200 font-medium",
    UrgencyTier.WATCH: "bg-orange-50 text-orange-700 border-orange-200",
    UrgencyTier.NORMAL: "bg-emerald-50 text-emerald-700 border-emerald-200",
}

# Terminal colors for the same tiers
TIER_COLORS = {
    UrgencyTier.OVERDUE: "dim strike",
    UrgencyTier.URGENT: "bold red",
    UrgencyTier.WATCH: "dark_orange",
    UrgencyTier.NORMAL: "green",
}


@dataclass(frozen=True)
class DeadlineStatus:
    """Classification of a single deadline."""

    label: str
    tier: UrgencyTier
    style: str
    is_urgent: bool
    is_overdue: bool
    days: int

    @property
    def color(self) -> str:
        return TIER_COLORS[self.tier]


def classify(deadline: DateLike, today: DateLike = None) -> DeadlineStatus:
    """
    Map a deadline to its urgency tier.

    Cut points are inclusive: 0-3 days is urgent, 4-7 is watch, anything
    later (or no deadline at all) is normal, and a passed date is overdue.
    """
    diff = diff_days(deadline, today)

    if diff < 0:
        return DeadlineStatus("已逾期", UrgencyTier.OVERDUE, TIER_STYLES[UrgencyTier.OVERDUE], True, True, diff)
    if diff <= URGENT_DAYS:
        return DeadlineStatus(f"急迫 ({diff}天)", UrgencyTier.URGENT, TIER_STYLES[UrgencyTier.URGENT], True, False, diff)
    if diff <= WATCH_DAYS:
        return DeadlineStatus(f"留意 ({diff}天)", UrgencyTier.WATCH, TIER_STYLES[UrgencyTier.WATCH], False, False, diff)

    label = "無期限" if parse_date(deadline) is None else f"正常 ({diff}天)"
    return DeadlineStatus(label, UrgencyTier.NORMAL, TIER_STYLES[UrgencyTier.NORMAL], False, False, diff)


def is_stage_urgent(stage: Stage, today: DateLike = None) -> bool:
    """True for an open stage whose deadline is at most three days away (or passed)."""
    if stage.completed or not stage.deadline:
        return False
    return diff_days(stage.deadline, today) <= URGENT_DAYS
