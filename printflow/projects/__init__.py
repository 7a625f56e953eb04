"""Print project model and the derivation engine built on it."""

from printflow.projects.models import DeliveryMethod, Memo, Project, Stage
from printflow.projects.store import Snapshot

__all__ = ["DeliveryMethod", "Memo", "Project", "Snapshot", "Stage"]
