from __future__ import annotations

from collections import Counter
from typing import Dict, Sequence

from app.models.dashboard import NO_FOCUS, DashboardStats, DashboardSummary
from app.models.exercise import EQUIPMENT_TYPES, MUSCLE_GROUPS
from app.models.plan import PlanItem


def _primary_focus(items: Sequence[PlanItem]) -> str:
    # Counter keeps first-seen order, and max() returns the first maximal
    # entry, so ties go to the group that entered the plan first.
    counts = Counter(item.muscle_group for item in items)
    if not counts:
        return NO_FOCUS
    return max(counts.items(), key=lambda kv: kv[1])[0]


def category_counts(items: Sequence[PlanItem], categories: Sequence[str], attr: str) -> Dict[str, int]:
    counts = Counter(getattr(item, attr) for item in items)
    return {category: counts.get(category, 0) for category in categories}


def compute_stats(items: Sequence[PlanItem]) -> DashboardStats:
    return DashboardStats(
        total_exercises=len(items),
        muscle_groups_targeted=len({item.muscle_group for item in items}),
        total_volume=sum(item.volume for item in items),
        primary_focus=_primary_focus(items),
    )


def summarize(items: Sequence[PlanItem]) -> DashboardSummary:
    return DashboardSummary(
        stats=compute_stats(items),
        muscle_counts=category_counts(items, MUSCLE_GROUPS, "muscle_group"),
        equipment_counts=category_counts(items, EQUIPMENT_TYPES, "equipment"),
    )
