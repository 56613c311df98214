from __future__ import annotations

from typing import Dict

from pydantic import BaseModel


NO_FOCUS = "N/A"


class DashboardStats(BaseModel):
    total_exercises: int = 0
    muscle_groups_targeted: int = 0
    total_volume: int = 0
    primary_focus: str = NO_FOCUS


class DashboardSummary(BaseModel):
    stats: DashboardStats
    # Insertion order follows the category enumeration, zeros included.
    muscle_counts: Dict[str, int]
    equipment_counts: Dict[str, int]
