from __future__ import annotations

from typing import Literal, Tuple, get_args

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


MuscleGroup = Literal["Chest", "Back", "Legs", "Shoulders", "Arms", "Core"]

EquipmentType = Literal["Barbell", "Dumbbell", "Kettlebell", "Machine", "Bodyweight"]

# Declaration order drives filter chips and chart axes.
MUSCLE_GROUPS: Tuple[str, ...] = get_args(MuscleGroup)
EQUIPMENT_TYPES: Tuple[str, ...] = get_args(EquipmentType)

ALL_MUSCLE_GROUPS = "All"
MUSCLE_FILTERS: Tuple[str, ...] = (ALL_MUSCLE_GROUPS, *MUSCLE_GROUPS)


class ExerciseFields(BaseModel):
    """Catalog attributes shared by catalog entries and plan items.

    Stored records use camelCase keys (``muscleGroup``); Python code uses the
    snake_case attribute names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    muscle_group: MuscleGroup
    equipment: EquipmentType


class Exercise(ExerciseFields):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "examples": [
                {"name": "Bench Press", "muscleGroup": "Chest", "equipment": "Barbell"},
            ]
        },
    )
