from __future__ import annotations

from typing import List, Literal, Tuple, get_args

from pydantic import ConfigDict, Field, BaseModel
from pydantic.alias_generators import to_camel

from .exercise import Exercise, ExerciseFields


QuantityField = Literal["sets", "reps", "weight"]
QUANTITY_FIELDS: Tuple[str, ...] = get_args(QuantityField)


class PlanItem(ExerciseFields):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    id: int
    sets: int = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    weight: int = Field(0, ge=0)

    @classmethod
    def from_exercise(cls, exercise: Exercise, *, item_id: int, sets: int, reps: int, weight: int) -> "PlanItem":
        return cls(
            name=exercise.name,
            muscle_group=exercise.muscle_group,
            equipment=exercise.equipment,
            id=item_id,
            sets=sets,
            reps=reps,
            weight=weight,
        )

    @property
    def volume(self) -> int:
        return self.sets * self.reps * self.weight


class Template(BaseModel):
    name: str
    plan: List[PlanItem] = Field(default_factory=list)
