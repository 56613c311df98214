from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Sequence

from app.config import Settings, get_settings
from app.models.exercise import Exercise
from app.models.plan import QUANTITY_FIELDS, PlanItem
from .persistence import PersistenceSync

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_quantity(value: Any) -> int:
    """Turn raw widget input into a non-negative integer.

    Integers pass through, floats are truncated and strings are read up to the
    first non-digit (``"12kg"`` is 12). Negative or unparseable input is 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        number = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        number = int(match.group(1))
    else:
        return 0
    return max(number, 0)


class PlanStore:
    """Ordered plan items plus the plan name.

    Every effective mutation is written through to ``sync``; no-ops are not.
    """

    def __init__(
        self,
        items: Sequence[PlanItem] = (),
        name: Optional[str] = None,
        sync: Optional[PersistenceSync] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.sync = sync
        self._items: List[PlanItem] = [item.model_copy(deep=True) for item in items]
        self._name = self.settings.DEFAULT_PLAN_NAME if name is None else name
        self._next_id = self._id_floor()
        # Bumped whenever the item list is swapped out wholesale.
        self.revision = 0

    def _id_floor(self) -> int:
        return max((item.id for item in self._items), default=0) + 1

    def _new_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def _index_of(self, item_id: int) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _persist_items(self) -> None:
        if self.sync is not None:
            self.sync.write_plan(self._items)

    def _persist_name(self) -> None:
        if self.sync is not None:
            self.sync.write_plan_name(self._name)

    # ---- read side ----

    @property
    def items(self) -> List[PlanItem]:
        return [item.model_copy(deep=True) for item in self._items]

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, exercise_name: str) -> bool:
        return any(item.name == exercise_name for item in self._items)

    def get(self, item_id: int) -> Optional[PlanItem]:
        idx = self._index_of(item_id)
        return None if idx is None else self._items[idx].model_copy()

    # ---- mutations ----

    def add(self, exercise: Exercise) -> Optional[PlanItem]:
        if self.contains(exercise.name):
            logger.debug("Exercise %r already in plan; ignoring add", exercise.name)
            return None
        item = PlanItem.from_exercise(
            exercise,
            item_id=self._new_id(),
            sets=self.settings.DEFAULT_SETS,
            reps=self.settings.DEFAULT_REPS,
            weight=self.settings.DEFAULT_WEIGHT,
        )
        self._items.append(item)
        self._persist_items()
        return item.model_copy()

    def remove(self, item_id: int) -> bool:
        idx = self._index_of(item_id)
        if idx is None:
            return False
        del self._items[idx]
        self._persist_items()
        return True

    def update(self, item_id: int, field: str, value: Any) -> bool:
        if field not in QUANTITY_FIELDS:
            raise ValueError(f"Unknown quantity field: {field!r}")
        idx = self._index_of(item_id)
        if idx is None:
            return False
        setattr(self._items[idx], field, coerce_quantity(value))
        self._persist_items()
        return True

    def reorder(self, dragged_id: int, target_id: int) -> bool:
        """Move ``dragged_id`` so it sits immediately before ``target_id``."""
        if dragged_id == target_id:
            return False
        dragged_idx = self._index_of(dragged_id)
        target_idx = self._index_of(target_id)
        if dragged_idx is None or target_idx is None:
            return False
        if dragged_idx + 1 == target_idx:
            return False
        item = self._items.pop(dragged_idx)
        if dragged_idx < target_idx:
            # Popping shifted the target one slot up.
            target_idx -= 1
        self._items.insert(target_idx, item)
        self._persist_items()
        return True

    def clear(self, reset_name: Optional[bool] = None) -> None:
        """Empty the plan; optionally reset the name to the cleared placeholder."""
        if reset_name is None:
            reset_name = self.settings.CLEAR_RESETS_PLAN_NAME
        self._items = []
        self.revision += 1
        self._persist_items()
        if reset_name:
            self.rename(self.settings.CLEARED_PLAN_NAME)

    def rename(self, name: str) -> bool:
        if name == self._name:
            return False
        self._name = name
        self._persist_name()
        return True

    def replace(self, name: str, items: Sequence[PlanItem]) -> None:
        self._items = [item.model_copy(deep=True) for item in items]
        self._next_id = max(self._next_id, self._id_floor())
        self.revision += 1
        self._persist_items()
        self.rename(name)
