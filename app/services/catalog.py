from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from app.models.exercise import ALL_MUSCLE_GROUPS, MUSCLE_FILTERS, Exercise

CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "exercise_catalog.json"


@lru_cache(maxsize=1)
def load_catalog() -> tuple[Exercise, ...]:
    with CATALOG_PATH.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    exercises = tuple(Exercise.model_validate(item) for item in raw)
    names = [ex.name for ex in exercises]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate exercise names in {CATALOG_PATH.name}")
    return exercises


@lru_cache(maxsize=1)
def _catalog_index() -> Dict[str, Exercise]:
    return {ex.name: ex for ex in load_catalog()}


def get_by_name(name: str) -> Optional[Exercise]:
    return _catalog_index().get(name)


def iter_catalog(
    muscle_filter: str = ALL_MUSCLE_GROUPS,
    search: str = "",
    exercises: Sequence[Exercise] | None = None,
) -> Iterator[Exercise]:
    """Lazily iterate catalog entries matching the muscle filter and search text.

    ``muscle_filter`` is a muscle group or ``"All"``; ``search`` matches as a
    case-insensitive substring of the exercise name. Catalog order is kept.
    An unknown ``muscle_filter`` raises ``ValueError`` at call time, before
    anything is iterated.
    """
    if muscle_filter not in MUSCLE_FILTERS:
        raise ValueError(f"Unknown muscle filter: {muscle_filter!r}")
    source = load_catalog() if exercises is None else exercises
    return _iter_matches(source, muscle_filter, (search or "").lower())


def _iter_matches(source: Sequence[Exercise], muscle_filter: str, needle: str) -> Iterator[Exercise]:
    for ex in source:
        if muscle_filter != ALL_MUSCLE_GROUPS and ex.muscle_group != muscle_filter:
            continue
        if needle not in ex.name.lower():
            continue
        yield ex


def filter_catalog(
    muscle_filter: str = ALL_MUSCLE_GROUPS,
    search: str = "",
    exercises: Sequence[Exercise] | None = None,
) -> List[Exercise]:
    return list(iter_catalog(muscle_filter, search, exercises))
