from __future__ import annotations

import pytest

from app.config import Settings
from app.controller import WorkoutPlanner
from app.services.storage import MemoryStorage


@pytest.fixture
def settings() -> Settings:
    # Ignore any local .env so defaults are predictable.
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def planner(storage: MemoryStorage, settings: Settings) -> WorkoutPlanner:
    return WorkoutPlanner.from_storage(storage, settings)
