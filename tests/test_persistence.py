from __future__ import annotations

import json
import logging

from app.controller import WorkoutPlanner
from app.models import RenamePlan
from app.services.catalog import get_by_name
from app.services.persistence import (
    PLAN_KEY,
    PLAN_NAME_KEY,
    SCHEMA_VERSION,
    SCHEMA_VERSION_KEY,
    TEMPLATES_KEY,
    PersistenceSync,
)
from app.services.plan_store import PlanStore
from app.services.storage import JsonFileStorage, MemoryStorage
from app.services.template_store import TemplateStore


def legacy_record(name: str, group: str, equipment: str, item_id: int) -> dict:
    return {"name": name, "muscleGroup": group, "equipment": equipment, "id": item_id, "sets": 4, "reps": 8}


def test_empty_storage_gives_defaults(settings) -> None:
    state = PersistenceSync(MemoryStorage(), settings).load()
    assert state.plan == []
    assert state.templates == []
    assert state.plan_name == "My Workout"


def test_round_trip(settings) -> None:
    storage = MemoryStorage()
    sync = PersistenceSync(storage, settings)
    plan = PlanStore(sync=sync, settings=settings)
    for name in ["Squat", "Plank", "Bicep Curl"]:
        plan.add(get_by_name(name))  # type: ignore[arg-type]
    plan.update(plan.items[1].id, "reps", 45)
    plan.rename("Mixed")
    templates = TemplateStore(sync=sync)
    templates.save("Mixed", plan.items)

    state = PersistenceSync(storage, settings).load()
    assert state.plan == plan.items
    assert state.plan_name == "Mixed"
    assert state.templates == templates.templates
    assert storage.get_item(SCHEMA_VERSION_KEY) == str(SCHEMA_VERSION)


def test_records_use_original_key_names(settings) -> None:
    storage = MemoryStorage()
    plan = PlanStore(sync=PersistenceSync(storage, settings), settings=settings)
    plan.add(get_by_name("Squat"))  # type: ignore[arg-type]

    record = json.loads(storage.get_item(PLAN_KEY) or "[]")[0]
    assert set(record) == {"name", "muscleGroup", "equipment", "id", "sets", "reps", "weight"}


def test_malformed_json_is_logged_and_defaulted(settings, caplog) -> None:
    storage = MemoryStorage({PLAN_KEY: "{not json", TEMPLATES_KEY: "[[", PLAN_NAME_KEY: "Kept"})
    with caplog.at_level(logging.ERROR, logger="app.services.persistence"):
        state = PersistenceSync(storage, settings).load()
    assert state.plan == []
    assert state.templates == []
    assert state.plan_name == "Kept"
    assert "workoutPlan" in caplog.text


def test_wrong_shape_is_defaulted(settings) -> None:
    storage = MemoryStorage({PLAN_KEY: json.dumps({"name": "Squat"}), TEMPLATES_KEY: "42"})
    state = PersistenceSync(storage, settings).load()
    assert state.plan == []
    assert state.templates == []


def test_legacy_records_are_migrated(settings) -> None:
    raw = [
        legacy_record("Squat", "Legs", "Barbell", 10),
        {"name": "Plank", "muscleGroup": "Core", "equipment": "Bodyweight"},
    ]
    storage = MemoryStorage({PLAN_KEY: json.dumps(raw)})
    state = PersistenceSync(storage, settings).load()

    squat, plank = state.plan
    assert (squat.id, squat.sets, squat.reps, squat.weight) == (10, 4, 8, 0)
    assert (plank.sets, plank.reps, plank.weight) == (3, 10, 0)
    assert plank.id not in (None, 10)


def test_invalid_and_duplicate_records_are_dropped(settings) -> None:
    raw = [
        legacy_record("Squat", "Legs", "Barbell", 1),
        legacy_record("Squat", "Legs", "Barbell", 2),
        legacy_record("Neck Curl", "Neck", "Machine", 3),
        "garbage",
        legacy_record("Lunge", "Legs", "Dumbbell", 1),
    ]
    storage = MemoryStorage({PLAN_KEY: json.dumps(raw), SCHEMA_VERSION_KEY: "1"})
    state = PersistenceSync(storage, settings).load()

    assert [i.name for i in state.plan] == ["Squat", "Lunge"]
    ids = [i.id for i in state.plan]
    assert len(set(ids)) == len(ids)


def test_duplicate_template_names_keep_last(settings) -> None:
    raw = [
        {"name": "Legs", "plan": [legacy_record("Squat", "Legs", "Barbell", 1)]},
        {"name": "Legs", "plan": [legacy_record("Lunge", "Legs", "Dumbbell", 1)]},
    ]
    storage = MemoryStorage({TEMPLATES_KEY: json.dumps(raw)})
    state = PersistenceSync(storage, settings).load()
    assert len(state.templates) == 1
    assert state.templates[0].plan[0].name == "Lunge"


def test_json_file_storage(tmp_path) -> None:
    path = tmp_path / "nested" / "local_storage.json"
    storage = JsonFileStorage(path)
    assert storage.get_item("missing") is None

    storage.set_item("a", "1")
    storage.set_item("b", "two")
    assert JsonFileStorage(path).get_item("b") == "two"

    storage.remove_item("a")
    assert json.loads(path.read_text(encoding="utf-8")) == {"b": "two"}


def test_corrupt_storage_file_reads_empty(tmp_path, settings) -> None:
    path = tmp_path / "local_storage.json"
    path.write_text("not json at all", encoding="utf-8")
    storage = JsonFileStorage(path)

    assert PersistenceSync(storage, settings).load().plan == []
    storage.set_item(PLAN_NAME_KEY, "Fresh")
    assert storage.get_item(PLAN_NAME_KEY) == "Fresh"


def test_legacy_templates_survive_a_later_unrelated_write(settings) -> None:
    legacy = [{"name": "Legs", "plan": [{"name": "Squat", "muscleGroup": "Legs", "equipment": "Barbell", "id": 1}]}]
    storage = MemoryStorage({TEMPLATES_KEY: json.dumps(legacy)})

    first = WorkoutPlanner.from_storage(storage, settings)
    assert storage.get_item(SCHEMA_VERSION_KEY) == str(SCHEMA_VERSION)
    assert first.dispatch(RenamePlan(name="Anything")).ok

    second = WorkoutPlanner.from_storage(storage, settings)
    (template,) = second.templates.templates
    (squat,) = template.plan
    assert (squat.name, squat.sets, squat.reps, squat.weight) == ("Squat", 3, 10, 0)


def test_migration_rewrites_only_stored_keys(settings) -> None:
    raw = [{"name": "Plank", "muscleGroup": "Core", "equipment": "Bodyweight", "id": 5}]
    storage = MemoryStorage({PLAN_KEY: json.dumps(raw), PLAN_NAME_KEY: "Core"})
    PersistenceSync(storage, settings).load()

    (record,) = json.loads(storage.get_item(PLAN_KEY) or "[]")
    assert (record["sets"], record["reps"], record["weight"]) == (3, 10, 0)
    assert storage.get_item(TEMPLATES_KEY) is None
    assert storage.get_item(PLAN_NAME_KEY) == "Core"


def test_current_schema_load_does_not_write(settings) -> None:
    storage = MemoryStorage({PLAN_KEY: "[]", SCHEMA_VERSION_KEY: str(SCHEMA_VERSION)})
    before = storage.snapshot()
    PersistenceSync(storage, settings).load()
    assert storage.snapshot() == before
