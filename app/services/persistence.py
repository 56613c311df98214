from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from app.config import Settings, get_settings
from app.models.plan import PlanItem, Template
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

PLAN_KEY = "workoutPlan"
PLAN_NAME_KEY = "workoutPlanName"
TEMPLATES_KEY = "workoutTemplates"
SCHEMA_VERSION_KEY = "workoutSchemaVersion"

# v1: records written before weight was tracked, no version key.
# v2: PlanItem carries weight; version key written alongside every save.
SCHEMA_VERSION = 2


@dataclass
class PersistedState:
    plan: List[PlanItem] = field(default_factory=list)
    plan_name: str = ""
    templates: List[Template] = field(default_factory=list)


def dump_items(items: Sequence[PlanItem]) -> List[Dict[str, Any]]:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


def dump_templates(templates: Sequence[Template]) -> List[Dict[str, Any]]:
    return [{"name": t.name, "plan": dump_items(t.plan)} for t in templates]


def migrate_items(raw: Any, version: int, settings: Settings) -> List[PlanItem]:
    """Bring stored PlanItem records up to the current shape.

    Invalid records are skipped, duplicate exercise names keep the first
    occurrence, and missing or repeated ids are replaced with fresh ones.
    """
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of plan items, got {type(raw).__name__}")

    records: List[Dict[str, Any]] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object plan item record: %r", entry)
            continue
        record = dict(entry)
        if version < 2:
            # Legacy items never tracked weight; zero keeps their volume at zero.
            record.setdefault("weight", 0)
            record.setdefault("sets", settings.DEFAULT_SETS)
            record.setdefault("reps", settings.DEFAULT_REPS)
        records.append(record)

    numeric_ids = [r["id"] for r in records if isinstance(r.get("id"), int) and not isinstance(r.get("id"), bool)]
    next_id = max(numeric_ids, default=0) + 1

    items: List[PlanItem] = []
    seen_ids: set[int] = set()
    seen_names: set[str] = set()
    for record in records:
        rid = record.get("id")
        if not isinstance(rid, int) or isinstance(rid, bool) or rid in seen_ids:
            record["id"] = next_id
            next_id += 1
        try:
            item = PlanItem.model_validate(record)
        except ValidationError as e:
            logger.warning("Skipping invalid plan item record %r: %s", record.get("name"), e.error_count())
            continue
        if item.name in seen_names:
            logger.info("Dropping duplicate plan item %r", item.name)
            continue
        seen_ids.add(item.id)
        seen_names.add(item.name)
        items.append(item)
    return items


def migrate_templates(raw: Any, version: int, settings: Settings) -> List[Template]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of templates, got {type(raw).__name__}")
    by_name: Dict[str, Template] = {}
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            logger.warning("Skipping malformed template record: %r", entry)
            continue
        name = entry["name"]
        plan = migrate_items(entry.get("plan", []), version, settings)
        # Later records win, matching save-overwrites-by-name.
        by_name.pop(name, None)
        by_name[name] = Template(name=name, plan=plan)
    return list(by_name.values())


class PersistenceSync:
    """Loads the persisted planner state and writes each key through on change."""

    def __init__(self, storage: KeyValueStorage, settings: Settings | None = None) -> None:
        self.storage = storage
        self.settings = settings or get_settings()

    # ---- load ----

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except OSError as e:
            logger.error("Failed to read %s from storage: %s", key, e)
            return None

    def _read_json(self, key: str) -> Any:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse %s from storage: %s", key, e)
            return None

    def stored_version(self) -> int:
        raw = self._read(SCHEMA_VERSION_KEY)
        if raw is None:
            return 1
        try:
            version = int(raw)
        except ValueError:
            logger.warning("Unreadable schema version %r; assuming 1", raw)
            return 1
        if version > SCHEMA_VERSION:
            logger.warning("Stored schema version %s is newer than %s", version, SCHEMA_VERSION)
        return version

    def load(self) -> PersistedState:
        version = self.stored_version()
        state = PersistedState(plan_name=self.settings.DEFAULT_PLAN_NAME)

        migrated_plan = migrated_templates = False
        raw_plan = self._read_json(PLAN_KEY)
        if raw_plan is not None:
            try:
                state.plan = migrate_items(raw_plan, version, self.settings)
                migrated_plan = True
            except ValueError as e:
                logger.error("Ignoring stored plan: %s", e)

        name = self._read(PLAN_NAME_KEY)
        if name:
            state.plan_name = name

        raw_templates = self._read_json(TEMPLATES_KEY)
        if raw_templates is not None:
            try:
                state.templates = migrate_templates(raw_templates, version, self.settings)
                migrated_templates = True
            except ValueError as e:
                logger.error("Ignoring stored templates: %s", e)

        if version < SCHEMA_VERSION:
            # The version key is shared, so every migrated value is rewritten
            # before any later write stamps the store as current.
            if migrated_plan:
                self.write_plan(state.plan)
            if migrated_templates:
                self.write_templates(state.templates)
            if migrated_plan or migrated_templates:
                logger.info("Migrated stored planner state from schema v%d to v%d", version, SCHEMA_VERSION)

        logger.info(
            "Loaded planner state: %d plan items, %d templates (schema v%d)",
            len(state.plan),
            len(state.templates),
            version,
        )
        return state

    # ---- write-through ----

    def _write(self, key: str, value: str) -> None:
        self.storage.set_item(key, value)
        self.storage.set_item(SCHEMA_VERSION_KEY, str(SCHEMA_VERSION))
        logger.debug("Wrote %s (%d chars)", key, len(value))

    def write_plan(self, items: Sequence[PlanItem]) -> None:
        self._write(PLAN_KEY, json.dumps(dump_items(items)))

    def write_plan_name(self, name: str) -> None:
        self._write(PLAN_NAME_KEY, name)

    def write_templates(self, templates: Sequence[Template]) -> None:
        self._write(TEMPLATES_KEY, json.dumps(dump_templates(templates)))
