from __future__ import annotations

import json

import pytest

from app.services.catalog import get_by_name
from app.services.persistence import TEMPLATES_KEY, PersistenceSync
from app.services.plan_store import PlanStore
from app.services.storage import MemoryStorage
from app.services.template_store import EMPTY_NAME_MESSAGE, TemplateNameError, TemplateStore, template_caption


def plan_with(settings, *names: str) -> PlanStore:
    store = PlanStore(settings=settings)
    for name in names:
        store.add(get_by_name(name))  # type: ignore[arg-type]
    return store


@pytest.mark.parametrize("bad_name", ["", "   ", "\t\n"])
def test_blank_name_rejected(settings, bad_name: str) -> None:
    templates = TemplateStore()
    plan = plan_with(settings, "Squat")
    with pytest.raises(TemplateNameError, match=EMPTY_NAME_MESSAGE):
        templates.save(bad_name, plan.items)
    assert len(templates) == 0


def test_resave_overwrites_by_name(settings) -> None:
    templates = TemplateStore()
    templates.save("Push Day", plan_with(settings, "Bench Press").items)
    templates.save("Pull Day", plan_with(settings, "Pull Up").items)
    templates.save("Push Day", plan_with(settings, "Push Up", "Overhead Press").items)

    assert templates.names() == ["Pull Day", "Push Day"]
    push = templates.load("Push Day")
    assert push is not None
    assert [i.name for i in push.plan] == ["Push Up", "Overhead Press"]


def test_snapshot_is_isolated_from_live_plan(settings) -> None:
    templates = TemplateStore()
    plan = plan_with(settings, "Squat")
    templates.save("Legs", plan.items)

    plan.update(plan.items[0].id, "sets", 8)
    plan.add(get_by_name("Lunge"))  # type: ignore[arg-type]

    saved = templates.load("Legs")
    assert saved is not None
    assert [(i.name, i.sets) for i in saved.plan] == [("Squat", 3)]


def test_load_returns_copy_and_none_when_missing(settings) -> None:
    templates = TemplateStore()
    templates.save("Legs", plan_with(settings, "Squat").items)

    loaded = templates.load("Legs")
    assert loaded is not None
    loaded.plan.clear()
    assert len(templates.load("Legs").plan) == 1  # type: ignore[union-attr]
    assert templates.load("Arms") is None


def test_delete(settings) -> None:
    templates = TemplateStore()
    templates.save("Legs", plan_with(settings, "Squat").items)
    assert not templates.delete("Arms")
    assert templates.delete("Legs")
    assert templates.names() == []


def test_changes_write_through(settings) -> None:
    storage = MemoryStorage()
    templates = TemplateStore(sync=PersistenceSync(storage, settings))
    templates.save("Legs", plan_with(settings, "Squat").items)

    stored = json.loads(storage.get_item(TEMPLATES_KEY) or "[]")
    assert [t["name"] for t in stored] == ["Legs"]
    assert stored[0]["plan"][0]["muscleGroup"] == "Legs"

    templates.delete("Legs")
    assert json.loads(storage.get_item(TEMPLATES_KEY) or "null") == []


def test_template_caption_escapes_name(settings) -> None:
    store = plan_with(settings, "Squat", "Lunge")
    template = TemplateStore().save("<img src=x onerror=alert(1)> & Legs", store.items)

    caption = template_caption(template)
    assert "<img" not in caption
    assert "&lt;img src=x onerror=alert(1)&gt; &amp; Legs" in caption
    assert caption.endswith("<span class='ex-meta'>2 exercises</span>")
