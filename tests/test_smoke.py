from __future__ import annotations

from app.controller import WorkoutPlanner
from app.models import AddExercise, SaveTemplate, SwitchView, UpdateQuantity
from app.services.charts import EQUIPMENT_CANVAS, MUSCLE_CANVAS


def test_smoke_end_to_end(planner: WorkoutPlanner, storage, settings) -> None:
    for name in ["Bench Press", "Squat", "Pull Up"]:
        assert planner.dispatch(AddExercise(exercise_name=name)).ok

    first = planner.plan.items[0]
    assert planner.dispatch(UpdateQuantity(item_id=first.id, field="weight", value="60")).ok

    result = planner.dispatch(SaveTemplate(name="Full Body"))
    assert result.ok, result.message

    planner.dispatch(SwitchView(view="dashboard"))
    summary = planner.summary()
    assert summary.stats.total_exercises == 3
    assert summary.stats.total_volume == 3 * 10 * 60 + 2 * (3 * 10 * 20)
    assert planner.charts.get(MUSCLE_CANVAS) is not None
    assert planner.charts.get(EQUIPMENT_CANVAS) is not None

    # A fresh session over the same storage sees the same state.
    reloaded = WorkoutPlanner.from_storage(storage, settings)
    assert [i.name for i in reloaded.plan.items] == ["Bench Press", "Squat", "Pull Up"]
    assert reloaded.plan.items[0].weight == 60
    assert reloaded.templates.names() == ["Full Body"]
