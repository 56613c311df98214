from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .plan import QuantityField


View = Literal["planner", "dashboard"]


class AddExercise(BaseModel):
    kind: Literal["add_exercise"] = "add_exercise"
    exercise_name: str


class RemoveExercise(BaseModel):
    kind: Literal["remove_exercise"] = "remove_exercise"
    item_id: int


class UpdateQuantity(BaseModel):
    kind: Literal["update_quantity"] = "update_quantity"
    item_id: int
    field: QuantityField
    # Raw widget input; the plan store coerces it.
    value: Union[int, float, str, None] = None


class ReorderExercise(BaseModel):
    kind: Literal["reorder_exercise"] = "reorder_exercise"
    dragged_id: int
    target_id: int


class StartDrag(BaseModel):
    kind: Literal["start_drag"] = "start_drag"
    item_id: Optional[int] = None


class DropOn(BaseModel):
    kind: Literal["drop_on"] = "drop_on"
    target_id: int


class ClearPlan(BaseModel):
    kind: Literal["clear_plan"] = "clear_plan"


class RenamePlan(BaseModel):
    kind: Literal["rename_plan"] = "rename_plan"
    name: str


class SaveTemplate(BaseModel):
    kind: Literal["save_template"] = "save_template"
    # Defaults to the current plan name.
    name: Optional[str] = None


class LoadTemplate(BaseModel):
    kind: Literal["load_template"] = "load_template"
    name: str


class DeleteTemplate(BaseModel):
    kind: Literal["delete_template"] = "delete_template"
    name: str


class SwitchView(BaseModel):
    kind: Literal["switch_view"] = "switch_view"
    view: View


class SetMuscleFilter(BaseModel):
    kind: Literal["set_muscle_filter"] = "set_muscle_filter"
    muscle_filter: str


class SetSearchTerm(BaseModel):
    kind: Literal["set_search_term"] = "set_search_term"
    term: str = ""


class ToggleTemplates(BaseModel):
    kind: Literal["toggle_templates"] = "toggle_templates"
    open: bool


Command = Annotated[
    Union[
        AddExercise,
        RemoveExercise,
        UpdateQuantity,
        ReorderExercise,
        StartDrag,
        DropOn,
        ClearPlan,
        RenamePlan,
        SaveTemplate,
        LoadTemplate,
        DeleteTemplate,
        SwitchView,
        SetMuscleFilter,
        SetSearchTerm,
        ToggleTemplates,
    ],
    Field(discriminator="kind"),
]

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(payload: Dict[str, Any]) -> Command:
    """Validate a raw ``{"kind": ..., ...}`` payload into a command model."""
    return _COMMAND_ADAPTER.validate_python(payload)


class CommandResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    message: Optional[str] = None


class AppState(BaseModel):
    """Everything the presentation layer needs besides the stores."""

    active_view: View = "planner"
    muscle_filter: str = "All"
    search_term: str = ""
    templates_open: bool = False
    dragged_item_id: Optional[int] = None
