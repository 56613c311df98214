from .exercise import (
    Exercise,
    ExerciseFields,
    MuscleGroup,
    EquipmentType,
    MUSCLE_GROUPS,
    EQUIPMENT_TYPES,
    MUSCLE_FILTERS,
    ALL_MUSCLE_GROUPS,
)
from .plan import PlanItem, Template, QuantityField, QUANTITY_FIELDS
from .dashboard import DashboardStats, DashboardSummary, NO_FOCUS
from .commands import (
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
    Command,
    CommandResult,
    AppState,
    parse_command,
)

__all__ = [
    "Exercise",
    "ExerciseFields",
    "MuscleGroup",
    "EquipmentType",
    "MUSCLE_GROUPS",
    "EQUIPMENT_TYPES",
    "MUSCLE_FILTERS",
    "ALL_MUSCLE_GROUPS",
    "PlanItem",
    "Template",
    "QuantityField",
    "QUANTITY_FIELDS",
    "DashboardStats",
    "DashboardSummary",
    "NO_FOCUS",
    "AddExercise",
    "RemoveExercise",
    "UpdateQuantity",
    "ReorderExercise",
    "StartDrag",
    "DropOn",
    "ClearPlan",
    "RenamePlan",
    "SaveTemplate",
    "LoadTemplate",
    "DeleteTemplate",
    "SwitchView",
    "SetMuscleFilter",
    "SetSearchTerm",
    "ToggleTemplates",
    "Command",
    "CommandResult",
    "AppState",
    "parse_command",
]
