from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from app.config import Settings, get_settings
from app.models import (
    AddExercise,
    AppState,
    ClearPlan,
    Command,
    CommandResult,
    DashboardSummary,
    DeleteTemplate,
    DropOn,
    Exercise,
    LoadTemplate,
    MUSCLE_FILTERS,
    RemoveExercise,
    RenamePlan,
    ReorderExercise,
    SaveTemplate,
    SetMuscleFilter,
    SetSearchTerm,
    StartDrag,
    SwitchView,
    ToggleTemplates,
    UpdateQuantity,
)
from app.services.catalog import filter_catalog, load_catalog
from app.services.charts import ChartBoard
from app.services.dashboard import summarize
from app.services.persistence import PersistenceSync
from app.services.plan_store import PlanStore
from app.services.storage import KeyValueStorage
from app.services.template_store import TemplateNameError, TemplateStore

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

CLEAR_PLAN_PROMPT = "Are you sure? This will clear the current plan but not your saved templates."


def delete_template_prompt(name: str) -> str:
    return f'Delete template "{name}"?'


_APPLIED = CommandResult(ok=True)
_IGNORED = CommandResult(ok=False)

# Commands that can change the plan items the dashboard is built from.
_PLAN_COMMANDS = (
    AddExercise,
    RemoveExercise,
    UpdateQuantity,
    ReorderExercise,
    DropOn,
    ClearPlan,
    LoadTemplate,
)


class WorkoutPlanner:
    """Routes user commands into the plan and template stores.

    Owns the view state and the dashboard charts. Destructive commands
    (clearing the plan, deleting a template) only run when the ``confirm``
    collaborator passed to :meth:`dispatch` answers yes.
    """

    def __init__(
        self,
        plan: PlanStore,
        templates: TemplateStore,
        state: Optional[AppState] = None,
        catalog: Optional[Sequence[Exercise]] = None,
    ) -> None:
        self.plan = plan
        self.templates = templates
        self.state = state or AppState()
        self.catalog = tuple(catalog) if catalog is not None else load_catalog()
        self.charts = ChartBoard()
        self._catalog_by_name: Dict[str, Exercise] = {ex.name: ex for ex in self.catalog}
        self._handlers: Dict[type, Callable[..., CommandResult]] = {
            AddExercise: self._add,
            RemoveExercise: self._remove,
            UpdateQuantity: self._update,
            ReorderExercise: self._reorder,
            StartDrag: self._start_drag,
            DropOn: self._drop_on,
            ClearPlan: self._clear,
            RenamePlan: self._rename,
            SaveTemplate: self._save_template,
            LoadTemplate: self._load_template,
            DeleteTemplate: self._delete_template,
            SwitchView: self._switch_view,
            SetMuscleFilter: self._set_muscle_filter,
            SetSearchTerm: self._set_search_term,
            ToggleTemplates: self._toggle_templates,
        }

    @classmethod
    def from_storage(cls, storage: KeyValueStorage, settings: Optional[Settings] = None) -> "WorkoutPlanner":
        settings = settings or get_settings()
        sync = PersistenceSync(storage, settings)
        persisted = sync.load()
        plan = PlanStore(persisted.plan, persisted.plan_name, sync=sync, settings=settings)
        templates = TemplateStore(persisted.templates, sync=sync)
        return cls(plan, templates)

    # ---- queries ----

    def filtered_catalog(self) -> List[Exercise]:
        return filter_catalog(self.state.muscle_filter, self.state.search_term, self.catalog)

    def summary(self) -> DashboardSummary:
        return summarize(self.plan.items)

    def render_charts(self) -> DashboardSummary:
        summary = self.summary()
        self.charts.draw_summary(summary)
        return summary

    def dispose_charts(self) -> None:
        self.charts.dispose_all()

    # ---- dispatch ----

    def dispatch(self, command: Command, confirm: Optional[Confirm] = None) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        result = handler(command, confirm)
        if result.ok and isinstance(command, _PLAN_COMMANDS) and self.state.active_view == "dashboard":
            self.render_charts()
        logger.debug("%s -> ok=%s", command.kind, result.ok)
        return result

    def _add(self, cmd: AddExercise, confirm: Optional[Confirm]) -> CommandResult:
        exercise = self._catalog_by_name.get(cmd.exercise_name)
        if exercise is None:
            logger.warning("Ignoring add for unknown exercise %r", cmd.exercise_name)
            return _IGNORED
        return _APPLIED if self.plan.add(exercise) is not None else _IGNORED

    def _remove(self, cmd: RemoveExercise, confirm: Optional[Confirm]) -> CommandResult:
        return _APPLIED if self.plan.remove(cmd.item_id) else _IGNORED

    def _update(self, cmd: UpdateQuantity, confirm: Optional[Confirm]) -> CommandResult:
        return _APPLIED if self.plan.update(cmd.item_id, cmd.field, cmd.value) else _IGNORED

    def _reorder(self, cmd: ReorderExercise, confirm: Optional[Confirm]) -> CommandResult:
        return _APPLIED if self.plan.reorder(cmd.dragged_id, cmd.target_id) else _IGNORED

    def _start_drag(self, cmd: StartDrag, confirm: Optional[Confirm]) -> CommandResult:
        self.state.dragged_item_id = cmd.item_id
        return _APPLIED

    def _drop_on(self, cmd: DropOn, confirm: Optional[Confirm]) -> CommandResult:
        dragged = self.state.dragged_item_id
        self.state.dragged_item_id = None
        if dragged is None:
            return _IGNORED
        return _APPLIED if self.plan.reorder(dragged, cmd.target_id) else _IGNORED

    def _clear(self, cmd: ClearPlan, confirm: Optional[Confirm]) -> CommandResult:
        if confirm is None or not confirm(CLEAR_PLAN_PROMPT):
            return _IGNORED
        self.plan.clear()
        logger.info("Cleared plan")
        return _APPLIED

    def _rename(self, cmd: RenamePlan, confirm: Optional[Confirm]) -> CommandResult:
        return _APPLIED if self.plan.rename(cmd.name) else _IGNORED

    def _save_template(self, cmd: SaveTemplate, confirm: Optional[Confirm]) -> CommandResult:
        name = self.plan.name if cmd.name is None else cmd.name
        try:
            self.templates.save(name, self.plan.items)
        except TemplateNameError as e:
            return CommandResult(ok=False, message=str(e))
        self.state.templates_open = False
        return CommandResult(ok=True, message=f'Saved template "{name}".')

    def _load_template(self, cmd: LoadTemplate, confirm: Optional[Confirm]) -> CommandResult:
        template = self.templates.load(cmd.name)
        if template is None:
            return CommandResult(ok=False, message=f'Template "{cmd.name}" not found.')
        self.plan.replace(template.name, template.plan)
        self.state.templates_open = False
        return CommandResult(ok=True, message=f'Loaded template "{template.name}".')

    def _delete_template(self, cmd: DeleteTemplate, confirm: Optional[Confirm]) -> CommandResult:
        if confirm is None or not confirm(delete_template_prompt(cmd.name)):
            return _IGNORED
        return _APPLIED if self.templates.delete(cmd.name) else _IGNORED

    def _switch_view(self, cmd: SwitchView, confirm: Optional[Confirm]) -> CommandResult:
        previous = self.state.active_view
        self.state.active_view = cmd.view
        if cmd.view == "dashboard":
            # Charts are rebuilt on every activation.
            self.render_charts()
        elif previous == "dashboard":
            self.dispose_charts()
        return _APPLIED

    def _set_muscle_filter(self, cmd: SetMuscleFilter, confirm: Optional[Confirm]) -> CommandResult:
        if cmd.muscle_filter not in MUSCLE_FILTERS:
            return CommandResult(ok=False, message=f"Unknown muscle group: {cmd.muscle_filter}")
        self.state.muscle_filter = cmd.muscle_filter
        return _APPLIED

    def _set_search_term(self, cmd: SetSearchTerm, confirm: Optional[Confirm]) -> CommandResult:
        self.state.search_term = cmd.term
        return _APPLIED

    def _toggle_templates(self, cmd: ToggleTemplates, confirm: Optional[Confirm]) -> CommandResult:
        self.state.templates_open = cmd.open
        return _APPLIED
