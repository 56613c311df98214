from __future__ import annotations

# Ensure the repository root is on sys.path so that absolute imports like `app.*` work
# when Streamlit runs this file from within the app/ directory on cloud runtimes.
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import html
from datetime import date
from typing import Optional

import streamlit as st

from app.config import get_settings
from app.controller import CLEAR_PLAN_PROMPT, WorkoutPlanner, delete_template_prompt
from app.logging_config import configure_logging
from app.models import (
    MUSCLE_FILTERS,
    AddExercise,
    ClearPlan,
    Command,
    DeleteTemplate,
    DropOn,
    LoadTemplate,
    PlanItem,
    RemoveExercise,
    RenamePlan,
    SaveTemplate,
    SetMuscleFilter,
    SetSearchTerm,
    StartDrag,
    SwitchView,
    ToggleTemplates,
    UpdateQuantity,
)
from app.services.charts import EQUIPMENT_CANVAS, MUSCLE_CANVAS
from app.services.storage import storage_from_settings
from app.services.template_store import template_caption

st.set_page_config(page_title="Workout Planner", page_icon="🏋️", layout="wide")
settings = get_settings()
configure_logging(settings.LOG_LEVEL)

# ========= Global CSS (applies before any widgets) =========
st.markdown("""
<style>
.brand{ font-weight:700; font-size:1.25rem; color:#2dd4bf; }
.hero h1{ text-align:center; font-weight:800; margin-bottom:.25rem; }
.hero p{ text-align:center; color:#94a3b8; margin-top:0; }
.accent{ color:#2dd4bf; }
.ex-title{ margin:0; font-weight:700; font-size:1.02rem; line-height:30px; }
.ex-meta{ font-size:12px; color:#94a3b8; }
.ex-group{ font-size:12px; color:#2dd4bf; }
.stat-card{ text-align:center; padding:.6rem 0; }
.stat-card .label{ color:#94a3b8; font-size:.85rem; }
.stat-card .value{ color:#2dd4bf; font-size:2.2rem; font-weight:700; }
.footer{ text-align:center; color:#94a3b8; padding-top:2rem; font-size:.85rem; }
.stButton > button{ min-height:30px !important; }
</style>
""", unsafe_allow_html=True)


def _confirmed(prompt: str) -> bool:
    # Only reached from a "Yes" button shown next to the prompt.
    return True


def get_planner() -> WorkoutPlanner:
    if "planner" not in st.session_state:
        storage = storage_from_settings(settings.STORAGE_BACKEND, settings.STORAGE_PATH)
        st.session_state["planner"] = WorkoutPlanner.from_storage(storage, settings)
    return st.session_state["planner"]


planner = get_planner()


def run(command: Command, confirm=None) -> None:
    """Dispatch a command and queue its message for the next render."""
    result = planner.dispatch(command, confirm)
    if result.message:
        st.session_state["flash"] = ("success" if result.ok else "error", result.message)


def show_flash() -> None:
    flash = st.session_state.pop("flash", None)
    if not flash:
        return
    kind, message = flash
    if kind == "success":
        st.toast(message)
    else:
        st.error(message)


def widget_key(prefix: str, item: PlanItem) -> str:
    # The plan revision changes on clear/template load so stale widget state is dropped.
    return f"{prefix}-{item.id}-{planner.plan.revision}"


# ========= Callbacks =========

def _on_view_change() -> None:
    run(SwitchView(view=st.session_state["view-switch"]))


def _on_search_change() -> None:
    run(SetSearchTerm(term=st.session_state["library-search"]))


def _on_plan_name_change() -> None:
    run(RenamePlan(name=st.session_state[f"plan-name-{planner.plan.revision}"]))


def _on_quantity_change(item_id: int, field: str, key: str) -> None:
    run(UpdateQuantity(item_id=item_id, field=field, value=st.session_state.get(key)))  # type: ignore[arg-type]


def _move_before(item_id: int, key: str) -> None:
    target: Optional[int] = st.session_state.get(key)
    if target is None:
        return
    run(StartDrag(item_id=item_id))
    run(DropOn(target_id=target))


# ========= Header =========

head_l, head_r = st.columns([3, 2])
with head_l:
    st.markdown("<span class='brand'>Workout Planner</span>", unsafe_allow_html=True)
with head_r:
    st.radio(
        "View",
        ["planner", "dashboard"],
        index=0 if planner.state.active_view == "planner" else 1,
        format_func=lambda v: v.title(),
        horizontal=True,
        key="view-switch",
        on_change=_on_view_change,
        label_visibility="collapsed",
    )

show_flash()


# ========= Templates dialog =========

@st.dialog("Workout Templates")
def templates_dialog() -> None:
    name = planner.plan.name
    if st.button(f'Save Current Plan as "{name}"', type="primary", use_container_width=True):
        result = planner.dispatch(SaveTemplate())
        if result.ok:
            st.session_state["flash"] = ("success", result.message)
            st.rerun()
        # Validation failures stay inside the dialog.
        st.error(result.message)

    templates = planner.templates.templates
    if not templates:
        st.caption("No saved templates.")
    for template in templates:
        row_l, row_m, row_r = st.columns([6, 2, 2])
        with row_l:
            st.markdown(template_caption(template), unsafe_allow_html=True)
        with row_m:
            if st.button("Load", key=f"tpl-load-{template.name}", use_container_width=True):
                run(LoadTemplate(name=template.name))
                st.rerun()
        with row_r:
            with st.popover("Delete", use_container_width=True):
                st.warning(delete_template_prompt(template.name))
                if st.button("Yes, delete", type="primary", key=f"tpl-del-{template.name}"):
                    run(DeleteTemplate(name=template.name), confirm=_confirmed)
                    st.rerun()


# ========= Planner view =========

def render_library() -> None:
    with st.container(border=True):
        st.subheader("Exercise Library")
        st.text_input(
            "Search exercises",
            value=planner.state.search_term,
            placeholder="Search exercises...",
            key="library-search",
            on_change=_on_search_change,
            label_visibility="collapsed",
        )
        chips = st.columns(len(MUSCLE_FILTERS))
        for col, group in zip(chips, MUSCLE_FILTERS):
            with col:
                active = planner.state.muscle_filter == group
                if st.button(group, key=f"filter-{group}", type="primary" if active else "secondary",
                             use_container_width=True):
                    run(SetMuscleFilter(muscle_filter=group))
                    st.rerun()

        exercises = planner.filtered_catalog()
        if not exercises:
            st.caption("No exercises match your search.")
        for ex in exercises:
            row_l, row_r = st.columns([10, 1])
            with row_l:
                st.markdown(
                    f"<div class='ex-title'>{ex.name}</div>"
                    f"<div class='ex-meta'>{ex.muscle_group} / {ex.equipment}</div>",
                    unsafe_allow_html=True,
                )
            with row_r:
                if st.button("+", key=f"add-{ex.name}", disabled=planner.plan.contains(ex.name),
                             help=f"Add {ex.name} to plan"):
                    run(AddExercise(exercise_name=ex.name))
                    st.rerun()


def render_plan_item(item: PlanItem, items: list[PlanItem]) -> None:
    with st.container(border=True):
        title_col, move_col, remove_col = st.columns([8, 1, 1])
        with title_col:
            st.markdown(
                f"<div class='ex-title'>{html.escape(item.name)}</div><div class='ex-group'>{item.muscle_group}</div>",
                unsafe_allow_html=True,
            )
        with move_col:
            others = [other for other in items if other.id != item.id]
            with st.popover("↕", disabled=not others):
                move_key = widget_key("move", item)
                names = {other.id: other.name for other in others}
                st.selectbox("Move before", list(names), format_func=lambda i: names[i], key=move_key)
                st.button("Move", key=f"{move_key}-go", on_click=_move_before, args=(item.id, move_key))
        with remove_col:
            if st.button("✕", key=f"remove-{item.id}", help="Remove from plan"):
                run(RemoveExercise(item_id=item.id))
                st.rerun()

        cols = st.columns(3)
        for col, (field, label) in zip(cols, [("weight", "Weight (kg)"), ("sets", "Sets"), ("reps", "Reps")]):
            with col:
                key = widget_key(field, item)
                st.number_input(
                    label,
                    min_value=0,
                    step=1,
                    value=int(getattr(item, field)),
                    key=key,
                    on_change=_on_quantity_change,
                    args=(item.id, field, key),
                )


def render_plan() -> None:
    with st.container(border=True):
        head_l, tpl_col, clear_col = st.columns([6, 2, 2])
        with head_l:
            st.subheader("Your Workout Plan")
        with tpl_col:
            if st.button("Templates", use_container_width=True):
                run(ToggleTemplates(open=True))
        with clear_col:
            with st.popover("Clear", use_container_width=True):
                st.warning(CLEAR_PLAN_PROMPT)
                if st.button("Yes, clear", type="primary", key="confirm-clear"):
                    run(ClearPlan(), confirm=_confirmed)
                    st.rerun()

        st.text_input(
            "Workout name",
            value=planner.plan.name,
            placeholder="Workout Name (e.g., Push Day)",
            key=f"plan-name-{planner.plan.revision}",
            on_change=_on_plan_name_change,
            label_visibility="collapsed",
        )

        items = planner.plan.items
        if not items:
            st.caption("Add exercises from the library.")
        for item in items:
            render_plan_item(item, items)


def render_planner() -> None:
    st.markdown(
        "<div class='hero'><h1>Build Your <span class='accent'>Workout</span></h1>"
        "<p>Select exercises, add them to your plan, and set your reps and sets.</p></div>",
        unsafe_allow_html=True,
    )
    lib_col, plan_col = st.columns(2, gap="large")
    with lib_col:
        render_library()
    with plan_col:
        render_plan()


# ========= Dashboard view =========

def stat_card(label: str, value: str) -> None:
    with st.container(border=True):
        st.markdown(
            f"<div class='stat-card'><div class='label'>{label}</div><div class='value'>{value}</div></div>",
            unsafe_allow_html=True,
        )


def render_dashboard() -> None:
    st.markdown("<div class='hero'><h1>Workout <span class='accent'>Dashboard</span></h1></div>",
                unsafe_allow_html=True)
    if not planner.charts.canvases():
        planner.render_charts()
    stats = planner.summary().stats

    cards = st.columns(4)
    with cards[0]:
        stat_card("Total Exercises", str(stats.total_exercises))
    with cards[1]:
        stat_card("Total Volume (kg)", f"{stats.total_volume:,}")
    with cards[2]:
        stat_card("Muscle Groups", str(stats.muscle_groups_targeted))
    with cards[3]:
        stat_card("Primary Focus", stats.primary_focus)

    chart_l, chart_r = st.columns(2, gap="large")
    with chart_l:
        with st.container(border=True):
            st.markdown("#### Muscle Focus")
            st.plotly_chart(planner.charts.get(MUSCLE_CANVAS), use_container_width=True)
    with chart_r:
        with st.container(border=True):
            st.markdown("#### Equipment Used")
            st.plotly_chart(planner.charts.get(EQUIPMENT_CANVAS), use_container_width=True)


if planner.state.active_view == "dashboard":
    render_dashboard()
else:
    render_planner()

if planner.state.templates_open:
    # The dialog reruns on its own; a full rerun closes it unless reopened.
    run(ToggleTemplates(open=False))
    templates_dialog()

st.markdown(f"<div class='footer'>&copy; {date.today().year} Interactive Workout Planner.</div>",
            unsafe_allow_html=True)
