from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping, Optional, Sequence

import plotly.graph_objects as go

from app.models.dashboard import DashboardSummary

logger = logging.getLogger(__name__)

ChartKind = Literal["pie", "bar"]

MUSCLE_CANVAS = "muscle"
EQUIPMENT_CANVAS = "equipment"

PIE_COLORS = ["#EF4444", "#3B82F6", "#10B981", "#F59E0B", "#8B5CF6", "#EC4899"]
BAR_FILL = "rgba(20, 184, 166, 0.6)"
BAR_BORDER = "rgba(13, 148, 136, 1)"
SLICE_BORDER = "#1F2937"
LABEL_COLOR = "#D1D5DB"
TICK_COLOR = "#9CA3AF"
GRID_COLOR = "rgba(255,255,255,0.1)"


@dataclass
class ChartConfig:
    kind: ChartKind
    labels: List[str]
    values: List[int]
    title: str = ""
    colors: List[str] = field(default_factory=list)
    show_legend: bool = True
    show_axes: bool = True
    height: int = 350

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            raise ValueError("Chart labels and values must be the same length")


def build_figure(config: ChartConfig) -> go.Figure:
    """Pie or horizontal bar figure, dark-themed to sit on the dashboard cards."""
    if config.kind == "pie":
        trace = go.Pie(
            labels=config.labels,
            values=config.values,
            sort=False,
            marker=dict(colors=config.colors or PIE_COLORS, line=dict(color=SLICE_BORDER, width=2)),
        )
    elif config.kind == "bar":
        trace = go.Bar(
            x=config.values,
            y=config.labels,
            orientation="h",
            name=config.title,
            marker=dict(color=(config.colors or [BAR_FILL])[0], line=dict(color=BAR_BORDER, width=1)),
        )
    else:
        raise ValueError(f"Unsupported chart kind: {config.kind!r}")

    fig = go.Figure(trace)
    fig.update_layout(
        title=config.title or None,
        height=config.height,
        showlegend=config.show_legend,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, font=dict(color=LABEL_COLOR)),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=LABEL_COLOR),
        margin=dict(l=20, r=20, t=40, b=20),
    )
    if config.kind == "bar":
        fig.update_xaxes(visible=config.show_axes, tickfont=dict(color=TICK_COLOR), gridcolor=GRID_COLOR)
        # First category at the top, as listed.
        fig.update_yaxes(visible=config.show_axes, tickfont=dict(color=LABEL_COLOR), autorange="reversed")
    return fig


def muscle_chart_config(counts: Mapping[str, int]) -> ChartConfig:
    return ChartConfig(kind="pie", labels=list(counts), values=list(counts.values()), colors=list(PIE_COLORS))


def equipment_chart_config(counts: Mapping[str, int]) -> ChartConfig:
    return ChartConfig(
        kind="bar",
        labels=list(counts),
        values=list(counts.values()),
        title="Exercises per Equipment",
        colors=[BAR_FILL],
        show_legend=False,
    )


class ChartBoard:
    """Owns at most one live figure per canvas.

    Drawing onto a canvas disposes whatever figure was bound to it first.
    """

    def __init__(self) -> None:
        self._figures: Dict[str, go.Figure] = {}
        self.disposed_count = 0

    def get(self, canvas: str) -> Optional[go.Figure]:
        return self._figures.get(canvas)

    def canvases(self) -> List[str]:
        return list(self._figures)

    def dispose(self, canvas: str) -> bool:
        fig = self._figures.pop(canvas, None)
        if fig is None:
            return False
        fig.data = []
        self.disposed_count += 1
        logger.debug("Disposed chart on canvas %r", canvas)
        return True

    def dispose_all(self) -> None:
        for canvas in list(self._figures):
            self.dispose(canvas)

    def draw(self, canvas: str, config: ChartConfig) -> go.Figure:
        self.dispose(canvas)
        fig = build_figure(config)
        self._figures[canvas] = fig
        return fig

    def draw_summary(self, summary: DashboardSummary) -> Sequence[go.Figure]:
        return (
            self.draw(MUSCLE_CANVAS, muscle_chart_config(summary.muscle_counts)),
            self.draw(EQUIPMENT_CANVAS, equipment_chart_config(summary.equipment_counts)),
        )
