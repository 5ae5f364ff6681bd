"""Terminal rendering of an analysis with rich.

Every section tolerates missing data: absent strings render blank, absent
sequences render empty, and sections with nothing to show are skipped.
"""

from typing import Optional

from rich.columns import Columns
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tonedrift.chart import (
    LABEL_COLOR,
    LINE_COLOR,
    PAD_LEFT,
    PAD_TOP,
    PLOT_HEIGHT,
    PLOT_WIDTH,
    ChartProjection,
    project,
    score_color,
)
from tonedrift.models.analysis import AnalysisResult
from tonedrift.presentation import LEGEND, drift_color, format_score, shift_arrow, wellbeing_style


# Rows must be 4k + 1 so every gridline lands on a row
CHART_ROWS = 9
CHART_COLS = 56
LABEL_WIDTH = 4


def _column(x: float, cols: int) -> int:
    return round((x - PAD_LEFT) / PLOT_WIDTH * (cols - 1))


def _row(y: float, rows: int) -> int:
    return round((y - PAD_TOP) / PLOT_HEIGHT * (rows - 1))


def render_chart(
    projection: ChartProjection,
    cols: int = CHART_COLS,
    rows: int = CHART_ROWS,
) -> Text:
    """Rasterize a chart projection into styled terminal text."""
    cells: list[list[tuple[str, str]]] = [[(" ", "")] * cols for _ in range(rows)]
    labels = {}

    for line in projection.gridlines:
        r = _row(line.y, rows)
        char = "─" if line.is_zero else "╌"
        style = "grey50" if line.is_zero else "grey23"
        cells[r] = [(char, style)] * cols
        labels[r] = line.label

    points = projection.line_points
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        c0, c1 = _column(x0, cols), _column(x1, cols)
        for c in range(c0, c1 + 1):
            t = (c - c0) / (c1 - c0) if c1 != c0 else 0.0
            cells[_row(y0 + (y1 - y0) * t, rows)][c] = ("·", LINE_COLOR)

    axis = [" "] * cols
    for marker in projection.markers:
        c = _column(marker.x, cols)
        cells[_row(marker.y, rows)][c] = ("●", marker.color)
        for offset, ch in enumerate(marker.label):
            if c + offset < cols:
                axis[c + offset] = ch

    text = Text()
    for r, row in enumerate(cells):
        text.append(labels.get(r, "").rjust(LABEL_WIDTH) + " ", style=LABEL_COLOR)
        for char, style in row:
            text.append(char, style=style or None)
        text.append("\n")
    text.append(" " * (LABEL_WIDTH + 1) + "".join(axis).rstrip(), style="grey62")
    return text


def _legend() -> Text:
    legend = Text()
    for label, color in LEGEND:
        legend.append(f"● {label}  ", style=color)
    return legend


def _overview_cards(result: AnalysisResult) -> Columns:
    accent = drift_color(result.drift_type)
    trajectory = Text(result.overall_trajectory, style="bold")
    if result.drift_type:
        trajectory.append("\n")
        trajectory.append(f" {result.drift_type} ", style=f"{accent} on grey11")

    wb = wellbeing_style(result.wellbeing_indicator)
    wellbeing = Text(f"{wb.icon} ", style=f"bold {wb.color}")
    wellbeing.append(result.wellbeing_indicator, style=wb.color)

    return Columns([
        Panel(trajectory, title="Overall Trajectory", border_style=accent, width=40),
        Panel(wellbeing, title="Wellbeing Indicator", border_style=wb.color, width=30),
    ])


def _breakdown_table(result: AnalysisResult) -> Table:
    table = Table(title="Entry-by-Entry Breakdown", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Score", justify="center")
    table.add_column("Emotion", style="bold")
    table.add_column("Tags")
    table.add_column("Summary", max_width=50)

    for entry in result.entries:
        color = score_color(entry.score)
        table.add_row(
            f"#{entry.entry_number}",
            f"[{color}]{format_score(entry.score)}[/{color}]",
            escape(entry.dominant_emotion),
            escape(", ".join(entry.emotion_tags)),
            escape(entry.summary),
        )
    return table


def _shifts_panel(result: AnalysisResult) -> Optional[Panel]:
    if not result.pattern_shifts:
        return None

    lines = []
    for shift in result.pattern_shifts:
        color = "green" if shift.direction == "positive" else "red"
        lines.append(
            f"[{color}]{shift_arrow(shift.direction)}[/{color}] "
            f"Entries {escape(shift.between_entries)}  "
            f"[dim]Magnitude: {shift.magnitude}/10[/dim]\n"
            f"  {escape(shift.description)}"
        )
    return Panel("\n".join(lines), title="Pattern Shifts Detected", border_style="magenta")


def build_report(result: AnalysisResult) -> Group:
    """Assemble all report sections into one renderable."""
    sections = [_overview_cards(result)]

    projection = project(result.entries)
    if projection is not None:
        sections.append(Panel(
            Group(_legend(), render_chart(projection)),
            title="Emotional Score Over Time",
            border_style=LINE_COLOR,
        ))

    sections.append(_breakdown_table(result))

    shifts = _shifts_panel(result)
    if shifts is not None:
        sections.append(shifts)

    themes = Text()
    for theme in result.key_themes:
        themes.append(f" {theme} ", style="white on grey23")
        themes.append(" ")
    sections.append(Panel(themes, title="Key Themes", border_style="cyan"))
    sections.append(Panel(
        Text(result.drift_summary), title="Drift Analysis Summary", border_style="cyan"
    ))
    return Group(*sections)


def render_report(result: AnalysisResult, console: Optional[Console] = None) -> None:
    """Print the full analysis report."""
    (console or Console()).print(build_report(result))
