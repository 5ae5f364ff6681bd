"""Chart projection for the emotional score time series.

Maps scored entries onto the 2-D canvas used by both the SVG export and
the terminal chart. Entries are placed by their position in the sequence;
``entry_number`` is never used for placement.
"""

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from tonedrift.models.analysis import SCORE_MAX, SCORE_MIN, ScoredEntry


# Canvas geometry
WIDTH = 560
HEIGHT = 160
PAD_TOP = 16
PAD_RIGHT = 20
PAD_BOTTOM = 28
PAD_LEFT = 38
PLOT_WIDTH = WIDTH - PAD_LEFT - PAD_RIGHT
PLOT_HEIGHT = HEIGHT - PAD_TOP - PAD_BOTTOM

GRID_SCORES = (-10, -5, 0, 5, 10)

ZERO_LINE_COLOR = "#4b5563"
GRID_LINE_COLOR = "#1f2937"
LINE_COLOR = "#a78bfa"
LABEL_COLOR = "#6b7280"
AXIS_LABEL_COLOR = "#9ca3af"
MARKER_STROKE = "#111827"

# (lower bound, color), checked top down
SCORE_BUCKETS = (
    (7, "#22c55e"),
    (4, "#86efac"),
    (1, "#fde68a"),
    (-2, "#fb923c"),
    (-6, "#f87171"),
)
LOWEST_BUCKET_COLOR = "#dc2626"


Point = tuple[float, float]


def score_color(score: float) -> str:
    """Map a score onto the six-bucket color ramp."""
    for threshold, color in SCORE_BUCKETS:
        if score >= threshold:
            return color
    return LOWEST_BUCKET_COLOR


def to_x(index: int, count: int) -> float:
    """Horizontal position of the index-th of ``count`` points (count >= 2)."""
    return PAD_LEFT + (index / (count - 1)) * PLOT_WIDTH


def to_y(score: float) -> float:
    """Vertical position of a score; higher scores sit higher on the canvas."""
    return PAD_TOP + ((SCORE_MAX - score) / (SCORE_MAX - SCORE_MIN)) * PLOT_HEIGHT


def format_points(points: Sequence[Point]) -> str:
    """Format points as an SVG ``points`` attribute."""
    return " ".join(f"{x:g},{y:g}" for x, y in points)


class Marker(BaseModel):
    """A plotted point for one scored entry."""

    x: float
    y: float
    score: int
    color: str
    label: str = Field(..., description="1-based position in the sequence")

    model_config = {"frozen": True}


class GridLine(BaseModel):
    """A horizontal reference line at a fixed score."""

    score: int
    y: float
    color: str
    stroke_width: float
    dash: str = Field(default="", description="SVG dash array, empty for solid")
    label: str

    model_config = {"frozen": True}

    @property
    def is_zero(self) -> bool:
        return self.score == 0


class ChartProjection(BaseModel):
    """Everything needed to draw the time-series chart."""

    zero_y: float
    line_points: list[Point]
    area_points: list[Point]
    markers: list[Marker]
    gridlines: list[GridLine]

    model_config = {"frozen": True}


def gridlines(zero_y: Optional[float] = None) -> list[GridLine]:
    """Fixed gridlines at -10, -5, 0, +5, +10; the zero line is solid."""
    lines = []
    for value in GRID_SCORES:
        is_zero = value == 0
        lines.append(GridLine(
            score=value,
            y=zero_y if is_zero and zero_y is not None else to_y(value),
            color=ZERO_LINE_COLOR if is_zero else GRID_LINE_COLOR,
            stroke_width=1.5 if is_zero else 1,
            dash="" if is_zero else "4 4",
            label=f"+{value}" if value > 0 else str(value),
        ))
    return lines


def project(entries: Optional[Sequence[ScoredEntry]]) -> Optional[ChartProjection]:
    """Project scored entries onto chart coordinates.

    Args:
        entries: Scored entries in sequence order.

    Returns:
        ChartProjection, or None when fewer than two entries are given.
    """
    if not entries or len(entries) < 2:
        return None

    n = len(entries)
    zero_y = to_y(0)

    line_points = [(to_x(i, n), to_y(e.score)) for i, e in enumerate(entries)]
    area_points = [(to_x(0, n), zero_y), *line_points, (to_x(n - 1, n), zero_y)]
    markers = [
        Marker(x=x, y=y, score=e.score, color=score_color(e.score), label=str(i + 1))
        for i, ((x, y), e) in enumerate(zip(line_points, entries))
    ]

    return ChartProjection(
        zero_y=zero_y,
        line_points=line_points,
        area_points=area_points,
        markers=markers,
        gridlines=gridlines(zero_y),
    )


def render_svg(projection: ChartProjection) -> str:
    """Render a projection as a standalone SVG document."""
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {WIDTH} {HEIGHT}" class="emotion-chart">',
        "<defs>",
        '<linearGradient id="areaFill" x1="0" y1="0" x2="0" y2="1">',
        f'<stop offset="0%" stop-color="{LINE_COLOR}" stop-opacity="0.35" />',
        f'<stop offset="100%" stop-color="{LINE_COLOR}" stop-opacity="0.02" />',
        "</linearGradient>",
        "</defs>",
    ]

    for line in projection.gridlines:
        dash = f' stroke-dasharray="{line.dash}"' if line.dash else ""
        parts.append(
            f'<line x1="{PAD_LEFT}" y1="{line.y:g}" x2="{WIDTH - PAD_RIGHT}" y2="{line.y:g}" '
            f'stroke="{line.color}" stroke-width="{line.stroke_width:g}"{dash} />'
        )
        parts.append(
            f'<text x="{PAD_LEFT - 6}" y="{line.y + 4:g}" fill="{LABEL_COLOR}" '
            f'font-size="9" text-anchor="end">{line.label}</text>'
        )

    parts.append(f'<polygon points="{format_points(projection.area_points)}" fill="url(#areaFill)" />')
    parts.append(
        f'<polyline points="{format_points(projection.line_points)}" fill="none" '
        f'stroke="{LINE_COLOR}" stroke-width="2.5" stroke-linejoin="round" stroke-linecap="round" />'
    )

    for marker in projection.markers:
        parts.append(
            f'<circle cx="{marker.x:g}" cy="{marker.y:g}" r="5" fill="{marker.color}" '
            f'stroke="{MARKER_STROKE}" stroke-width="2" />'
        )
        parts.append(
            f'<text x="{marker.x:g}" y="{HEIGHT - 7}" fill="{AXIS_LABEL_COLOR}" '
            f'font-size="10" text-anchor="middle">{marker.label}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts) + "\n"
