"""Lookup tables mapping model labels onto display colors and icons.

Labels come from the model and are untrusted: unknown or missing values
always resolve to the default entry.
"""

from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel


class WellbeingStyle(BaseModel):
    """Display color and directional icon for a wellbeing indicator."""

    color: str
    icon: str

    model_config = {"frozen": True}


DRIFT_COLORS = MappingProxyType({
    "Stable": "#60a5fa",
    "Gradual Positive": "#22c55e",
    "Gradual Negative": "#f87171",
    "Volatile": "#fb923c",
    "V-Shape Recovery": "#a78bfa",
    "Inverted V-Shape": "#f472b6",
    "Cyclical": "#22d3ee",
})
DEFAULT_DRIFT_COLOR = "#a78bfa"

WELLBEING_META = MappingProxyType({
    "Improving": WellbeingStyle(color="#22c55e", icon="↑"),
    "Stable": WellbeingStyle(color="#60a5fa", icon="→"),
    "Declining": WellbeingStyle(color="#f87171", icon="↓"),
    "Concerning": WellbeingStyle(color="#dc2626", icon="⚠"),
    "Mixed": WellbeingStyle(color="#fb923c", icon="~"),
})
DEFAULT_WELLBEING = WellbeingStyle(color="#9ca3af", icon="?")

# Legend shown above the chart
LEGEND = (
    ("Positive", "#22c55e"),
    ("Neutral", "#fde68a"),
    ("Negative", "#f87171"),
)


def drift_color(drift_type: Optional[str]) -> str:
    """Accent color for a drift type."""
    if drift_type in DRIFT_COLORS:
        return DRIFT_COLORS[drift_type]
    return DEFAULT_DRIFT_COLOR


def wellbeing_style(indicator: Optional[str]) -> WellbeingStyle:
    """Color and icon for a wellbeing indicator."""
    if indicator in WELLBEING_META:
        return WELLBEING_META[indicator]
    return DEFAULT_WELLBEING


def shift_arrow(direction: Optional[str]) -> str:
    """Up arrow only for the literal "positive"; anything else points down."""
    return "↑" if direction == "positive" else "↓"


def format_score(score: int) -> str:
    """Signed score label, e.g. "+5", "0", "-3"."""
    return f"+{score}" if score > 0 else str(score)
