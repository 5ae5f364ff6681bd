"""AnalysisResult data models.

The model output is untrusted and often partially shaped, so every field
has a default and the "before" validators coerce rather than reject.
``AnalysisResult.from_payload`` never raises.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


DRIFT_TYPES = (
    "Stable",
    "Gradual Positive",
    "Gradual Negative",
    "Volatile",
    "V-Shape Recovery",
    "Inverted V-Shape",
    "Cyclical",
)

WELLBEING_INDICATORS = ("Improving", "Stable", "Declining", "Concerning", "Mixed")

SCORE_MIN = -10
SCORE_MAX = 10
MAGNITUDE_MIN = 0
MAGNITUDE_MAX = 10


def _to_int(value: Any, low: int, high: int) -> int:
    """Coerce to an int clamped into [low, high]; junk becomes 0."""
    if isinstance(value, bool):
        value = 0
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        number = 0
    return max(low, min(high, number))


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _to_text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [_to_text(v) for v in value if v is not None]


def _to_dict_list(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


class ScoredEntry(BaseModel):
    """Model-assigned score and emotions for one journal entry."""

    entry_number: int = Field(default=0, description="Display number, not an index")
    score: int = Field(default=0, ge=SCORE_MIN, le=SCORE_MAX, description="Emotional score")
    dominant_emotion: str = Field(default="", description="Strongest emotion")
    emotion_tags: list[str] = Field(default_factory=list, description="Secondary emotions")
    summary: str = Field(default="", description="Emotional summary")

    model_config = {"frozen": True}

    @field_validator("entry_number", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> int:
        return _to_int(v, 0, 2**31 - 1)

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, v: Any) -> int:
        return _to_int(v, SCORE_MIN, SCORE_MAX)

    @field_validator("dominant_emotion", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _to_text(v)

    @field_validator("emotion_tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> list[str]:
        return _to_text_list(v)


class Shift(BaseModel):
    """A detected discontinuity between two consecutive entries."""

    between_entries: str = Field(default="", description="Index pair, e.g. '2 → 3'")
    direction: str = Field(default="", description="'positive' or 'negative'")
    magnitude: int = Field(default=0, ge=MAGNITUDE_MIN, le=MAGNITUDE_MAX)
    description: str = Field(default="")

    model_config = {"frozen": True}

    @field_validator("between_entries", "direction", "description", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _to_text(v)

    @field_validator("magnitude", mode="before")
    @classmethod
    def _coerce_magnitude(cls, v: Any) -> int:
        return _to_int(v, MAGNITUDE_MIN, MAGNITUDE_MAX)


class AnalysisResult(BaseModel):
    """The model's drift analysis for a sequence of entries."""

    overall_trajectory: str = Field(default="", description="Short arc title")
    drift_type: str = Field(default="", description="One of DRIFT_TYPES, unchecked")
    entries: list[ScoredEntry] = Field(default_factory=list)
    pattern_shifts: list[Shift] = Field(default_factory=list)
    key_themes: list[str] = Field(default_factory=list)
    drift_summary: str = Field(default="")
    wellbeing_indicator: str = Field(default="", description="One of WELLBEING_INDICATORS, unchecked")

    model_config = {"frozen": True}

    @field_validator("overall_trajectory", "drift_type", "drift_summary", "wellbeing_indicator", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _to_text(v)

    @field_validator("entries", "pattern_shifts", mode="before")
    @classmethod
    def _coerce_items(cls, v: Any) -> list[dict]:
        return _to_dict_list(v)

    @field_validator("key_themes", mode="before")
    @classmethod
    def _coerce_themes(cls, v: Any) -> list[str]:
        return _to_text_list(v)

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalysisResult":
        """Build a result from parsed model JSON, tolerating any shape.

        Args:
            payload: Whatever the JSON parser produced.

        Returns:
            AnalysisResult with defaults for missing or malformed fields.
        """
        if not isinstance(payload, dict):
            return cls()
        known = {k: v for k, v in payload.items() if k in cls.model_fields}
        return cls.model_validate(known)

    @property
    def has_known_drift_type(self) -> bool:
        return self.drift_type in DRIFT_TYPES

    @property
    def has_known_wellbeing(self) -> bool:
        return self.wellbeing_indicator in WELLBEING_INDICATORS
