"""Data models for tonedrift."""

from tonedrift.models.entry import EntryBook, JournalEntry
from tonedrift.models.analysis import (
    DRIFT_TYPES,
    WELLBEING_INDICATORS,
    AnalysisResult,
    ScoredEntry,
    Shift,
)

__all__ = [
    "JournalEntry",
    "EntryBook",
    "AnalysisResult",
    "ScoredEntry",
    "Shift",
    "DRIFT_TYPES",
    "WELLBEING_INDICATORS",
]
