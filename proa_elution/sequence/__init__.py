"""Sequence parsing and residue counting."""

from .analyzer import (
    MIN_SEQUENCE_LENGTH,
    HIGHLIGHT_CLASSES,
    InvalidSequenceError,
    SequenceAnalyzer,
    analyze_sequence,
    highlight_sequence,
    normalize_sequence,
)

__all__ = [
    "MIN_SEQUENCE_LENGTH",
    "HIGHLIGHT_CLASSES",
    "InvalidSequenceError",
    "SequenceAnalyzer",
    "analyze_sequence",
    "highlight_sequence",
    "normalize_sequence",
]
