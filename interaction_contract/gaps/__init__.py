"""Interaction Contract: Ratio Gap Reporter"""

from .describe import (
    GAP_REASON_TEXT,
    UNKNOWN_REASON_TEXT,
    EvaluationGap,
    GapReason,
    describe_gap,
    format_gap_reason,
)

__all__ = [
    "GAP_REASON_TEXT",
    "UNKNOWN_REASON_TEXT",
    "EvaluationGap",
    "GapReason",
    "describe_gap",
    "format_gap_reason",
]
