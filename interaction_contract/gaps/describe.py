"""
Ratio Gap Reporter
Renders user-facing text for supplement pairs the ratio check could not
evaluate.

RULES (LOCKED):
1. Known reasons map through GAP_REASON_TEXT
2. Anything else renders as "unknown reason"
3. Sentence: "Ratio check could not evaluate one supplement pair: {text}."
"""

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, Field


class GapReason(str, Enum):
    MISSING_DOSAGE = "missing_dosage"
    MISSING_SUPPLEMENT_DATA = "missing_supplement_data"
    NORMALIZATION_FAILED = "normalization_failed"


GAP_REASON_TEXT = {
    GapReason.MISSING_DOSAGE.value: "missing dosage",
    GapReason.MISSING_SUPPLEMENT_DATA.value: "missing supplement data",
    GapReason.NORMALIZATION_FAILED.value: "unit normalization failed",
}

UNKNOWN_REASON_TEXT = "unknown reason"


class EvaluationGap(BaseModel):
    """
    A supplement pair the ratio check skipped.

    `reason` is kept as a plain string so newer reason codes from the
    engine still validate.
    """
    source_supplement_id: str = Field(alias="sourceSupplementId")
    target_supplement_id: str = Field(alias="targetSupplementId")
    reason: str

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def known_reason(self) -> bool:
        return self.reason in GAP_REASON_TEXT


def format_gap_reason(reason: Any) -> str:
    """
    Human text for a gap reason code.

    >>> format_gap_reason("normalization_failed")
    'unit normalization failed'
    >>> format_gap_reason("something_new")
    'unknown reason'
    """
    if isinstance(reason, Enum):
        reason = reason.value
    if not isinstance(reason, str):
        return UNKNOWN_REASON_TEXT
    return GAP_REASON_TEXT.get(reason, UNKNOWN_REASON_TEXT)


def describe_gap(gap: Union[EvaluationGap, Mapping[str, Any]]) -> str:
    """Full sentence for one evaluation gap."""
    if isinstance(gap, EvaluationGap):
        reason = gap.reason
    else:
        reason = gap.get("reason")
    return f"Ratio check could not evaluate one supplement pair: {format_gap_reason(reason)}."
