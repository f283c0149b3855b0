"""
Interaction Contract Canonicalizer

Turns an analysis payload into deterministic, sortable tokens so that two
providers can be compared regardless of ordering, array split or float
jitter.

Token formats:
    interaction     id|type|severity|source.id|target.id
    ratio warning   id|severity|round3(currentRatio)|source.id|target.id
    timing warning  id|severity|round3(minHoursApart)|source.id|target.id

Lists are sorted lexicographically. Duplicates are kept (multiset).

Version: interaction_contract_v1
"""

import math
from enum import Enum
from typing import Any, Iterable, List, Mapping, Tuple, Union

from .models import (
    AnalysisPayload,
    CanonicalPayload,
    InteractionType,
    InteractionWarning,
)


TOKEN_SEPARATOR = "|"
NUMERIC_PRECISION = 3

PayloadLike = Union[AnalysisPayload, Mapping[str, Any], None]


def coerce_payload(payload: PayloadLike) -> AnalysisPayload:
    """
    Accept a model, a raw engine dict or None.

    None is the empty payload. Dicts are validated against AnalysisPayload.
    """
    if payload is None:
        return AnalysisPayload()
    if isinstance(payload, AnalysisPayload):
        return payload
    return AnalysisPayload.model_validate(payload)


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def format_rounded(value: float) -> str:
    """
    Render a float rounded to three decimals, trailing zeros dropped.

    26 -> "26", 26.0004 -> "26", 1.25 -> "1.25". Non-finite values are
    rendered as-is so they still compare equal to themselves.
    """
    number = float(value)
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"

    rendered = f"{number:.{NUMERIC_PRECISION}f}".rstrip("0").rstrip(".")
    if rendered in ("-0", ""):
        return "0"
    return rendered


def _join(*parts: Any) -> str:
    return TOKEN_SEPARATOR.join(_text(p) for p in parts)


# =============================================================================
# INTERACTIONS (single tagged list)
# =============================================================================

def merge_interactions(payload: PayloadLike) -> List[InteractionWarning]:
    """
    Merge `warnings` and `synergies` into one list of interaction records.

    A record's `type` decides what it is, not the array it arrived in.
    """
    data = coerce_payload(payload)
    return list(data.warnings or []) + list(data.synergies or [])


def split_interactions(
    records: Iterable[InteractionWarning],
) -> Tuple[List[InteractionWarning], List[InteractionWarning]]:
    """
    Project a merged interaction list back to the legacy two arrays.

    Returns:
        (warnings, synergies) with synergy-typed records in the second list
    """
    warnings: List[InteractionWarning] = []
    synergies: List[InteractionWarning] = []
    for record in records:
        if _text(record.type) == InteractionType.SYNERGY.value:
            synergies.append(record)
        else:
            warnings.append(record)
    return warnings, synergies


# =============================================================================
# TOKENS
# =============================================================================

def interaction_tokens(payload: PayloadLike) -> List[str]:
    return sorted(
        _join(w.id, w.type, w.severity, w.source.id, w.target.id)
        for w in merge_interactions(payload)
    )


def ratio_warning_tokens(payload: PayloadLike) -> List[str]:
    data = coerce_payload(payload)
    return sorted(
        _join(w.id, w.severity, format_rounded(w.current_ratio), w.source.id, w.target.id)
        for w in (data.ratio_warnings or [])
    )


def timing_warning_tokens(payload: PayloadLike) -> List[str]:
    data = coerce_payload(payload)
    return sorted(
        _join(w.id, w.severity, format_rounded(w.min_hours_apart), w.source.id, w.target.id)
        for w in (data.timing_warnings or [])
    )


def canonicalize_payload(payload: PayloadLike) -> CanonicalPayload:
    """
    Canonicalize a payload into three sorted token lists.

    Args:
        payload: AnalysisPayload, raw engine dict, or None

    Returns:
        CanonicalPayload with interactions, ratio_warnings, timing_warnings
    """
    data = coerce_payload(payload)
    return CanonicalPayload(
        interactions=interaction_tokens(data),
        ratio_warnings=ratio_warning_tokens(data),
        timing_warnings=timing_warning_tokens(data),
    )
