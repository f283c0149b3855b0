"""
Timing Reconciler

Repairs per-record log timestamps in engine timing data before the UI
sees them. The display layer assumes both timestamps of every record are
valid; this module is what makes that true.

RULES:
1. Output has the same length and order as the input
2. sourceLoggedAt / targetLoggedAt are parsed independently
3. Missing or unparseable -> the caller's fallback timestamp, for that field only
4. Every other field passes through untouched; inputs are never mutated
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from interaction_contract.contract.models import (
    EngineTimingWarning,
    TimedEntity,
    TimingWarning,
)

logger = logging.getLogger(__name__)

SOURCE_LOGGED_AT = "sourceLoggedAt"
TARGET_LOGGED_AT = "targetLoggedAt"
# Stale per-entity stamps the engine may echo; the resolved value replaces them.
ENTITY_TIMESTAMP_KEYS = {"loggedAt", "logged_at"}

TimingRecord = Union[EngineTimingWarning, Mapping[str, Any]]

# The engine emits 1-9 fractional digits (trailing zeros dropped);
# fromisoformat on 3.10 only takes 3 or 6.
_FRACTION_RE = re.compile(r"\.(\d+)")


def _normalize_fraction(match: "re.Match") -> str:
    return "." + (match.group(1) + "000000")[:6]


def parse_engine_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the engine.

    Returns None for missing, non-string or invalid values. A trailing "Z"
    is read as UTC, and so is a timestamp without an offset. Fractional
    seconds of any length are cut or padded to microseconds.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(_normalize_fraction, text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _resolve_timestamp(value: Any, fallback_logged_at: datetime) -> datetime:
    parsed = parse_engine_timestamp(value)
    return fallback_logged_at if parsed is None else parsed


def _record_dict(record: TimingRecord) -> Dict[str, Any]:
    if isinstance(record, EngineTimingWarning):
        return record.model_dump(by_alias=True)
    return dict(record)


def reconcile_timing_records(
    fallback_logged_at: datetime,
    records: Iterable[TimingRecord],
) -> List[Dict[str, Any]]:
    """
    Resolve both log timestamps on every timing record.

    Args:
        fallback_logged_at: Used for any timestamp that is absent or invalid
        records: Engine timing records (dicts or EngineTimingWarning)

    Returns:
        New dicts, same order, with sourceLoggedAt and targetLoggedAt set
        to datetimes
    """
    reconciled: List[Dict[str, Any]] = []
    substituted = 0

    for record in records:
        result = _record_dict(record)
        for key in (SOURCE_LOGGED_AT, TARGET_LOGGED_AT):
            resolved = _resolve_timestamp(result.get(key), fallback_logged_at)
            if resolved is fallback_logged_at:
                substituted += 1
            result[key] = resolved
        reconciled.append(result)

    if substituted:
        logger.debug(
            f"Timing reconcile: {substituted} timestamp(s) replaced with fallback "
            f"across {len(reconciled)} record(s)"
        )
    return reconciled


def map_engine_timing_warnings(
    fallback_logged_at: datetime,
    warnings: Iterable[TimingRecord],
) -> List[TimingWarning]:
    """
    Convert engine timing records into TimingWarning models.

    Each entity gets its own logged_at, so the result is safe to render.
    """
    mapped: List[TimingWarning] = []
    for record in warnings:
        warning = (
            record if isinstance(record, EngineTimingWarning)
            else EngineTimingWarning.model_validate(record)
        )
        source_logged_at = _resolve_timestamp(warning.source_logged_at, fallback_logged_at)
        target_logged_at = _resolve_timestamp(warning.target_logged_at, fallback_logged_at)
        source = warning.source.model_dump(exclude=ENTITY_TIMESTAMP_KEYS)
        target = warning.target.model_dump(exclude=ENTITY_TIMESTAMP_KEYS)
        mapped.append(TimingWarning(
            id=warning.id,
            severity=warning.severity,
            reason=warning.reason,
            min_hours_apart=warning.min_hours_apart,
            actual_hours_apart=warning.actual_hours_apart,
            source=TimedEntity(**source, logged_at=source_logged_at),
            target=TimedEntity(**target, logged_at=target_logged_at),
        ))
    return mapped
