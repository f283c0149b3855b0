"""
Fallback Telemetry Derive Module
Turns a fallback decision into an event record for the observability
collaborator.

NO PII:
- No payloads
- No session tokens
- Only: reason code, operation label, status code

Usage:
    from interaction_contract.fallback.derive import derive_fallback_event

    event = derive_fallback_event(reason, operation="analyze")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .models import FALLBACK_CONTRACT_VERSION, FallbackReason

logger = logging.getLogger(__name__)

FALLBACK_EVENT_TYPE = "ENGINE_FALLBACK"


@dataclass
class FallbackEvent:
    """Single fallback event - NO PII."""
    event_type: str
    code: str
    count: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)


def derive_fallback_event(
    reason: Optional[FallbackReason],
    operation: str,
    status_code: Optional[int] = None,
) -> Optional[FallbackEvent]:
    """
    Derive a telemetry event from a fallback reason.

    Args:
        reason: Output of resolve_fallback_reason; None means the engine
            result was used and nothing is emitted
        operation: Which engine call fell back (analyze, timing, ...)
        status_code: Engine status code, when one was received

    Returns:
        FallbackEvent, or None when no fallback happened
    """
    if reason is None:
        return None

    code = FallbackReason(reason).value
    metadata: Dict[str, Any] = {
        "layer": "engine",
        "operation": operation,
        "contract_version": FALLBACK_CONTRACT_VERSION,
    }
    if status_code is not None:
        metadata["status_code"] = status_code

    logger.warning(f"Engine fallback for {operation}: {code}")

    return FallbackEvent(
        event_type=FALLBACK_EVENT_TYPE,
        code=code,
        count=1,
        metadata=metadata,
    )
