"""
Interaction Contract: Fallback Classifier

Answers: "Why did we not use the engine's answer for this request?"

Principles:
- Closed taxonomy of reason codes
- Total functions (never raise)
- No retries, no I/O; the orchestrator owns the call
"""

from .models import FALLBACK_CONTRACT_VERSION, FallbackContext, FallbackReason
from .errors import EngineRequestError
from .classify import classify_request_error, resolve_fallback_reason
from .derive import FallbackEvent, derive_fallback_event

__all__ = [
    "FALLBACK_CONTRACT_VERSION",
    "FallbackContext",
    "FallbackReason",
    "EngineRequestError",
    "classify_request_error",
    "resolve_fallback_reason",
    "FallbackEvent",
    "derive_fallback_event",
]
