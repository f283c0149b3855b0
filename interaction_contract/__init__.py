"""
Interaction Contract Layer

Makes the in-process interaction evaluator and the remote analysis engine
interchangeable for callers:

- contract: canonical tokens and exact equivalence between two results
- fallback: closed taxonomy of reasons the engine result was not used
- timing:   timestamp repair for engine timing warnings
- gaps:     user-facing text for pairs the ratio check skipped

Every function here is synchronous, stateless and free of I/O.
"""

from .contract import (
    CONTRACT_VERSION,
    AnalysisPayload,
    canonicalize_payload,
    compare_payloads,
    is_equivalent,
    calculate_traffic_light,
)
from .fallback import (
    FallbackReason,
    FallbackContext,
    classify_request_error,
    resolve_fallback_reason,
)
from .timing import reconcile_timing_records, map_engine_timing_warnings
from .gaps import EvaluationGap, describe_gap

__all__ = [
    "CONTRACT_VERSION",
    "AnalysisPayload",
    "canonicalize_payload",
    "compare_payloads",
    "is_equivalent",
    "calculate_traffic_light",
    "FallbackReason",
    "FallbackContext",
    "classify_request_error",
    "resolve_fallback_reason",
    "reconcile_timing_records",
    "map_engine_timing_warnings",
    "EvaluationGap",
    "describe_gap",
]

__version__ = CONTRACT_VERSION
