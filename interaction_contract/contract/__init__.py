"""
Interaction Contract: Equivalence Layer

Answers: "Did the local evaluator and the engine say the same thing?"

- Canonicalizes analysis payloads into sorted tokens
- Merges warnings and synergies into one interaction list
- Rounds ratios and hour spacings to 3 decimals before comparing
- Compares category by category, exact match only

Version: interaction_contract_v1
"""

from .models import (
    CONTRACT_VERSION,
    AnalysisPayload,
    CanonicalPayload,
    Entity,
    EngineTimingWarning,
    EquivalenceReport,
    InteractionType,
    InteractionWarning,
    MismatchCategory,
    RatioWarning,
    Severity,
    TimedEntity,
    TimingWarning,
    TrafficLightStatus,
)
from .canonicalize import (
    canonicalize_payload,
    merge_interactions,
    split_interactions,
)
from .equivalence import is_equivalent, compare_payloads
from .status import calculate_traffic_light

__all__ = [
    "CONTRACT_VERSION",
    "AnalysisPayload",
    "CanonicalPayload",
    "Entity",
    "EngineTimingWarning",
    "EquivalenceReport",
    "InteractionType",
    "InteractionWarning",
    "MismatchCategory",
    "RatioWarning",
    "Severity",
    "TimedEntity",
    "TimingWarning",
    "TrafficLightStatus",
    "canonicalize_payload",
    "merge_interactions",
    "split_interactions",
    "is_equivalent",
    "compare_payloads",
    "calculate_traffic_light",
]

__version__ = CONTRACT_VERSION
