"""
Interaction Contract Models

Pydantic models for the analysis payload shared by the local evaluator
and the remote engine.

Wire names are camelCase (engine JSON). Python attributes are snake_case.
Both spellings are accepted on input.

Version: interaction_contract_v1
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


CONTRACT_VERSION = "interaction_contract_v1"


# =============================================================================
# ENUMS
# =============================================================================

class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    CRITICAL = "critical"


class InteractionType(str, Enum):
    COMPETITION = "competition"
    SYNERGY = "synergy"


class MismatchCategory(str, Enum):
    """First category that failed an equivalence check."""
    INTERACTIONS = "interactions"
    RATIO_WARNINGS = "ratio_warnings"
    TIMING_WARNINGS = "timing_warnings"


class TrafficLightStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


# =============================================================================
# ENTITIES
# =============================================================================

class Entity(BaseModel):
    """A supplement referenced by a warning. Identity is `id`."""
    id: str
    name: str

    class Config:
        extra = "allow"
        frozen = True


class TimedEntity(Entity):
    """Entity plus the moment the user logged it."""
    logged_at: datetime = Field(alias="loggedAt")

    class Config:
        extra = "allow"
        frozen = True
        populate_by_name = True


# =============================================================================
# WARNINGS
# =============================================================================

class InteractionWarning(BaseModel):
    """
    One interaction record.

    Competition and synergy records share this shape; `type` is the tag.
    The legacy `warnings` / `synergies` arrays are only a transport split.
    """
    id: str
    type: InteractionType
    severity: Severity
    source: Entity
    target: Entity

    class Config:
        use_enum_values = True
        extra = "allow"
        frozen = True


class RatioWarning(BaseModel):
    """Dosage ratio between two supplements falls outside its range."""
    id: str
    severity: Severity
    current_ratio: float = Field(alias="currentRatio")
    min_ratio: Optional[float] = Field(default=None, alias="minRatio")
    max_ratio: Optional[float] = Field(default=None, alias="maxRatio")
    optimal_ratio: Optional[float] = Field(default=None, alias="optimalRatio")
    source: Entity
    target: Entity

    class Config:
        use_enum_values = True
        populate_by_name = True
        extra = "allow"
        frozen = True


class TimingWarning(BaseModel):
    """Two supplements logged closer together than the required spacing."""
    id: str
    severity: Severity
    min_hours_apart: float = Field(alias="minHoursApart")
    actual_hours_apart: float = Field(alias="actualHoursApart")
    reason: str
    source: TimedEntity
    target: TimedEntity

    class Config:
        use_enum_values = True
        populate_by_name = True
        extra = "allow"
        frozen = True


class EngineTimingWarning(BaseModel):
    """
    Timing warning as the engine sends it.

    Log timestamps travel as optional ISO-8601 strings next to the
    entities and may be missing or malformed.
    """
    id: str
    severity: Severity
    min_hours_apart: float = Field(alias="minHoursApart")
    actual_hours_apart: float = Field(alias="actualHoursApart")
    reason: str
    source: Entity
    target: Entity
    source_logged_at: Optional[str] = Field(default=None, alias="sourceLoggedAt")
    target_logged_at: Optional[str] = Field(default=None, alias="targetLoggedAt")

    class Config:
        use_enum_values = True
        populate_by_name = True
        extra = "allow"
        frozen = True


# =============================================================================
# PAYLOAD
# =============================================================================

class AnalysisPayload(BaseModel):
    """
    Result of one analysis call, from either provider.

    Every array may be absent or null; both mean "no records".
    """
    warnings: Optional[List[InteractionWarning]] = None
    synergies: Optional[List[InteractionWarning]] = None
    ratio_warnings: Optional[List[RatioWarning]] = Field(default=None, alias="ratioWarnings")
    timing_warnings: Optional[List[Union[TimingWarning, EngineTimingWarning]]] = Field(
        default=None, alias="timingWarnings"
    )

    class Config:
        populate_by_name = True
        extra = "allow"
        frozen = True


class CanonicalPayload(BaseModel):
    """Sorted canonical tokens, one list per category."""
    interactions: List[str] = Field(default_factory=list)
    ratio_warnings: List[str] = Field(default_factory=list)
    timing_warnings: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class EquivalenceReport(BaseModel):
    """Outcome of comparing a local result against a remote one."""
    equivalent: bool
    mismatch_category: Optional[MismatchCategory] = None
    local_hash: str
    remote_hash: str
    version: str = CONTRACT_VERSION

    class Config:
        use_enum_values = True
