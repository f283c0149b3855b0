"""
Interaction Contract Endpoints

Thin HTTP surface over the contract functions. No outbound calls are made
here; callers post what they already have.

GET  /api/v1/interaction-contract/health            - Health check
POST /api/v1/interaction-contract/compare           - Local vs engine equivalence
GET  /api/v1/interaction-contract/fixtures          - Run built-in contract fixtures
POST /api/v1/interaction-contract/fallback/resolve  - Label a request outcome
POST /api/v1/interaction-contract/timing/reconcile  - Repair timing timestamps
POST /api/v1/interaction-contract/gaps/describe     - Render a ratio gap sentence
POST /api/v1/interaction-contract/traffic-light     - Status for a warning list

Version: interaction_contract_v1
"""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from .config import get_engine_settings
from .contract.equivalence import compare_payloads
from .contract.fixtures import ContractFixtureResult, evaluate_builtin_fixtures
from .contract.models import (
    CONTRACT_VERSION,
    AnalysisPayload,
    EquivalenceReport,
    InteractionWarning,
    TrafficLightStatus,
)
from .contract.status import calculate_traffic_light
from .fallback.classify import resolve_fallback_reason
from .fallback.derive import derive_fallback_event
from .fallback.models import FALLBACK_CONTRACT_VERSION, FallbackContext, FallbackReason
from .gaps.describe import EvaluationGap, describe_gap
from .timing.reconcile import reconcile_timing_records

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/interaction-contract",
    tags=["interaction-contract"],
)


# Request / response models

class ContractHealthResponse(BaseModel):
    status: str = "ok"
    module: str = "interaction_contract"
    version: str = CONTRACT_VERSION
    fallback_contract_version: str = FALLBACK_CONTRACT_VERSION
    engine_configured: bool
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class CompareRequest(BaseModel):
    local: Optional[AnalysisPayload] = None
    remote: Optional[AnalysisPayload] = None
    operation: str = "analyze"


class FixturesResponse(BaseModel):
    success: bool
    results: List[ContractFixtureResult]


class FallbackResolveRequest(BaseModel):
    engine_configured: Optional[bool] = Field(
        default=None,
        alias="engineConfigured",
        description="Defaults to whether ENGINE_URL is set",
    )
    has_session: bool = Field(alias="hasSession")
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    operation: str = "analyze"

    class Config:
        populate_by_name = True


class FallbackResolveResponse(BaseModel):
    reason: Optional[FallbackReason] = None
    event: Optional[Dict[str, Any]] = None

    class Config:
        use_enum_values = True


class TimingReconcileRequest(BaseModel):
    fallback_logged_at: datetime = Field(alias="fallbackLoggedAt")
    records: List[Dict[str, Any]] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class TimingReconcileResponse(BaseModel):
    records: List[Dict[str, Any]]


class GapDescribeRequest(BaseModel):
    gap: EvaluationGap


class GapDescribeResponse(BaseModel):
    message: str


class TrafficLightRequest(BaseModel):
    warnings: List[InteractionWarning] = Field(default_factory=list)


class TrafficLightResponse(BaseModel):
    status: TrafficLightStatus

    class Config:
        use_enum_values = True


# Endpoints

@router.get("/health", response_model=ContractHealthResponse)
async def contract_health():
    """
    Health check for the contract module.

    Does not require authentication.
    """
    return ContractHealthResponse(
        engine_configured=get_engine_settings().is_configured,
    )


@router.post("/compare", response_model=EquivalenceReport)
async def compare_endpoint(request: CompareRequest):
    """Compare a local analysis result with the engine's result."""
    try:
        return compare_payloads(request.local, request.remote, operation=request.operation)
    except Exception as e:
        logger.error(f"Contract compare failed: {e}")
        raise HTTPException(status_code=500, detail=f"Compare failed: {str(e)}")


@router.get("/fixtures", response_model=FixturesResponse)
async def fixtures_endpoint():
    """Run the built-in contract fixtures through the equivalence checker."""
    results = evaluate_builtin_fixtures()
    return FixturesResponse(
        success=all(r.matches_expected for r in results),
        results=results,
    )


@router.post("/fallback/resolve", response_model=FallbackResolveResponse)
async def fallback_resolve_endpoint(request: FallbackResolveRequest):
    """Label why the engine result was (or was not) usable for a request."""
    engine_configured = request.engine_configured
    if engine_configured is None:
        engine_configured = get_engine_settings().is_configured

    reason = resolve_fallback_reason(FallbackContext(
        engine_configured=engine_configured,
        has_session=request.has_session,
        status_code=request.status_code,
    ))
    event = derive_fallback_event(reason, request.operation, request.status_code)

    return FallbackResolveResponse(
        reason=reason,
        event=asdict(event) if event else None,
    )


@router.post("/timing/reconcile", response_model=TimingReconcileResponse)
async def timing_reconcile_endpoint(request: TimingReconcileRequest):
    """Fill missing or invalid log timestamps with the fallback time."""
    return TimingReconcileResponse(
        records=reconcile_timing_records(request.fallback_logged_at, request.records),
    )


@router.post("/gaps/describe", response_model=GapDescribeResponse)
async def gaps_describe_endpoint(request: GapDescribeRequest):
    return GapDescribeResponse(message=describe_gap(request.gap))


@router.post("/traffic-light", response_model=TrafficLightResponse)
async def traffic_light_endpoint(request: TrafficLightRequest):
    return TrafficLightResponse(status=calculate_traffic_light(request.warnings))
