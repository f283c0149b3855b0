"""
Contract fixtures: paired local/engine payloads with the expected verdict.

Each fixture is a regression case for the provider contract. Running them
against the equivalence checker shows whether the checker still agrees
with the cases collected so far.
"""

from typing import List

from pydantic import BaseModel, Field

from .equivalence import is_equivalent
from .models import AnalysisPayload


class ContractFixture(BaseModel):
    name: str
    expected_equivalent: bool
    local_payload: AnalysisPayload = Field(default_factory=AnalysisPayload)
    remote_payload: AnalysisPayload = Field(default_factory=AnalysisPayload)


class ContractFixtureResult(BaseModel):
    name: str
    expected_equivalent: bool
    is_equivalent: bool
    matches_expected: bool


def evaluate_contract_fixture(fixture: ContractFixture) -> ContractFixtureResult:
    equivalent = is_equivalent(fixture.local_payload, fixture.remote_payload)
    return ContractFixtureResult(
        name=fixture.name,
        expected_equivalent=fixture.expected_equivalent,
        is_equivalent=equivalent,
        matches_expected=equivalent == fixture.expected_equivalent,
    )


ZINC = {"id": "zn", "name": "Zinc"}
COPPER = {"id": "cu", "name": "Copper"}
VITAMIN_D3 = {"id": "d3", "name": "Vitamin D3"}
VITAMIN_K2 = {"id": "k2", "name": "Vitamin K2"}

_ZN_CU_COMPETITION = {
    "id": "i-zn-cu",
    "type": "competition",
    "severity": "medium",
    "source": ZINC,
    "target": COPPER,
}

_D3_K2_SYNERGY = {
    "id": "i-d3-k2",
    "type": "synergy",
    "severity": "low",
    "source": VITAMIN_D3,
    "target": VITAMIN_K2,
}

_ZN_CU_RATIO = {
    "id": "r-zn-cu",
    "severity": "critical",
    "currentRatio": 26,
    "source": ZINC,
    "target": COPPER,
}


# Same records; the engine ships the synergy inside `warnings`.
EQUIVALENT_WARNING_FIXTURE = ContractFixture(
    name="equivalent-zn-cu-warning",
    expected_equivalent=True,
    local_payload=AnalysisPayload.model_validate({
        "warnings": [_ZN_CU_COMPETITION],
        "synergies": [_D3_K2_SYNERGY],
        "ratioWarnings": [_ZN_CU_RATIO],
    }),
    remote_payload=AnalysisPayload.model_validate({
        "warnings": [_D3_K2_SYNERGY, _ZN_CU_COMPETITION],
        "synergies": None,
        "ratioWarnings": [_ZN_CU_RATIO],
    }),
)

SEVERITY_DRIFT_FIXTURE = ContractFixture(
    name="severity-drift-warning",
    expected_equivalent=False,
    local_payload=AnalysisPayload.model_validate({
        "warnings": [{**_ZN_CU_COMPETITION, "severity": "critical"}],
    }),
    remote_payload=AnalysisPayload.model_validate({
        "warnings": [_ZN_CU_COMPETITION],
    }),
)

BUILTIN_FIXTURES: List[ContractFixture] = [
    EQUIVALENT_WARNING_FIXTURE,
    SEVERITY_DRIFT_FIXTURE,
]


def evaluate_builtin_fixtures() -> List[ContractFixtureResult]:
    return [evaluate_contract_fixture(f) for f in BUILTIN_FIXTURES]
