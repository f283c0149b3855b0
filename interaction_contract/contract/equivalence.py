"""
Interaction Contract Equivalence Checker

Decides whether the local evaluator and the engine produced the same
analysis. Comparison is exact on canonical tokens, category by category:

1. interactions (warnings + synergies merged)
2. ratio warnings
3. timing warnings

The first failing category ends the check. There is no partial credit.

Usage:
    from interaction_contract.contract.equivalence import is_equivalent

    if not is_equivalent(local_result, engine_result):
        ...
"""

import logging
from typing import List, Optional

from interaction_contract.shared.hashing import hash_token_lists

from .canonicalize import PayloadLike, canonicalize_payload
from .models import CanonicalPayload, EquivalenceReport, MismatchCategory

logger = logging.getLogger(__name__)


def _tokens_equal(left: List[str], right: List[str]) -> bool:
    if len(left) != len(right):
        return False
    for index in range(len(left)):
        if left[index] != right[index]:
            return False
    return True


def _first_mismatch(
    left: CanonicalPayload,
    right: CanonicalPayload,
) -> Optional[MismatchCategory]:
    if not _tokens_equal(left.interactions, right.interactions):
        return MismatchCategory.INTERACTIONS
    if not _tokens_equal(left.ratio_warnings, right.ratio_warnings):
        return MismatchCategory.RATIO_WARNINGS
    if not _tokens_equal(left.timing_warnings, right.timing_warnings):
        return MismatchCategory.TIMING_WARNINGS
    return None


def is_equivalent(payload_a: PayloadLike, payload_b: PayloadLike) -> bool:
    """
    True iff both payloads canonicalize to identical token multisets.

    Symmetric and order independent. None and missing arrays count as empty.
    """
    return _first_mismatch(
        canonicalize_payload(payload_a),
        canonicalize_payload(payload_b),
    ) is None


def canonical_hash(canonical: CanonicalPayload) -> str:
    """Digest of a canonical payload, stable across processes."""
    return hash_token_lists(canonical.model_dump())


def compare_payloads(
    local: PayloadLike,
    remote: PayloadLike,
    operation: str = "analyze",
) -> EquivalenceReport:
    """
    Compare a local result with an engine result and report drift.

    Args:
        local: Result of the in-process evaluator
        remote: Result returned by the engine
        operation: Label for the call being compared, used in logs only

    Returns:
        EquivalenceReport with the first mismatching category, if any,
        and canonical hashes of both sides
    """
    local_canonical = canonicalize_payload(local)
    remote_canonical = canonicalize_payload(remote)
    mismatch = _first_mismatch(local_canonical, remote_canonical)

    report = EquivalenceReport(
        equivalent=mismatch is None,
        mismatch_category=mismatch,
        local_hash=canonical_hash(local_canonical),
        remote_hash=canonical_hash(remote_canonical),
    )

    if mismatch is not None:
        logger.warning(
            f"Contract drift in {operation}: {mismatch.value} differ "
            f"(local={report.local_hash}, remote={report.remote_hash})"
        )
    else:
        logger.debug(f"Contract match for {operation}: {report.local_hash}")

    return report
