"""
Interaction Contract Canonical Hashing
Digest helpers for canonical token lists.

Used to fingerprint the canonical form of an analysis payload so that
drift between the local evaluator and the engine can be logged without
shipping whole payloads into telemetry.
"""

import hashlib
import json
from typing import Any, Dict, List


def canonicalize(obj: Any) -> str:
    """
    Convert object to canonical JSON string.
    Deterministic: same input always produces same output.
    """
    return json.dumps(obj, sort_keys=True, separators=(',', ':'), ensure_ascii=True)


def canonicalize_and_hash(obj: Any) -> str:
    """
    Returns: "sha256:<64-char-hex>"
    """
    canonical = canonicalize(obj)
    digest = hashlib.sha256(canonical.encode('utf-8')).hexdigest()
    return f"sha256:{digest}"


def hash_token_lists(token_lists: Dict[str, List[str]]) -> str:
    """
    Hash a mapping of category -> canonical token list.

    Token lists are expected to be sorted already; order is part of the digest.
    """
    return canonicalize_and_hash({k: list(v) for k, v in token_lists.items()})
