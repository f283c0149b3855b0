"""Interaction Contract Shared Utilities"""

from .hashing import (
    canonicalize,
    canonicalize_and_hash,
    hash_token_lists,
)

__all__ = [
    "canonicalize",
    "canonicalize_and_hash",
    "hash_token_lists",
]
