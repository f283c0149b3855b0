"""
Interaction Contract: Timing Reconciler

Guarantees two valid log timestamps on every engine timing record.
"""

from .reconcile import (
    parse_engine_timestamp,
    reconcile_timing_records,
    map_engine_timing_warnings,
)

__all__ = [
    "parse_engine_timestamp",
    "reconcile_timing_records",
    "map_engine_timing_warnings",
]
