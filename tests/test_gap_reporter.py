"""
Tests for Ratio Gap Reporter
Covers reason text mapping and sentence rendering.
"""

import pytest

from interaction_contract.gaps.describe import (
    GAP_REASON_TEXT,
    UNKNOWN_REASON_TEXT,
    EvaluationGap,
    GapReason,
    describe_gap,
    format_gap_reason,
)


def make_gap(reason: str) -> EvaluationGap:
    return EvaluationGap(
        source_supplement_id="zn",
        target_supplement_id="cu",
        reason=reason,
    )


class TestFormatGapReason:
    """Tests for format_gap_reason(reason)"""

    @pytest.mark.parametrize("reason,text", [
        ("missing_dosage", "missing dosage"),
        ("missing_supplement_data", "missing supplement data"),
        ("normalization_failed", "unit normalization failed"),
    ])
    def test_known_reasons(self, reason, text):
        assert format_gap_reason(reason) == text

    def test_enum_member(self):
        assert format_gap_reason(GapReason.MISSING_DOSAGE) == "missing dosage"

    @pytest.mark.parametrize("reason", ["", "rate_limited", None, 42])
    def test_unknown_reasons(self, reason):
        assert format_gap_reason(reason) == UNKNOWN_REASON_TEXT

    def test_table_covers_every_reason(self):
        assert set(GAP_REASON_TEXT) == {r.value for r in GapReason}


class TestDescribeGap:
    """Tests for describe_gap(gap)"""

    def test_missing_dosage_sentence(self):
        assert describe_gap(make_gap("missing_dosage")) == (
            "Ratio check could not evaluate one supplement pair: missing dosage."
        )

    def test_normalization_sentence(self):
        assert describe_gap(make_gap("normalization_failed")) == (
            "Ratio check could not evaluate one supplement pair: unit normalization failed."
        )

    def test_unknown_reason_sentence(self):
        assert describe_gap(make_gap("brand_new_reason")) == (
            "Ratio check could not evaluate one supplement pair: unknown reason."
        )

    def test_wire_dict(self):
        gap = {
            "sourceSupplementId": "zn",
            "targetSupplementId": "cu",
            "reason": "missing_supplement_data",
        }
        assert describe_gap(gap).endswith(": missing supplement data.")

    def test_model_accepts_wire_names(self):
        gap = EvaluationGap.model_validate({
            "sourceSupplementId": "zn",
            "targetSupplementId": "cu",
            "reason": "missing_dosage",
        })
        assert gap.source_supplement_id == "zn"
        assert gap.known_reason is True
        assert make_gap("other").known_reason is False
