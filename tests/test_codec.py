"""Tests for the decision type / severity wire codec."""

from __future__ import annotations

from enum import Enum

import pytest

from policy_helpers.decision.codec import (
    _check_exhaustive,
    decode_decision_type,
    decode_severity,
    encode_decision_type,
    encode_severity,
)
from policy_helpers.errors import InvalidEnumVariantError
from policy_helpers.models import DecisionType, Severity


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------

class TestEncode:
    def test_decision_type_codes(self):
        assert encode_decision_type(DecisionType.UNDETERMINED) == 0
        assert encode_decision_type(DecisionType.ALLOW) == 1
        assert encode_decision_type(DecisionType.DENY) == 2

    def test_severity_codes(self):
        assert encode_severity(Severity.INFO) == 0
        assert encode_severity(Severity.LOW) == 1
        assert encode_severity(Severity.MEDIUM) == 2
        assert encode_severity(Severity.HIGH) == 3
        assert encode_severity(Severity.CRITICAL) == 4

    def test_string_values_accepted(self):
        assert encode_decision_type("deny") == 2
        assert encode_severity("critical") == 4

    @pytest.mark.parametrize("value", ["maybe", "ALLOW", 1, None, True, 1.5, []])
    def test_unknown_decision_type_raises(self, value):
        with pytest.raises(InvalidEnumVariantError):
            encode_decision_type(value)

    @pytest.mark.parametrize("value", ["severe", "Info", 0, None, ()])
    def test_unknown_severity_raises(self, value):
        with pytest.raises(InvalidEnumVariantError):
            encode_severity(value)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="Unreachable DecisionType variant"):
            encode_decision_type("maybe")

    def test_error_carries_value(self):
        with pytest.raises(InvalidEnumVariantError) as exc_info:
            encode_severity("severe")
        assert exc_info.value.enum_name == "Severity"
        assert exc_info.value.value == "severe"


# ---------------------------------------------------------------------------
# decode / bijection
# ---------------------------------------------------------------------------

class TestDecode:
    @pytest.mark.parametrize("member", list(DecisionType))
    def test_decision_type_round_trip(self, member):
        assert decode_decision_type(encode_decision_type(member)) is member

    @pytest.mark.parametrize("member", list(Severity))
    def test_severity_round_trip(self, member):
        assert decode_severity(encode_severity(member)) is member

    def test_codes_are_distinct(self):
        assert sorted(encode_decision_type(m) for m in DecisionType) == [0, 1, 2]
        assert sorted(encode_severity(m) for m in Severity) == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("code", [-1, 3, 100, True, "1", None])
    def test_invalid_decision_type_code(self, code):
        with pytest.raises(InvalidEnumVariantError):
            decode_decision_type(code)

    @pytest.mark.parametrize("code", [-1, 5, False, 2.0])
    def test_invalid_severity_code(self, code):
        with pytest.raises(InvalidEnumVariantError):
            decode_severity(code)


# ---------------------------------------------------------------------------
# exhaustiveness guard
# ---------------------------------------------------------------------------

class _Traffic(str, Enum):
    RED = "red"
    AMBER = "amber"
    GREEN = "green"


class TestExhaustiveness:
    def test_complete_table_passes(self):
        _check_exhaustive(_Traffic, {_Traffic.RED: 0, _Traffic.AMBER: 1, _Traffic.GREEN: 2})

    def test_missing_member_fails(self):
        with pytest.raises(InvalidEnumVariantError, match="GREEN"):
            _check_exhaustive(_Traffic, {_Traffic.RED: 0, _Traffic.AMBER: 1})

    def test_duplicate_code_fails(self):
        with pytest.raises(InvalidEnumVariantError):
            _check_exhaustive(_Traffic, {_Traffic.RED: 0, _Traffic.AMBER: 0, _Traffic.GREEN: 2})

    def test_gap_in_codes_fails(self):
        with pytest.raises(InvalidEnumVariantError):
            _check_exhaustive(_Traffic, {_Traffic.RED: 0, _Traffic.AMBER: 1, _Traffic.GREEN: 5})
