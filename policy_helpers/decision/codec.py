"""Bijective mapping between symbolic decision enums and their integer wire codes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, TypeVar

from policy_helpers.errors import InvalidEnumVariantError
from policy_helpers.models import DecisionType, RawDecisionType, RawSeverity, Severity

E = TypeVar("E", bound=Enum)

RAW_TYPE_UNDETERMINED: RawDecisionType = 0
RAW_TYPE_ALLOW: RawDecisionType = 1
RAW_TYPE_DENY: RawDecisionType = 2

RAW_SEVERITY_INFO: RawSeverity = 0
RAW_SEVERITY_LOW: RawSeverity = 1
RAW_SEVERITY_MEDIUM: RawSeverity = 2
RAW_SEVERITY_HIGH: RawSeverity = 3
RAW_SEVERITY_CRITICAL: RawSeverity = 4

_DECISION_TYPE_CODES: dict[DecisionType, RawDecisionType] = {
    DecisionType.UNDETERMINED: RAW_TYPE_UNDETERMINED,
    DecisionType.ALLOW: RAW_TYPE_ALLOW,
    DecisionType.DENY: RAW_TYPE_DENY,
}

_SEVERITY_CODES: dict[Severity, RawSeverity] = {
    Severity.INFO: RAW_SEVERITY_INFO,
    Severity.LOW: RAW_SEVERITY_LOW,
    Severity.MEDIUM: RAW_SEVERITY_MEDIUM,
    Severity.HIGH: RAW_SEVERITY_HIGH,
    Severity.CRITICAL: RAW_SEVERITY_CRITICAL,
}


def _check_exhaustive(enum_cls: type[Enum], table: Mapping[Any, int]) -> None:
    """Fail loudly unless `table` maps every member of `enum_cls` onto 0..n-1 exactly once."""
    for member in enum_cls:
        if member not in table:
            raise InvalidEnumVariantError(enum_cls.__name__, member)
    if sorted(table.values()) != list(range(len(enum_cls))):
        raise InvalidEnumVariantError(enum_cls.__name__, dict(table))


# Evaluated at import: a member added to an enum without a code breaks the import.
_check_exhaustive(DecisionType, _DECISION_TYPE_CODES)
_check_exhaustive(Severity, _SEVERITY_CODES)

_DECISION_TYPES_BY_CODE = {code: member for member, code in _DECISION_TYPE_CODES.items()}
_SEVERITIES_BY_CODE = {code: member for member, code in _SEVERITY_CODES.items()}


def _as_member(enum_cls: type[E], value: Any) -> E:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise InvalidEnumVariantError(enum_cls.__name__, value) from None


def encode_decision_type(value: DecisionType | str) -> RawDecisionType:
    """Return the wire code of a decision type.

    Raises:
        InvalidEnumVariantError: If `value` is not a DecisionType (or its string value).
    """
    return _DECISION_TYPE_CODES[_as_member(DecisionType, value)]


def encode_severity(value: Severity | str) -> RawSeverity:
    """Return the wire code of a severity.

    Raises:
        InvalidEnumVariantError: If `value` is not a Severity (or its string value).
    """
    return _SEVERITY_CODES[_as_member(Severity, value)]


def _lookup_code(enum_cls: type[Enum], table: Mapping[int, E], code: Any) -> E:
    # bool is an int subclass, but True/False are never valid codes
    if isinstance(code, bool) or not isinstance(code, int) or code not in table:
        raise InvalidEnumVariantError(f"Raw{enum_cls.__name__}", code)
    return table[code]


def decode_decision_type(code: int) -> DecisionType:
    return _lookup_code(DecisionType, _DECISION_TYPES_BY_CODE, code)


def decode_severity(code: int) -> Severity:
    return _lookup_code(Severity, _SEVERITIES_BY_CODE, code)
