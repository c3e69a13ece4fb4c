"""Typed decisions, their wire form, and the adapter between the two."""

from policy_helpers.decision.catalog import DecisionEmitter, emitter, get_kind, load_catalog
from policy_helpers.decision.codec import (
    decode_decision_type,
    decode_severity,
    encode_decision_type,
    encode_severity,
)
from policy_helpers.decision.helpers import DecisionPolicy, as_decision_type, is_excepted
from policy_helpers.decision.raw import RawPolicy, dump_result, to_raw_decision, wrap_decision_policy

__all__ = [
    "DecisionEmitter",
    "DecisionPolicy",
    "RawPolicy",
    "as_decision_type",
    "decode_decision_type",
    "decode_severity",
    "dump_result",
    "emitter",
    "encode_decision_type",
    "encode_severity",
    "get_kind",
    "is_excepted",
    "load_catalog",
    "to_raw_decision",
    "wrap_decision_policy",
]
