"""policy-helpers — adapt typed decision policies to a wire-safe raw calling convention."""

__version__ = "0.1.0"

from policy_helpers.decision.raw import RawPolicy, to_raw_decision, wrap_decision_policy
from policy_helpers.errors import InvalidEnumVariantError
from policy_helpers.models import Decision, DecisionHeader, DecisionType, RawDecision, Severity
from policy_helpers.serialization.payload import PayloadSerializer, serialize

__all__ = [
    "Decision",
    "DecisionHeader",
    "DecisionType",
    "InvalidEnumVariantError",
    "PayloadSerializer",
    "RawDecision",
    "RawPolicy",
    "Severity",
    "serialize",
    "to_raw_decision",
    "wrap_decision_policy",
]
