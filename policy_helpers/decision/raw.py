"""Low-level interface of decision policies and converters between the typed and raw forms.

A host runtime only knows how to call `(input, data) -> {"result": [...]}`.
wrap_decision_policy adapts a typed policy to that convention in two steps:

    decide = lambda query, params: [...]
    raw_policy = wrap_decision_policy(convert_input)(decide)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Protocol, TypeVar, Union

from pydantic import ValidationError

from policy_helpers.decision.codec import encode_decision_type, encode_severity
from policy_helpers.errors import InvalidEnumVariantError
from policy_helpers.models import Decision, RawDecision, RawDecisionHeader, RawPolicyResult
from policy_helpers.serialization.payload import PayloadSerializer, serialize

logger = logging.getLogger(__name__)

Query = TypeVar("Query")

InputConverter = Callable[[Any], Query]
DecisionLike = Union[Decision, Mapping[str, Any]]


class RawPolicy(Protocol):
    """The calling convention every policy must expose to the host runtime."""

    def __call__(self, input: Any, data: Any) -> RawPolicyResult: ...


_ENUM_FIELDS = {("header", "type"): "DecisionType", ("header", "severity"): "Severity"}


def _as_decision(decision: DecisionLike) -> Decision:
    """Validate a mapping into a Decision; enum errors surface as InvalidEnumVariantError."""
    if isinstance(decision, Decision):
        return decision
    if not isinstance(decision, Mapping):
        raise TypeError(f"Expected a Decision or a mapping, got {type(decision).__name__}")
    try:
        return Decision.model_validate(decision)
    except ValidationError as e:
        for error in e.errors():
            enum_name = _ENUM_FIELDS.get(tuple(error["loc"]))
            if enum_name:
                raise InvalidEnumVariantError(enum_name, error.get("input")) from e
        raise


def to_raw_decision(decision: DecisionLike, serializer: PayloadSerializer | None = None) -> RawDecision:
    """Build the wire form of one decision.

    Mappings are validated into a Decision first. The source decision is left
    untouched: header fields are copied, the enums are encoded and the payload
    is serialized into a new RawDecision.
    """
    decision = _as_decision(decision)
    header = decision.header
    return RawDecision(
        header=RawDecisionHeader(
            api_version=header.api_version,
            kind=header.kind,
            subject=header.subject,
            type=encode_decision_type(header.type),
            labels=dict(header.labels or {}),
            annotations=dict(header.annotations or {}),
            locator=header.locator or "",
            severity=encode_severity(header.severity),
        ),
        payload=serializer.serialize(decision.payload) if serializer else serialize(decision.payload),
    )


def to_raw_decisions(
    decisions: Iterable[DecisionLike],
    serializer: PayloadSerializer | None = None,
) -> list[RawDecision]:
    """Convert every decision, in order. Either all convert or the first failure propagates."""
    return [to_raw_decision(d, serializer) for d in decisions]


def wrap_decision_policy(
    input_converter: InputConverter,
    serializer: PayloadSerializer | None = None,
) -> Callable[[Callable[[Any, Any], Iterable[DecisionLike]]], RawPolicy]:
    """Build an adapter that turns a typed decision policy into a RawPolicy.

    The converter and the policy are taken in separate calls so a wrong
    policy is reported against the policy, not against the converter.

    Errors raised by the converter or the policy propagate unchanged.
    """
    if not callable(input_converter):
        raise TypeError(f"input_converter must be callable, got {type(input_converter).__name__}")

    def apply(policy: Callable[[Any, Any], Iterable[DecisionLike]]) -> RawPolicy:
        if not callable(policy):
            raise TypeError(f"policy must be callable, got {type(policy).__name__}")
        policy_name = getattr(policy, "__qualname__", repr(policy))

        def raw_policy(input: Any, data: Any) -> RawPolicyResult:
            query = input_converter(input)
            # data is the manifest parameters, validated before it reaches us
            decisions = policy(query, data)
            result = to_raw_decisions(decisions, serializer)
            logger.debug("Policy %s emitted %d decision(s)", policy_name, len(result))
            return {"result": result}

        # name and docs only; the signature stays (input, data)
        raw_policy.__name__ = getattr(policy, "__name__", raw_policy.__name__)
        raw_policy.__qualname__ = policy_name
        raw_policy.__doc__ = policy.__doc__
        return raw_policy

    return apply


def dump_result(result: RawPolicyResult, indent: int | None = None) -> str:
    """Render a raw policy result as JSON text for transport."""
    body = {"result": [d.model_dump() for d in result["result"]]}
    return json.dumps(body, indent=indent, ensure_ascii=False)
