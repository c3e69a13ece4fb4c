"""Helpers shared by decision policies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Sequence, TypeVar, Union

from policy_helpers.models import Decision, DecisionType, ResourceID

Query = TypeVar("Query")
Params = TypeVar("Params")

# A typed policy: the query result and the manifest parameters in, decisions out.
# Decisions may also be plain mappings of the same shape.
DecisionPolicy = Callable[[Query, Params], Sequence[Union[Decision, Mapping[str, Any]]]]


def as_decision_type(allowed: bool) -> DecisionType:
    return DecisionType.ALLOW if allowed else DecisionType.DENY


def _resource_exceptions(params: Any) -> Any:
    if params is None:
        return None
    if isinstance(params, Mapping):
        return params.get("resource_exceptions")
    return getattr(params, "resource_exceptions", None)


def is_excepted(subject: ResourceID, params: Any = None) -> bool:
    """Whether `subject` is exempted by the `resource_exceptions` parameter.

    `params` may be a mapping or an object with a `resource_exceptions`
    attribute. The entry "*" exempts every resource.

    Raises:
        TypeError: If resource_exceptions holds anything but strings.
    """
    exceptions = _resource_exceptions(params)
    if not exceptions:
        return False

    if isinstance(exceptions, str) or any(not isinstance(x, str) for x in exceptions):
        raise TypeError("resource_exceptions must be a list of strings")

    return any(excepted == "*" or excepted == subject for excepted in exceptions)
