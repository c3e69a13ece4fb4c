"""Serialize arbitrary decision payloads into JSON text.

The standard encoder covers dicts, lists, strings, numbers, booleans and
None. Everything else is lowered by an ordered list of rules, consulted for
every value at every depth before the value is encoded.
"""

from __future__ import annotations

import dataclasses
import json
import math
import re
import uuid
from collections.abc import Iterable, Mapping, Set
from datetime import date, time
from enum import Enum
from typing import Any, Callable, NamedTuple

from pydantic import BaseModel

# Largest integer an IEEE-754 double represents exactly.
MAX_SAFE_INTEGER = 2**53 - 1

_REGEX_FLAG_LETTERS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


class PayloadRule(NamedTuple):
    """A (predicate, transform) pair applied to values the encoder can't represent."""

    name: str
    predicate: Callable[[Any], bool]
    transform: Callable[[Any], Any]


def _is_temporal(value: Any) -> bool:
    return isinstance(value, (date, time))


def _is_unsafe_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_INTEGER


def _is_non_finite_float(value: Any) -> bool:
    return isinstance(value, float) and not math.isfinite(value)


def _is_symbol(value: Any) -> bool:
    if isinstance(value, uuid.UUID):
        return True
    # str/int-mixin enums are already encoded natively by their value
    return isinstance(value, Enum) and not isinstance(value, (str, int, float))


def _is_set(value: Any) -> bool:
    return isinstance(value, Set)


def _is_map(value: Any) -> bool:
    return isinstance(value, Mapping) and type(value) is not dict


def _is_pattern(value: Any) -> bool:
    return isinstance(value, re.Pattern)


def _is_record(value: Any) -> bool:
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_iterable(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, list, tuple, dict))


def _escape_source(source: str) -> str:
    """Escape `/` and line terminators the way a `/.../` literal needs them."""
    if not source:
        return "(?:)"
    out = []
    escaped = in_class = False
    for ch in source:
        if escaped:
            out.append(ch)
            escaped = False
            continue
        if ch == "\\":
            escaped = True
        elif ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            out.append("\\/")
            continue
        elif ch == "\n":
            out.append("\\n")
            continue
        elif ch == "\r":
            out.append("\\r")
            continue
        out.append(ch)
    return "".join(out)


def pattern_source(pattern: re.Pattern) -> str:
    """Render a compiled regex as `/source/flags`, flags in alphabetical order."""
    source = pattern.pattern
    if isinstance(source, bytes):
        source = source.decode("latin-1")
    flags = "".join(letter for flag, letter in _REGEX_FLAG_LETTERS if pattern.flags & flag)
    return f"/{_escape_source(source)}/{flags}"


def _record_fields(value: Any) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        fields = {name: getattr(value, name) for name in type(value).model_fields}
        fields.update(value.model_extra or {})
        return fields
    return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}


DEFAULT_RULES: tuple[PayloadRule, ...] = (
    PayloadRule("temporal", _is_temporal, lambda v: v.isoformat()),
    PayloadRule("big-integer", _is_unsafe_integer, str),
    PayloadRule("non-finite-float", _is_non_finite_float, lambda v: None),
    PayloadRule("symbol", _is_symbol, str),
    PayloadRule("set", _is_set, list),
    PayloadRule("map", _is_map, lambda v: [[key, item] for key, item in v.items()]),
    PayloadRule("pattern", _is_pattern, pattern_source),
    PayloadRule("record", _is_record, _record_fields),
    PayloadRule("iterable", _is_iterable, list),
)


class PayloadSerializer:
    """Encode payloads as compact JSON after lowering them through an ordered rule list.

    Rules added with register() are consulted before the built-in ones, in
    registration order. The first matching rule replaces the value; the
    replacement's children are lowered in turn, the replacement itself is not
    matched again.
    """

    def __init__(self, rules: Iterable[PayloadRule] = DEFAULT_RULES) -> None:
        self._base_rules = tuple(rules)
        self._custom_rules: list[PayloadRule] = []

    @property
    def rules(self) -> tuple[PayloadRule, ...]:
        return tuple(self._custom_rules) + self._base_rules

    def register(
        self,
        predicate: Callable[[Any], bool],
        transform: Callable[[Any], Any],
        name: str | None = None,
    ) -> PayloadRule:
        """Add a rule for a new kind of value without changing the traversal."""
        rule = PayloadRule(name or getattr(transform, "__name__", "custom"), predicate, transform)
        self._custom_rules.append(rule)
        return rule

    def prepare(self, payload: Any) -> Any:
        """Lower `payload` into plain dicts, lists and JSON scalars."""
        return self._walk(payload, set())

    def serialize(self, payload: Any) -> str:
        """Return JSON text for `payload`.

        Raises:
            ValueError: If a container refers back to one of its ancestors.
            TypeError: If a value matches no rule and isn't natively encodable.
        """
        return json.dumps(
            self.prepare(payload),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )

    def _replace(self, value: Any) -> Any:
        for rule in self.rules:
            if rule.predicate(value):
                return rule.transform(value)
        return value

    def _walk(self, value: Any, ancestors: set[int]) -> Any:
        replaced = self._replace(value)
        if not isinstance(replaced, (dict, list, tuple)):
            return replaced

        # same error as the standard encoder
        marker = id(value)
        if marker in ancestors:
            raise ValueError("Circular reference detected")
        ancestors.add(marker)
        try:
            if isinstance(replaced, dict):
                return {key: self._walk(item, ancestors) for key, item in replaced.items()}
            return [self._walk(item, ancestors) for item in replaced]
        finally:
            ancestors.discard(marker)


_default_serializer = PayloadSerializer()


def serialize(payload: Any) -> str:
    """Serialize a decision payload with the built-in rules."""
    return _default_serializer.serialize(payload)
