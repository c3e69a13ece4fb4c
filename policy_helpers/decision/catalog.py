"""Bundled catalog of decision kinds and emitters that build decisions for them."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from policy_helpers.decision.helpers import as_decision_type, is_excepted
from policy_helpers.models import Decision, DecisionHeader, DecisionKind, ResourceID, Severity


def _kinds_dir() -> Path:
    """Return the path to the bundled kind definitions."""
    return Path(__file__).parent / "kinds"


def load_kinds(path: Path) -> list[DecisionKind]:
    """Load decision kinds from a JSON file with a top-level `kinds` list."""
    data = json.loads(path.read_text())
    return [DecisionKind.model_validate(k) for k in data.get("kinds", [])]


@lru_cache(maxsize=1)
def load_catalog() -> dict[str, DecisionKind]:
    """Load every bundled kind, keyed by kind name."""
    catalog: dict[str, DecisionKind] = {}
    for f in sorted(_kinds_dir().glob("*.json")):
        for kind in load_kinds(f):
            catalog[kind.kind] = kind
    return catalog


def get_kind(name: str) -> DecisionKind:
    """Look up a bundled kind by name.

    Raises:
        KeyError: If no bundled kind has that name.
    """
    try:
        return load_catalog()[name]
    except KeyError:
        raise KeyError(f"Unknown decision kind: {name}") from None


class DecisionEmitter:
    """Builds decisions of one kind, filling in the header from the catalog entry.

    Disallowed decisions take the kind's default severity unless overridden;
    allowed ones are always INFO. Subjects listed in the `resource_exceptions`
    parameter are allowed regardless of `allowed`.
    """

    def __init__(self, kind: DecisionKind) -> None:
        self._kind = kind

    @property
    def kind(self) -> DecisionKind:
        return self._kind

    def __call__(
        self,
        allowed: bool,
        subject: ResourceID,
        payload: Any = None,
        locator: str | None = None,
        severity: Severity | None = None,
        params: Any = None,
    ) -> Decision:
        return Decision(
            header=DecisionHeader(
                api_version=self._kind.api_version,
                kind=self._kind.kind,
                subject=subject,
                locator=locator or "",
                severity=Severity.INFO if allowed else (severity or self._kind.default_severity),
                labels=dict(self._kind.labels),
                annotations=dict(self._kind.annotations),
                type=as_decision_type(is_excepted(subject, params) or allowed),
            ),
            payload=payload,
        )


def emitter(kind: str | DecisionKind) -> DecisionEmitter:
    """Return an emitter for a bundled kind name or an explicit DecisionKind."""
    if isinstance(kind, str):
        kind = get_kind(kind)
    return DecisionEmitter(kind)
