"""Data models for typed decisions, their raw wire form, and decision kinds."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, TypedDict

from pydantic import BaseModel, ConfigDict, Field

ResourceID = str


class DecisionType(str, Enum):
    UNDETERMINED = "undetermined"
    ALLOW = "allow"
    DENY = "deny"


class Severity(str, Enum):
    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


RawDecisionType = Literal[0, 1, 2]
RawSeverity = Literal[0, 1, 2, 3, 4]


class DecisionHeader(BaseModel):
    """Metadata of a single decision."""

    api_version: str
    kind: str
    subject: ResourceID
    type: DecisionType
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    locator: str = ""
    severity: Severity


class Decision(BaseModel):
    """A policy judgment about one resource, with arbitrary evidence as payload."""

    header: DecisionHeader
    payload: Any = None


class RawDecisionHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_version: str
    kind: str
    subject: ResourceID
    type: RawDecisionType
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    locator: str = ""
    severity: RawSeverity


class RawDecision(BaseModel):
    """Wire form of a Decision: integer-coded enums and a JSON-text payload."""

    model_config = ConfigDict(frozen=True)

    header: RawDecisionHeader
    payload: str


class RawPolicyResult(TypedDict):
    result: list[RawDecision]


class DecisionKind(BaseModel):
    """A catalog entry describing one family of decisions."""

    kind: str
    api_version: str = "decision.api.shisho.dev/v1beta"
    description: str = ""
    default_severity: Severity = Severity.MEDIUM
    annotations: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)
