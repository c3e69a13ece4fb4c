"""Example: a typed policy checking that load balancers ship access logs.

Run with:
    policy-helpers run alb_logging_policy:policy --app-dir examples -i examples/alb_input.json
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from policy_helpers.decision import emitter, wrap_decision_policy
from policy_helpers.ingestion.converters import model_input_converter
from policy_helpers.models import Decision


# -- Query shape (normally generated from the query) --------------------------

class AccessLog(BaseModel):
    enabled: bool
    bucket: str = ""
    prefix: str = ""


class LoadBalancerAttributes(BaseModel):
    access_log: AccessLog = Field(alias="accessLog")


class Metadata(BaseModel):
    id: str


class LoadBalancer(BaseModel):
    metadata: Metadata
    attributes: LoadBalancerAttributes


class Elb(BaseModel):
    load_balancers: list[LoadBalancer] = Field(alias="loadBalancers", default_factory=list)


class Account(BaseModel):
    elb: Elb


class Aws(BaseModel):
    accounts: list[Account] = Field(default_factory=list)


class Input(BaseModel):
    aws: Aws


# -- Policy -------------------------------------------------------------------

logging_decision = emitter("aws_alb_logging")


def decide(query: Input, params: dict | None) -> list[Decision]:
    decisions = []
    for account in query.aws.accounts:
        for lb in account.elb.load_balancers:
            log = lb.attributes.access_log
            decisions.append(logging_decision(
                allowed=log.enabled,
                subject=lb.metadata.id,
                payload={
                    "log_bucket": log.bucket,
                    "log_enabled": log.enabled,
                    "log_prefix": log.prefix,
                },
                params=params,
            ))
    return decisions


policy = wrap_decision_policy(model_input_converter(Input))(decide)
