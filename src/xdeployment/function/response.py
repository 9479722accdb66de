"""Builders for a RunFunctionResponse."""

from __future__ import annotations

from typing import Mapping

from xdeployment.function.models import (
    Condition,
    Resource,
    ResponseMeta,
    Result,
    RunFunctionRequest,
    RunFunctionResponse,
    Severity,
    Status,
    Target,
)

DEFAULT_TTL = 60


class ConditionOption:
    """Chainable handle on a condition already added to a response."""

    def __init__(self, condition: Condition) -> None:
        self._condition = condition

    def with_message(self, message: str) -> ConditionOption:
        self._condition.message = message
        return self

    def target_composite(self) -> ConditionOption:
        self._condition.target = Target.COMPOSITE
        return self

    def target_composite_and_claim(self) -> ConditionOption:
        self._condition.target = Target.COMPOSITE_AND_CLAIM
        return self


def to(req: RunFunctionRequest, ttl: int = DEFAULT_TTL) -> RunFunctionResponse:
    """Start a response to ``req``, carrying over the desired state it was sent."""
    return RunFunctionResponse(
        meta=ResponseMeta(tag=req.meta.tag, ttl=ttl),
        desired=req.desired.model_copy(deep=True),
    )


def _condition(rsp: RunFunctionResponse, typ: str, status: Status, reason: str) -> ConditionOption:
    condition = Condition(type=typ, status=status, reason=reason)
    rsp.conditions.append(condition)
    return ConditionOption(condition)


def condition_true(rsp: RunFunctionResponse, typ: str, reason: str) -> ConditionOption:
    return _condition(rsp, typ, Status.TRUE, reason)


def condition_false(rsp: RunFunctionResponse, typ: str, reason: str) -> ConditionOption:
    return _condition(rsp, typ, Status.FALSE, reason)


def fatal(rsp: RunFunctionResponse, err: Exception) -> None:
    """Record a fatal result. The caller stops the composition pipeline."""
    rsp.results.append(Result(severity=Severity.FATAL, message=_message(err)))


def warning(rsp: RunFunctionResponse, err: Exception) -> None:
    rsp.results.append(Result(severity=Severity.WARNING, message=_message(err)))


def normal(rsp: RunFunctionResponse, message: str) -> None:
    rsp.results.append(Result(severity=Severity.NORMAL, message=message))


def set_desired_composed_resources(
    rsp: RunFunctionResponse, desired: Mapping[str, Resource]
) -> None:
    """Replace the desired composed resources of the response."""
    rsp.desired.resources = dict(desired)


def _message(err: Exception) -> str:
    return getattr(err, "message", None) or str(err)
