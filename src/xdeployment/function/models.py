"""
Wire models for a composition function call.

A request carries the observed composite, the observed composed resources
and the desired state accumulated by earlier functions in the pipeline. The
response returns the desired state plus conditions and results.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Ready(str, Enum):
    """Readiness of a desired composed resource."""

    UNSPECIFIED = "Unspecified"
    TRUE = "True"
    FALSE = "False"


class Status(str, Enum):
    """Status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Severity(str, Enum):
    """Severity of a result."""

    NORMAL = "Normal"
    WARNING = "Warning"
    FATAL = "Fatal"


class Target(str, Enum):
    """Which object a condition or result is reported on."""

    COMPOSITE = "Composite"
    COMPOSITE_AND_CLAIM = "CompositeAndClaim"


class RequestMeta(BaseModel):
    tag: str = ""


class ResponseMeta(BaseModel):
    tag: str = ""
    ttl: int = Field(60, description="Seconds the caller may cache this response")


class Resource(BaseModel):
    """A composite or composed resource as it travels on the wire."""

    resource: Dict[str, Any] = Field(default_factory=dict)
    ready: Ready = Ready.UNSPECIFIED


class State(BaseModel):
    composite: Optional[Resource] = None
    resources: Dict[str, Resource] = Field(default_factory=dict)


class RunFunctionRequest(BaseModel):
    meta: RequestMeta = Field(default_factory=RequestMeta)
    input: Optional[Dict[str, Any]] = None
    observed: State = Field(default_factory=State)
    desired: State = Field(default_factory=State)


class Condition(BaseModel):
    type: str
    status: Status
    reason: str
    message: Optional[str] = None
    target: Target = Target.COMPOSITE


class Result(BaseModel):
    severity: Severity
    message: str
    target: Target = Target.COMPOSITE


class RunFunctionResponse(BaseModel):
    meta: ResponseMeta = Field(default_factory=ResponseMeta)
    desired: State = Field(default_factory=State)
    conditions: List[Condition] = Field(default_factory=list)
    results: List[Result] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Whether any fatal result was recorded."""
        return any(r.severity == Severity.FATAL for r in self.results)
