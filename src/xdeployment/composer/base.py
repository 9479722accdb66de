"""Composer protocol and the helpers shared by every resource composer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    Mapping,
    Optional,
    Protocol,
    Type,
    TypeVar,
    runtime_checkable,
)

from pydantic import BaseModel, ValidationError

from xdeployment.composer.context import DEFAULT_ENGINE_ID, FunctionContext
from xdeployment.core.errors import CompositionError, ObservedResourceError
from xdeployment.function.models import Ready, Resource

M = TypeVar("M", bound=BaseModel)


@dataclass
class DesiredResource:
    """A composed resource body paired with the name it is desired under."""

    name: str
    resource: Dict[str, Any]
    ready: bool = False

    def to_resource(self) -> Resource:
        return Resource(
            resource=self.resource,
            ready=Ready.TRUE if self.ready else Ready.FALSE,
        )


@runtime_checkable
class ComposableResource(Protocol):
    """Protocol every resource composer implements."""

    @property
    def condition_type(self) -> str:
        """Condition type reported on the composite (e.g. 'DeploymentReady')."""
        ...

    def compose_desired_resource(self) -> Optional[DesiredResource]:
        """Build the desired resource, or None when it should not exist."""
        ...

    def is_ready(self) -> bool:
        """Whether the observed resource is available."""
        ...


def resource_name(kind: str, xr_name: str, engine_id: str = DEFAULT_ENGINE_ID) -> str:
    return f"{engine_id}-{kind}-{xr_name}"


def convert_observed(
    observed: Mapping[str, Mapping[str, Any]], name: str, model: Type[M]
) -> Optional[M]:
    """Decode the observed resource called ``name`` into ``model``.

    Returns None when nothing has been observed under that name yet, which
    is normal before the first reconcile completes.
    """
    if name not in observed:
        return None

    try:
        return model.model_validate(dict(observed[name]))
    except ValidationError as e:
        raise ObservedResourceError(
            f"cannot decode observed resource {name} into {model.__name__}",
            details={"resource": name, "errors": e.error_count()},
        ) from e


class BaseComposer(Generic[M]):
    """Shared state and behaviour for resource composers.

    Subclasses set ``kind``, ``condition_type`` and ``observed_model`` and
    implement ``create_resource`` and ``observed_is_ready``.
    """

    kind: ClassVar[str] = ""
    condition_type: ClassVar[str] = ""
    observed_model: ClassVar[Type[BaseModel]]

    def __init__(self, ctx: FunctionContext) -> None:
        self.ctx = ctx
        self.resource_name = resource_name(self.kind, ctx.xr.name, ctx.engine_id)
        self.observed_resource: Optional[M] = convert_observed(
            ctx.observed, self.resource_name, self.observed_model
        )

    @property
    def log(self) -> Any:
        return self.ctx.log

    def compose_desired_resource(self) -> Optional[DesiredResource]:
        return self.compose_desired_resource_from(self.create_resource())

    def is_ready(self) -> bool:
        if self.observed_resource is None:
            return False
        return self.observed_is_ready(self.observed_resource)

    def create_resource(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def observed_is_ready(self, observed: M) -> bool:
        raise NotImplementedError

    def compose_desired_resource_from(
        self, structured: Optional[Dict[str, Any]]
    ) -> Optional[DesiredResource]:
        """Wrap a built object as a not-yet-ready DesiredResource.

        None passes straight through: the composer decided the resource
        should not exist for this XR.
        """
        if structured is None:
            return None

        try:
            composed = json.loads(json.dumps(structured))
        except (TypeError, ValueError) as e:
            raise CompositionError(
                f"cannot convert {self.kind} to composed resource: {e}",
                details={"resource": self.resource_name},
            ) from e

        missing = [field for field in ("apiVersion", "kind") if not composed.get(field)]
        if not (composed.get("metadata") or {}).get("name"):
            missing.append("metadata.name")
        if missing:
            raise CompositionError(
                f"cannot convert {self.kind} to composed resource: missing {', '.join(missing)}",
                details={"resource": self.resource_name},
            )

        return DesiredResource(name=self.resource_name, resource=composed, ready=False)
