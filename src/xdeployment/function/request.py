"""Accessors that decode the parts of a RunFunctionRequest."""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from xdeployment.core.errors import InputDecodeError
from xdeployment.function.models import Resource, RunFunctionRequest

M = TypeVar("M", bound=BaseModel)


def get_input(req: RunFunctionRequest, model: Type[M]) -> M:
    """Decode the function input into ``model``.

    A request without input decodes to the model's defaults.
    """
    try:
        return model.model_validate(req.input or {})
    except ValidationError as e:
        raise InputDecodeError(
            f"cannot decode function input into {model.__name__}",
            details={"errors": e.error_count()},
        ) from e


def get_observed_composite_resource(req: RunFunctionRequest) -> Dict[str, Any]:
    composite = req.observed.composite
    if composite is None or not composite.resource:
        raise InputDecodeError("request has no observed composite resource")
    return composite.resource


def get_observed_composed_resources(req: RunFunctionRequest) -> Dict[str, Dict[str, Any]]:
    """Return observed composed resources keyed by resource name."""
    return {name: res.resource for name, res in req.observed.resources.items()}


def get_desired_composed_resources(req: RunFunctionRequest) -> Dict[str, Resource]:
    """Return a copy of the desired composed resources from earlier pipeline steps."""
    return {name: res.model_copy(deep=True) for name, res in req.desired.resources.items()}


def convert_composite(composite: Dict[str, Any], model: Type[M]) -> M:
    try:
        return model.model_validate(composite)
    except ValidationError as e:
        raise InputDecodeError(
            f"cannot convert composite resource to {model.__name__}",
            details={"errors": e.error_count()},
        ) from e
