"""Composition function handler for XDeployment composites."""

from __future__ import annotations

from typing import List, Optional, Tuple

import structlog

from xdeployment.composer.base import DesiredResource
from xdeployment.composer.context import DEFAULT_ENGINE_ID, FunctionContext
from xdeployment.composer.registry import ComposerRegistry
from xdeployment.core.errors import CompositionError, InputDecodeError, ObservedResourceError
from xdeployment.domain.models import XDeployment, XDeploymentDefaults
from xdeployment.function import request, response
from xdeployment.function.models import RunFunctionRequest, RunFunctionResponse
from xdeployment.resources import default_registry

logger = structlog.get_logger()

# (condition type, ready) recorded per composed resource, emitted after the loop
_Readiness = Tuple[str, bool]


def internal_error_response(rsp: RunFunctionResponse, err: Exception) -> None:
    """Mark the response as fatally failed due to an internal error.

    Sets FunctionSuccess=False with reason InternalError on both the
    composite and its claim, then records the error as fatal.
    """
    response.condition_false(rsp, "FunctionSuccess", "InternalError").target_composite_and_claim()
    response.fatal(rsp, err)


def composition_error_response(rsp: RunFunctionResponse, err: CompositionError) -> None:
    response.condition_false(rsp, "FunctionSuccess", "CompositionError").with_message(
        err.message
    ).target_composite()
    response.fatal(rsp, err)


class FunctionRunner:
    """Runs the XDeployment composition for one request at a time."""

    def __init__(
        self,
        registry: Optional[ComposerRegistry] = None,
        engine_id: str = DEFAULT_ENGINE_ID,
        ttl: int = response.DEFAULT_TTL,
        log: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._engine_id = engine_id
        self._ttl = ttl
        self._log = log or logger

    def run_function(self, req: RunFunctionRequest) -> RunFunctionResponse:
        """Compose the desired resources for the request's XDeployment.

        Decode failures end the call with an InternalError condition and no
        composed resources. A composer failing to build ends it with a
        CompositionError condition. Either way nothing composed during this
        call reaches the response.
        """
        self._log.info("running_function", tag=req.meta.tag)

        rsp = response.to(req, self._ttl)

        try:
            defaults = request.get_input(req, XDeploymentDefaults)
            observed = request.get_observed_composed_resources(req)
            desired = request.get_desired_composed_resources(req)
            xr = request.convert_composite(
                request.get_observed_composite_resource(req), XDeployment
            )
        except InputDecodeError as e:
            self._log.warning("invocation_failed", reason="InternalError", err=e.message)
            internal_error_response(rsp, e)
            return rsp

        log = self._log.bind(
            xr_version=xr.api_version,
            xr_kind=xr.kind,
            xr_name=xr.name,
        )

        ctx = FunctionContext.build(
            xr=xr,
            defaults=defaults,
            observed=observed,
            log=log,
            engine_id=self._engine_id,
        )

        try:
            composers = self._registry.build(ctx)
        except ObservedResourceError as e:
            log.warning("invocation_failed", reason="InternalError", err=e.message, **e.details)
            internal_error_response(rsp, e)
            return rsp

        composed: List[DesiredResource] = []
        readiness: List[_Readiness] = []
        for composer in composers:
            try:
                desired_resource = composer.compose_desired_resource()
            except CompositionError as e:
                log.warning(
                    "invocation_failed",
                    reason="CompositionError",
                    condition_type=composer.condition_type,
                    err=e.message,
                )
                composition_error_response(rsp, e)
                return rsp

            if desired_resource is None:
                continue

            ready = composer.is_ready()
            desired_resource.ready = ready
            readiness.append((composer.condition_type, ready))
            composed.append(desired_resource)
            log.info("added_desired_resource", name=desired_resource.name, ready=ready)

        for desired_resource in composed:
            desired[desired_resource.name] = desired_resource.to_resource()
        response.set_desired_composed_resources(rsp, desired)

        for condition_type, ready in readiness:
            if ready:
                response.condition_true(rsp, condition_type, "Available").target_composite()
            else:
                response.condition_false(rsp, condition_type, "Unavailable").with_message(
                    f"{condition_type} is not yet available"
                ).target_composite()

        return rsp
