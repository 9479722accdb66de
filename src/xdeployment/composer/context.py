"""Invocation context shared by every composer during one function call."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from xdeployment.domain.models import XDeployment, XDeploymentDefaults

DEFAULT_ENGINE_ID = "xdeployment"


@dataclass(frozen=True)
class FunctionContext:
    """Read-only state for one invocation: the XR, the function input and what was observed."""

    xr: XDeployment
    defaults: XDeploymentDefaults
    observed: Mapping[str, Mapping[str, Any]]
    log: Any  # structlog BoundLogger
    engine_id: str = DEFAULT_ENGINE_ID

    @classmethod
    def build(
        cls,
        xr: XDeployment,
        defaults: XDeploymentDefaults,
        observed: Dict[str, Dict[str, Any]],
        log: Any,
        engine_id: str = DEFAULT_ENGINE_ID,
    ) -> FunctionContext:
        return cls(
            xr=xr,
            defaults=defaults,
            observed=MappingProxyType(dict(observed)),
            log=log,
            engine_id=engine_id,
        )
