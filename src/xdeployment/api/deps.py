from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from xdeployment.composer.registry import ComposerRegistry
from xdeployment.config import Settings, get_settings
from xdeployment.function.runner import FunctionRunner
from xdeployment.resources import default_registry


@lru_cache
def get_registry() -> ComposerRegistry:
    return default_registry()


def get_runner(
    settings: Settings = Depends(get_settings),  # noqa: B008
    registry: ComposerRegistry = Depends(get_registry),  # noqa: B008
) -> FunctionRunner:
    return FunctionRunner(
        registry=registry,
        engine_id=settings.engine_id,
        ttl=settings.response_ttl_seconds,
    )
