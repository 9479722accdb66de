from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI

from xdeployment import __version__
from xdeployment.api.deps import get_registry
from xdeployment.api.routes import function, health
from xdeployment.config import get_settings
from xdeployment.core.errors import ConfigurationError
from xdeployment.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level)
    problems = get_registry().validate()
    if problems:
        logger.error("composer_registry_invalid", problems=problems)
        raise ConfigurationError("composer registry is invalid", details={"problems": problems})
    logger.info("function_started", engine_id=settings.engine_id, composers=get_registry().list())
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="XDeployment Function",
        version=__version__,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )

    app.include_router(function.router, prefix=settings.api_prefix, tags=["function"])
    app.include_router(health.router, tags=["health"])
    return app


app = create_app()
