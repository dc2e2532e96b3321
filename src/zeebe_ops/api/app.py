"""FastAPI application with lifespan, error handlers and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zeebe_ops import __version__
from zeebe_ops.api.routes import channel, health
from zeebe_ops.clients import create_command_client, create_index_client
from zeebe_ops.core.config import AppSettings
from zeebe_ops.core.exceptions import (
    CommandRejectedError,
    IndexQueryError,
    InvalidRequestError,
    PartialIncidentResolutionError,
)
from zeebe_ops.core.logging import configure_logging, get_logger
from zeebe_ops.core.protocols import ICommandClient, IIndexClient
from zeebe_ops.services.definitions import DefinitionIndexService
from zeebe_ops.services.health import HealthService
from zeebe_ops.services.incidents import IncidentService
from zeebe_ops.services.instances import InstanceService

logger = get_logger("api")


def _lifespan(settings: AppSettings | None, commands: ICommandClient | None,
              index: IIndexClient | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Build clients and services, close the clients on shutdown."""
        resolved = settings or AppSettings()
        configure_logging(resolved.log_level)

        command_client = commands if commands is not None else create_command_client(resolved)
        index_client = index if index is not None else create_index_client(resolved)

        app.state.settings = resolved
        app.state.instances = InstanceService(commands=command_client, config=resolved.operations)
        app.state.incidents = IncidentService(commands=command_client, config=resolved.operations)
        app.state.definitions = DefinitionIndexService(index=index_client, config=resolved.elasticsearch)
        app.state.health = HealthService(index=index_client)
        logger.info("zeebe-ops started",
                    extra={"structured": {"environment": resolved.environment,
                                          "zeebe_gateway": resolved.zeebe.gateway_address}})
        try:
            yield
        finally:
            command_client.close()
            index_client.close()

    return lifespan


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidRequestError)
    async def invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(CommandRejectedError)
    async def command_rejected(request: Request, exc: CommandRejectedError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=502, content={"error": exc.detail, "command": exc.command})

    @app.exception_handler(PartialIncidentResolutionError)
    async def partial_resolution(request: Request, exc: PartialIncidentResolutionError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=502,
            content={
                "error": exc.detail,
                "incidentKey": exc.incident_key,
                "completedSteps": exc.completed_steps,
                "failedStep": exc.failed_step,
            },
        )

    @app.exception_handler(IndexQueryError)
    async def index_query_failed(request: Request, exc: IndexQueryError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=502, content={"error": str(exc)})


def create_app(settings: AppSettings | None = None, *, commands: ICommandClient | None = None,
               index: IIndexClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``commands`` and ``index`` replace the production clients when given.
    """
    app = FastAPI(
        title="Zeebe Operations Gateway",
        version=__version__,
        lifespan=_lifespan(settings, commands, index),
    )
    _register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(channel.router, prefix="/channel")
    return app


def main() -> None:
    settings = AppSettings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
