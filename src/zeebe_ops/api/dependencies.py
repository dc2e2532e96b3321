"""FastAPI dependencies resolving the services built in the lifespan."""

from __future__ import annotations

from fastapi import Request

from zeebe_ops.services.definitions import DefinitionIndexService
from zeebe_ops.services.health import HealthService
from zeebe_ops.services.incidents import IncidentService
from zeebe_ops.services.instances import InstanceService


def get_instance_service(request: Request) -> InstanceService:
    return request.app.state.instances


def get_incident_service(request: Request) -> IncidentService:
    return request.app.state.incidents


def get_definition_service(request: Request) -> DefinitionIndexService:
    return request.app.state.definitions


def get_health_service(request: Request) -> HealthService:
    return request.app.state.health
