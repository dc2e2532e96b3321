"""Operator endpoints for workflow instances, incidents and definitions.

``/workflow/resolve`` is declared before ``/workflow/{process_definition_id}``
so the literal path is matched first.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Response, status

from zeebe_ops.api.dependencies import (
    get_definition_service,
    get_incident_service,
    get_instance_service,
)
from zeebe_ops.models.operations import (
    INT64_MAX,
    INT64_MIN,
    BulkCancelRequest,
    BulkCancelResult,
    IncidentResolveRequest,
)
from zeebe_ops.services.definitions import DefinitionIndexService
from zeebe_ops.services.incidents import IncidentService
from zeebe_ops.services.instances import InstanceService

router = APIRouter(tags=["channel"])

NO_CONTENT = {"status_code": status.HTTP_204_NO_CONTENT, "response_class": Response}


@router.post("/workflow/resolve", **NO_CONTENT)
def resolve_workflow_incident(
    payload: IncidentResolveRequest,
    service: IncidentService = Depends(get_incident_service),
) -> None:
    """Set variables on the stuck element, then resolve its incident."""
    service.resolve_workflow_incident(payload.incident, payload.variables)


@router.post("/workflow/{process_definition_id}", **NO_CONTENT)
def start_workflow(
    process_definition_id: str,
    variables: dict[str, Any] = Body(...),
    service: InstanceService = Depends(get_instance_service),
) -> None:
    """Start the latest version of a process with the body as variables."""
    service.start_workflow(process_definition_id, variables)


@router.put("/workflow", response_model=BulkCancelResult)
def bulk_cancel(
    payload: BulkCancelRequest,
    service: InstanceService = Depends(get_instance_service),
) -> BulkCancelResult:
    return service.bulk_cancel(payload.process_ids)


@router.post("/workflow/{workflow_instance_key}/cancel", **NO_CONTENT)
def cancel_workflow(
    workflow_instance_key: Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)],
    service: InstanceService = Depends(get_instance_service),
) -> None:
    service.cancel_instance(workflow_instance_key)


@router.get("/process")
def process_definitions(
    service: DefinitionIndexService = Depends(get_definition_service),
) -> dict[str, list[int]]:
    """Return ``{bpmnProcessId: [processDefinitionKey, ...]}``."""
    return service.definitions()


@router.post("/transaction/{transaction_id}/resolve", **NO_CONTENT)
def resolve_transaction(
    transaction_id: str,
    variables: dict[str, Any] = Body(...),
    service: IncidentService = Depends(get_incident_service),
) -> None:
    """Publish the manual recovery message correlated by the transaction id."""
    service.resolve_transaction(transaction_id, variables)


@router.post("/job/resolve", **NO_CONTENT)
def resolve_job_incident(
    payload: IncidentResolveRequest,
    service: IncidentService = Depends(get_incident_service),
) -> None:
    """Set variables, update the job's retries, then resolve the incident."""
    service.resolve_job_incident(payload.incident, payload.variables)
