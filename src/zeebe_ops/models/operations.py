"""Request and response payloads of the operator endpoints."""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zeebe_ops.models.process import CancelOutcome

# Zeebe keys are signed 64-bit longs
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
# UpdateJobRetriesRequest.retries is an int32
Retries = Annotated[int, Field(ge=0, le=2**31 - 1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BulkCancelRequest(_CamelModel):
    """List of process instance keys to cancel; numbers or numeric strings."""

    process_ids: list[Int64] = Field(alias="processId")


class BulkCancelResult(_CamelModel):
    """Per-item audit of a bulk cancellation."""

    success: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)
    cancellation_successful: int = 0
    cancellation_failed: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: list[CancelOutcome]) -> BulkCancelResult:
        """Partition outcomes, keeping the order they were submitted in."""
        success = [o.process_instance_key for o in outcomes if o.succeeded]
        failed = [o.process_instance_key for o in outcomes if not o.succeeded]
        return cls(
            success=success,
            failed=failed,
            cancellation_successful=len(success),
            cancellation_failed=len(failed),
        )


class IncidentRef(_CamelModel):
    """The incident being resolved and where it is stuck.

    ``job_key`` and ``new_retries`` only apply to job incidents.
    """

    key: Int64
    element_instance_key: Int64
    job_key: Optional[Int64] = None
    new_retries: Optional[Retries] = None


class IncidentResolveRequest(_CamelModel):
    incident: IncidentRef
    variables: dict[str, Any]
