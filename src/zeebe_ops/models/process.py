"""Process instance and per-item cancellation result models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProcessInstance:
    bpmn_process_id: str  # BPMN process ID of the definition the instance was created from
    process_definition_key: int  # key of that process definition (version specific)
    process_instance_key: int  # unique identifier of the created instance
    version: int  # version of the process definition that was used


@dataclass
class CancelOutcome:
    """Result of one cancel attempt inside a bulk cancellation."""

    process_instance_key: int
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
