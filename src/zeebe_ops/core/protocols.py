"""Protocol interfaces for the remote collaborators.

Services depend on these Protocols only, so production clients and the
in-memory test doubles are interchangeable.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from zeebe_ops.models.process import ProcessInstance


# ---------------------------------------------------------------------------
# Zeebe command client
# ---------------------------------------------------------------------------

@runtime_checkable
class ICommandClient(Protocol):
    """Synchronous command sender against the Zeebe gateway."""

    def create_instance(self, bpmn_process_id: str, variables: dict[str, Any]) -> ProcessInstance: ...

    def cancel_instance(self, process_instance_key: int) -> None: ...

    def publish_message(
        self, name: str, correlation_key: str, time_to_live_ms: int, variables: dict[str, Any]
    ) -> None: ...

    def set_variables(self, element_instance_key: int, variables: dict[str, Any]) -> None: ...

    def update_retries(self, job_key: int, retries: int) -> None: ...

    def resolve_incident(self, incident_key: int) -> None: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Index query client
# ---------------------------------------------------------------------------

@runtime_checkable
class IIndexClient(Protocol):
    """Read-only analytical queries against the exporter index."""

    def aggregate(self, index_pattern: str, aggregations: dict[str, Any]) -> dict[str, Any]: ...

    def list_indices(self, pattern: str = "*") -> list[str]: ...

    def close(self) -> None: ...
