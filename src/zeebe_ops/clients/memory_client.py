"""In-memory clients for unit tests: call-recording fakes with failure injection."""

from __future__ import annotations

import threading
from typing import Any

from zeebe_ops.core.exceptions import CommandRejectedError
from zeebe_ops.models.process import ProcessInstance
from zeebe_ops.services.definitions import DEFINITION_KEY_AGG, PROCESS_NAME_AGG


class MemoryCommandClient:
    """Call-recording ICommandClient for unit tests.

    Every call is appended to ``calls`` as ``(command, args)`` before any injected
    failure is raised, so tests can assert on what was attempted.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False
        self._failures: dict[tuple[str, Any], Exception] = {}
        self._lock = threading.Lock()
        self._next_key = 2251799813685249

    def fail(self, command: str, target: Any, error: Exception | None = None) -> None:
        """Make ``command`` raise when called for ``target`` (its first argument)."""
        self._failures[(command, target)] = error or CommandRejectedError(
            command, f"NOT_FOUND: no entity with key {target}"
        )

    def calls_to(self, command: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == command]

    @property
    def commands(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _record(self, command: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((command, args))
        error = self._failures.get((command, args[0]))
        if error is not None:
            raise error

    def create_instance(self, bpmn_process_id: str, variables: dict[str, Any]) -> ProcessInstance:
        self._record("create-instance", bpmn_process_id, variables)
        with self._lock:
            key = self._next_key
            self._next_key += 1
        return ProcessInstance(
            bpmn_process_id=bpmn_process_id,
            process_definition_key=key - 1,
            process_instance_key=key,
            version=1,
        )

    def cancel_instance(self, process_instance_key: int) -> None:
        self._record("cancel-instance", process_instance_key)

    def publish_message(self, name: str, correlation_key: str, time_to_live_ms: int,
                        variables: dict[str, Any]) -> None:
        self._record("publish-message", name, correlation_key, time_to_live_ms, variables)

    def set_variables(self, element_instance_key: int, variables: dict[str, Any]) -> None:
        self._record("set-variables", element_instance_key, variables)

    def update_retries(self, job_key: int, retries: int) -> None:
        self._record("update-retries", job_key, retries)

    def resolve_incident(self, incident_key: int) -> None:
        self._record("resolve-incident", incident_key)

    def close(self) -> None:
        self.closed = True


class MemoryIndexClient:
    """Canned-response IIndexClient for unit tests."""

    def __init__(self, aggregations: dict[str, Any] | None = None,
                 indices: list[str] | None = None) -> None:
        self.aggregations = aggregations or {}
        self.indices = indices if indices is not None else ["zeebe-record_process-instance_8.2.0"]
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.error: Exception | None = None
        self.closed = False

    def aggregate(self, index_pattern: str, aggregations: dict[str, Any]) -> dict[str, Any]:
        self.queries.append((index_pattern, aggregations))
        if self.error is not None:
            raise self.error
        return self.aggregations

    def list_indices(self, pattern: str = "*") -> list[str]:
        if self.error is not None:
            raise self.error
        return list(self.indices)

    def close(self) -> None:
        self.closed = True


def definition_buckets(definitions: dict[str, list[int]], name_agg: str = PROCESS_NAME_AGG,
                       key_agg: str = DEFINITION_KEY_AGG) -> dict[str, Any]:
    """Build a terms-in-terms aggregation result shaped like Elasticsearch's."""
    return {
        name_agg: {
            "doc_count_error_upper_bound": 0,
            "sum_other_doc_count": 0,
            "buckets": [
                {
                    "key": name,
                    "doc_count": 10 * len(keys),
                    key_agg: {
                        "doc_count_error_upper_bound": 0,
                        "sum_other_doc_count": 0,
                        "buckets": [{"key": key, "doc_count": 10} for key in keys],
                    },
                }
                for name, keys in definitions.items()
            ],
        }
    }
