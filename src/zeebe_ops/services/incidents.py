"""IncidentService — operator recovery of stuck workflow instances.

Job incident:       set-variables -> update-retries -> resolve-incident
Workflow incident:  set-variables -> resolve-incident

Steps run in order on the calling thread and stop at the first failure.
Steps that already went through are not undone.
"""

from __future__ import annotations

from typing import Any, Callable

from zeebe_ops.core.config import OperationsConfig
from zeebe_ops.core.exceptions import InvalidRequestError, PartialIncidentResolutionError
from zeebe_ops.core.logging import get_logger
from zeebe_ops.core.protocols import ICommandClient
from zeebe_ops.models.operations import IncidentRef

logger = get_logger("services.incidents")

Step = tuple[str, Callable[[], None]]


class IncidentService:
    """Message-based and incident-based recovery commands."""

    def __init__(self, *, commands: ICommandClient, config: OperationsConfig) -> None:
        self._commands = commands
        self._config = config

    def resolve_transaction(self, transaction_id: str, variables: dict[str, Any]) -> None:
        """Deliver the recovery message to the instance correlated by ``transaction_id``."""
        logger.info("Operator transaction resolve",
                    extra={"structured": {"transaction_id": transaction_id}})
        self._commands.publish_message(
            self._config.recovery_message_name,
            transaction_id,
            self._config.message_ttl_ms,
            variables,
        )

    def resolve_job_incident(self, incident: IncidentRef, variables: dict[str, Any]) -> None:
        if incident.job_key is None or incident.new_retries is None:
            raise InvalidRequestError("Job incident resolution requires incident.jobKey and incident.newRetries")
        job_key, retries = incident.job_key, incident.new_retries

        logger.info("Operator job resolve",
                    extra={"structured": {"incident_key": incident.key, "job_key": job_key}})
        self._run(incident.key, [
            ("set-variables", lambda: self._commands.set_variables(incident.element_instance_key, variables)),
            ("update-retries", lambda: self._commands.update_retries(job_key, retries)),
            ("resolve-incident", lambda: self._commands.resolve_incident(incident.key)),
        ])

    def resolve_workflow_incident(self, incident: IncidentRef, variables: dict[str, Any]) -> None:
        logger.info("Operator workflow resolve", extra={"structured": {"incident_key": incident.key}})
        self._run(incident.key, [
            ("set-variables", lambda: self._commands.set_variables(incident.element_instance_key, variables)),
            ("resolve-incident", lambda: self._commands.resolve_incident(incident.key)),
        ])

    def _run(self, incident_key: int, steps: list[Step]) -> None:
        completed: list[str] = []
        for name, step in steps:
            try:
                step()
            except Exception as exc:
                if not completed:
                    raise
                logger.error(
                    "Incident %s left partially resolved at %s", incident_key, name,
                    extra={"structured": {"incident_key": incident_key, "completed_steps": completed}},
                )
                raise PartialIncidentResolutionError(incident_key, completed, name, str(exc)) from exc
            completed.append(name)
