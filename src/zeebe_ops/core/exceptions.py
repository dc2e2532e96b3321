"""zeebe-ops exception hierarchy."""

from __future__ import annotations


class ZeebeOpsError(Exception):
    """Base exception for all zeebe-ops errors."""


class InvalidRequestError(ZeebeOpsError):
    """Request is well-formed JSON but missing something the operation needs."""


class CommandRejectedError(ZeebeOpsError):
    """A command sent to the Zeebe gateway failed."""

    def __init__(self, command: str, detail: str) -> None:
        self.command = command
        self.detail = detail
        super().__init__(f"{command} failed: {detail}")


class PartialIncidentResolutionError(ZeebeOpsError):
    """An incident resolution stopped after some steps were already applied.

    Applied steps are not rolled back; the incident needs manual follow-up.
    """

    def __init__(self, incident_key: int, completed_steps: list[str], failed_step: str,
                 detail: str) -> None:
        self.incident_key = incident_key
        self.completed_steps = completed_steps
        self.failed_step = failed_step
        self.detail = detail
        super().__init__(
            f"Incident {incident_key} partially resolved: {failed_step} failed after "
            f"{', '.join(completed_steps)}: {detail}"
        )


class IndexQueryError(ZeebeOpsError):
    """Elasticsearch query or probe failed."""
