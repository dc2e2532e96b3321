"""InstanceService — start, cancel and bulk-cancel workflow instances."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from zeebe_ops.core.config import OperationsConfig
from zeebe_ops.core.logging import get_logger
from zeebe_ops.core.protocols import ICommandClient
from zeebe_ops.models.operations import BulkCancelResult
from zeebe_ops.models.process import CancelOutcome, ProcessInstance

logger = get_logger("services.instances")


class InstanceService:
    """Lifecycle commands on workflow instances."""

    def __init__(self, *, commands: ICommandClient, config: OperationsConfig) -> None:
        self._commands = commands
        self._config = config

    def start_workflow(self, bpmn_process_id: str, variables: dict[str, Any]) -> ProcessInstance:
        """Create an instance of the latest deployed version of ``bpmn_process_id``."""
        logger.info("Starting new workflow", extra={"structured": {"bpmn_process_id": bpmn_process_id}})
        instance = self._commands.create_instance(bpmn_process_id, variables)
        logger.info(
            "Workflow started",
            extra={"structured": {
                "bpmn_process_id": instance.bpmn_process_id,
                "process_instance_key": instance.process_instance_key,
                "version": instance.version,
            }},
        )
        return instance

    def cancel_instance(self, process_instance_key: int) -> None:
        logger.info("Cancelling workflow instance",
                    extra={"structured": {"process_instance_key": process_instance_key}})
        self._commands.cancel_instance(process_instance_key)

    def bulk_cancel(self, process_instance_keys: list[int]) -> BulkCancelResult:
        """Cancel every key independently and report which ones went through.

        A failing key is logged and listed under ``failed``; it never stops the
        remaining keys from being attempted and never raises.
        """
        logger.info("Bulk cancellation by process instance key",
                    extra={"structured": {"count": len(process_instance_keys)}})
        if not process_instance_keys:
            return BulkCancelResult()

        workers = min(self._config.bulk_cancel_workers, len(process_instance_keys))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bulk-cancel") as pool:
            outcomes = list(pool.map(self._cancel_one, process_instance_keys))

        result = BulkCancelResult.from_outcomes(outcomes)
        logger.info(
            "Bulk cancellation finished",
            extra={"structured": {
                "cancellation_successful": result.cancellation_successful,
                "cancellation_failed": result.cancellation_failed,
            }},
        )
        return result

    def _cancel_one(self, process_instance_key: int) -> CancelOutcome:
        try:
            self._commands.cancel_instance(process_instance_key)
        except Exception as exc:
            logger.error(
                "Cancellation of process instance %s failed: %s", process_instance_key, exc,
                extra={"structured": {"process_instance_key": process_instance_key}},
            )
            return CancelOutcome(process_instance_key, error=exc)
        return CancelOutcome(process_instance_key)
