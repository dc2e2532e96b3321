"""HealthService — converts an index probe into a status payload."""

from __future__ import annotations

from zeebe_ops.core.logging import get_logger
from zeebe_ops.core.protocols import IIndexClient

logger = get_logger("services.health")


class HealthService:
    def __init__(self, *, index: IIndexClient) -> None:
        self._index = index

    def probe(self) -> dict[str, str]:
        """Return ``{"status": "UP"}`` or ``{"status": "down", "reason": ...}``; never raises."""
        try:
            self._index.list_indices("*")
        except Exception as exc:
            logger.warning("Index health probe failed: %s", exc)
            return {"status": "down", "reason": str(exc)}
        return {"status": "UP"}
