"""Shared test doubles — re-export in-memory clients."""

from __future__ import annotations

from zeebe_ops.clients.memory_client import (
    MemoryCommandClient,
    MemoryIndexClient,
    definition_buckets,
)

__all__ = ["MemoryCommandClient", "MemoryIndexClient", "definition_buckets"]
