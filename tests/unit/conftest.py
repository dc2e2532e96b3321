"""Unit test fixtures — in-memory clients and default settings."""

from __future__ import annotations

import pytest

from tests.fakes import MemoryCommandClient, MemoryIndexClient
from zeebe_ops.core.config import AppSettings


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def commands():
    return MemoryCommandClient()


@pytest.fixture
def index():
    return MemoryIndexClient()
