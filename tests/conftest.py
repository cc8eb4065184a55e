"""Shared fixtures."""

from __future__ import annotations

import pytest
import structlog

from fakes import FakeChainClient


@pytest.fixture
def client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def polygon_client() -> FakeChainClient:
    return FakeChainClient(chain_id=137)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
