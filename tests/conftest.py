from __future__ import annotations

import pytest

from cerebro_mcp.dispatcher import Dispatcher
from tests.helpers.fakes import RecordingFetcher


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    """Keep developer environment settings out of test runs."""
    for name in ("CEREBRO_DISABLE_TELEMETRY", "CEREBRO_HTTP_TIMEOUT", "CEREBRO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def dispatcher(fetcher) -> Dispatcher:
    return Dispatcher(fetcher)
