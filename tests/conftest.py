"""Top-level pytest configuration for the helpdesk core."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from helpdesk.config.settings import PipelineSettings
from helpdesk.event_store import InMemoryEventStore
from helpdesk.identity import InMemoryIdentityProvider
from helpdesk.logging import LoggerProtocol
from helpdesk.pipeline import CommandPipeline

NOW = 1_700_000_000_000
TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "password123"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (deselect with '-m "
        "not integration')",
    )


def pytest_addoption(parser):
    """Add command line options for pytest."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests that require external services",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests by default."""
    if not config.getoption("--run-integration"):
        skip_integration = pytest.mark.skip(
            reason="need --run-integration option to run"
        )
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = NOW) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_logger() -> MagicMock:
    """Create a mock logger."""
    logger = MagicMock(spec=LoggerProtocol)
    logger.bind.return_value = logger
    return logger


@pytest_asyncio.fixture
async def memory_store(mock_logger: MagicMock) -> InMemoryEventStore:
    async with InMemoryEventStore(logger=mock_logger) as store:
        yield store


@pytest.fixture
def identity(clock: FakeClock, mock_logger: MagicMock) -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider(
        {TEST_EMAIL: TEST_PASSWORD}, clock=clock, logger=mock_logger
    )


@pytest.fixture
def pipeline(
    memory_store: InMemoryEventStore,
    identity: InMemoryIdentityProvider,
    clock: FakeClock,
    mock_logger: MagicMock,
) -> CommandPipeline:
    return CommandPipeline(
        memory_store,
        identity=identity,
        settings=PipelineSettings(),
        logger=mock_logger,
        clock=clock,
    )
