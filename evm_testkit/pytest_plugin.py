"""
pytest plugin exposing a chain context fixture

Loaded automatically through the ``pytest11`` entry point once the package
is installed. Point it at a TOML file with ``--evm-config``.
"""

import pytest
import pytest_asyncio

from evm_testkit.config import Config
from evm_testkit.core.context import ChainContext
from evm_testkit.core.subscriptions import FilterSubscription
from evm_testkit.logger import remove_handlers, setup_logger


def pytest_addoption(parser):
    group = parser.getgroup("evm-testkit")
    group.addoption(
        "--evm-config",
        action="store",
        default=None,
        help="Path to the evm-testkit TOML configuration file",
    )


@pytest.fixture(scope="session")
def evm_config(request) -> Config:
    """Configuration loaded once per test session"""
    config = Config(request.config.getoption("--evm-config"))
    setup_logger(config.logging)
    yield config
    remove_handlers()


@pytest_asyncio.fixture
async def chain_context(evm_config: Config) -> ChainContext:
    """Chain context connected to the configured test node, closed after the test"""
    async with ChainContext.from_config(evm_config) as ctx:
        yield ctx


@pytest.fixture
def event_timeout(evm_config: Config) -> int:
    """Configured wait_for_event timeout in milliseconds"""
    return evm_config.event_timeout_ms


@pytest.fixture
def watch_event(evm_config: Config):
    """Factory installing a FilterSubscription that polls at the configured interval"""

    async def _watch(event, **kwargs) -> FilterSubscription:
        kwargs.setdefault("poll_interval", evm_config.poll_interval)
        return await FilterSubscription.watch(event, **kwargs)

    return _watch
