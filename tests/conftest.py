import pytest
from unittest.mock import AsyncMock, Mock
from web3 import AsyncWeb3

from evm_testkit.core.context import ChainContext

ACCOUNTS = [
    "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1",
    "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0",
]

CONTRACT_ADDRESS = "0xe78A0F7E598Cc8b0Bb87894B0F60dD2a88d6a8Ab"

LATEST_BLOCK = {
    "number": 42,
    "timestamp": 1700000000,
}


@pytest.fixture
def mock_web3():
    """Create a mock AsyncWeb3 instance talking to a test node."""
    mock = Mock(spec=AsyncWeb3)
    mock.provider = Mock()
    mock.provider.make_request = AsyncMock(
        return_value={"jsonrpc": "2.0", "id": 1, "result": "0x0"}
    )
    mock.provider.disconnect = AsyncMock()
    mock.eth = Mock()
    mock.eth.get_block = AsyncMock(return_value=LATEST_BLOCK)
    mock.eth.wait_for_transaction_receipt = AsyncMock(
        return_value={"contractAddress": CONTRACT_ADDRESS, "status": 1}
    )
    mock.eth.contract = Mock(return_value=Mock(name="deployed_contract"))
    return mock


@pytest.fixture
def chain(mock_web3):
    """Chain context with a fixed account list."""
    return ChainContext(mock_web3, accounts=ACCOUNTS)


@pytest.fixture
def mock_factory():
    """Create a mock contract factory whose constructor transact succeeds."""
    factory = Mock()
    factory.abi = [{"type": "constructor", "inputs": []}]
    factory.constructor.return_value.transact = AsyncMock(return_value=b"\x12" * 32)
    return factory
