from unittest.mock import AsyncMock, patch

import pytest
from web3 import AsyncWeb3
from web3.providers.rpc import AsyncHTTPProvider

from evm_testkit.config import Config
from evm_testkit.core.context import ChainContext

from conftest import ACCOUNTS


async def _resolved(value):
    return value


@pytest.mark.asyncio
async def test_default_account_is_first(chain):
    assert await chain.default_account() == ACCOUNTS[0]


@pytest.mark.asyncio
async def test_default_account_index(mock_web3):
    ctx = ChainContext(mock_web3, accounts=ACCOUNTS, default_account_index=1)

    assert await ctx.default_account() == ACCOUNTS[1]


@pytest.mark.asyncio
async def test_accounts_queried_from_node(mock_web3):
    mock_web3.eth.accounts = _resolved(tuple(ACCOUNTS))
    ctx = ChainContext(mock_web3)

    assert await ctx.get_accounts() == ACCOUNTS


@pytest.mark.asyncio
async def test_default_account_without_accounts(mock_web3):
    ctx = ChainContext(mock_web3, accounts=[])

    with pytest.raises(ValueError, match="No account at index 0"):
        await ctx.default_account()


def test_negative_account_index_rejected(mock_web3):
    with pytest.raises(ValueError):
        ChainContext(mock_web3, default_account_index=-1)


def test_from_config(tmp_path):
    config_file = tmp_path / "evm-testkit.toml"
    config_file.write_text(
        '[rpc]\nurl = "http://127.0.0.1:7545"\ntimeout = 3\n'
        "[accounts]\ndefault_index = 2\n"
    )

    ctx = ChainContext.from_config(Config(str(config_file)))

    assert isinstance(ctx.web3, AsyncWeb3)
    assert ctx.web3.provider.endpoint_uri == "http://127.0.0.1:7545"
    assert ctx.default_account_index == 2
    assert ctx.accounts is None


@pytest.mark.asyncio
async def test_chain_context_fixture(chain_context):
    """The pytest plugin builds a context against the default node."""
    assert isinstance(chain_context, ChainContext)
    assert chain_context.web3.provider.endpoint_uri == "http://127.0.0.1:8545"


@pytest.mark.asyncio
async def test_close_disconnects_provider(mock_web3):
    ctx = ChainContext(mock_web3, accounts=ACCOUNTS)

    await ctx.close()

    mock_web3.provider.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_context_manager_closes_on_error(mock_web3):
    with pytest.raises(RuntimeError):
        async with ChainContext(mock_web3, accounts=ACCOUNTS):
            raise RuntimeError("test failed midway")

    mock_web3.provider.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_without_provider_disconnect(mock_web3):
    """Providers with no session to release do not fail the close."""
    mock_web3.provider.disconnect.side_effect = NotImplementedError

    async with ChainContext(mock_web3, accounts=ACCOUNTS) as ctx:
        assert ctx.web3 is mock_web3

    mock_web3.provider.disconnect.assert_awaited_once()


@pytest.mark.asyncio
async def test_from_config_context_disconnects_http_provider(tmp_path):
    ctx = ChainContext.from_config(Config(str(tmp_path / "absent.toml")))

    with patch.object(AsyncHTTPProvider, "disconnect", AsyncMock()) as disconnect:
        async with ctx:
            pass

    disconnect.assert_awaited_once()
