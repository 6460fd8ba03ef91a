from typing import List, Optional, Sequence

from aiohttp import ClientTimeout
from web3 import AsyncWeb3
from web3.providers.rpc import AsyncHTTPProvider

from evm_testkit.config import Config
from evm_testkit.logger import logger


class ChainContext:
    """
    Client context handed to every helper

    Bundles the async web3 client with the account list used to pick a
    default sender. Nothing is read from process-wide state. Use it as an
    async context manager, or call ``close()``, to release the provider's
    HTTP session.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        accounts: Optional[Sequence[str]] = None,
        default_account_index: int = 0,
    ):
        """
        Initialize the context

        Args:
            web3: Async web3 client connected to the test node
            accounts: Fixed signer list. If omitted, queried from the node
            default_account_index: Index of the default sender
        """
        if default_account_index < 0:
            raise ValueError("default_account_index must not be negative")

        self.web3 = web3
        self.accounts: Optional[List[str]] = list(accounts) if accounts is not None else None
        self.default_account_index = default_account_index

    @classmethod
    def from_config(cls, config: Config) -> "ChainContext":
        """Build a context talking HTTP to the configured node"""
        provider = AsyncHTTPProvider(
            config.rpc_url,
            request_kwargs={"timeout": ClientTimeout(total=config.rpc_timeout)},
        )
        logger.info(f"Using test node at {config.rpc_url}")
        return cls(
            AsyncWeb3(provider),
            default_account_index=config.default_account_index,
        )

    async def get_accounts(self) -> List[str]:
        """Signer addresses, in node order"""
        if self.accounts is not None:
            return self.accounts
        return list(await self.web3.eth.accounts)

    async def default_account(self) -> str:
        """
        Address used as sender when a call supplies no options

        Raises:
            ValueError: The account list is too short
        """
        accounts = await self.get_accounts()
        if len(accounts) <= self.default_account_index:
            raise ValueError(
                f"No account at index {self.default_account_index}, "
                f"node reported {len(accounts)} account(s)"
            )
        return accounts[self.default_account_index]

    async def close(self) -> None:
        """Disconnect the provider, closing any cached HTTP session"""
        try:
            await self.web3.provider.disconnect()
        except NotImplementedError:
            logger.debug(f"{type(self.web3.provider).__name__} has nothing to disconnect")

    async def __aenter__(self) -> "ChainContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
