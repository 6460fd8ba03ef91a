"""
Helpers for smart-contract test suites

Every helper takes the chain context explicitly and is awaited from test
code. Underlying failures propagate unchanged; nothing is retried.
"""

import asyncio
from typing import Any, Awaitable, Optional, Sequence

from web3.contract import AsyncContract
from web3.exceptions import ContractLogicError

from evm_testkit.config import DEFAULT_EVENT_TIMEOUT_MS
from evm_testkit.core.context import ChainContext
from evm_testkit.core.options import TxOptionsLike, default_tx_options, to_tx_params
from evm_testkit.core.rpc import EVM_INCREASE_TIME, EVM_MINE, make_rpc_request
from evm_testkit.core.subscriptions import EventSubscription
from evm_testkit.exceptions import EventTimeoutError
from evm_testkit.logger import logger

# Substrings nodes put in the message of a reverted call
REVERT_INDICATORS = ("VM Exception", "execution reverted")


async def deploy(
    ctx: ChainContext,
    factory: Any,
    args: Sequence[Any],
    options: Optional[TxOptionsLike] = None,
) -> AsyncContract:
    """
    Deploy a new contract instance

    Args:
        ctx: Chain context
        factory: Contract factory from ``web3.eth.contract(abi=..., bytecode=...)``
        args: Constructor arguments, passed in order
        options: Transaction options. A mapping is passed through unmodified;
                 when omitted the default account is the sender

    Returns:
        AsyncContract: Handle bound to the deployed address
    """
    if options is None:
        tx_params = default_tx_options(await ctx.default_account())
    else:
        tx_params = to_tx_params(options)

    try:
        tx_hash = await factory.constructor(*args).transact(tx_params)
        receipt = await ctx.web3.eth.wait_for_transaction_receipt(tx_hash)
    except Exception as e:
        logger.error(f"Contract deployment failed: {e}")
        raise

    address = receipt["contractAddress"]
    logger.info(f"Deployed contract at {address}")
    return ctx.web3.eth.contract(address=address, abi=factory.abi)


async def mine_one_block(ctx: ChainContext) -> None:
    """Ask the node to mine exactly one block"""
    await make_rpc_request(ctx.web3, EVM_MINE, [])


def is_revert_error(error: BaseException) -> bool:
    """Whether an error looks like a virtual-machine revert"""
    if isinstance(error, ContractLogicError):
        return True
    message = str(error)
    return any(indicator in message for indicator in REVERT_INDICATORS)


async def assert_throws(
    operation: Awaitable[Any], message: str, strict: bool = False
) -> Exception:
    """
    Assert that a pending transaction fails

    Any raised error satisfies the assertion. Errors that do not look like a
    VM revert are reported with a warning, or fail the assertion when
    ``strict`` is set.

    Args:
        operation: Awaitable transaction, e.g. ``contract.functions.f().transact()``
        message: Failure message used when the operation succeeds
        strict: Require the error to be a VM revert

    Returns:
        Exception: The error the operation raised

    Raises:
        AssertionError: The operation succeeded, or (strict) failed for
                        another reason
    """
    try:
        await operation
    except Exception as e:
        if not is_revert_error(e):
            if strict:
                raise AssertionError(
                    f"{message}: expected a VM revert, got {type(e).__name__}: {e}"
                ) from e
            logger.warning(
                f"Accepted error without revert indicator as expected throw: "
                f"{type(e).__name__}: {e}"
            )
        return e

    raise AssertionError(message)


async def get_current_blocktime(ctx: ChainContext) -> int:
    """Timestamp of the latest block, in seconds"""
    latest_block = await ctx.web3.eth.get_block("latest")
    return latest_block["timestamp"]


async def increase_time(ctx: ChainContext, seconds: int) -> None:
    """
    Move the node's clock forward and mine a block so it takes effect

    There is no way back: the node keeps the offset until it is restarted.

    Args:
        ctx: Chain context
        seconds: Number of seconds to add
    """
    if seconds < 0:
        raise ValueError("seconds must not be negative")

    await make_rpc_request(ctx.web3, EVM_INCREASE_TIME, [seconds])
    await mine_one_block(ctx)
    logger.info(f"Advanced node time by {seconds}s")


async def wait_for_event(
    subscription: EventSubscription, timeout: Optional[int] = None
) -> Any:
    """
    Wait for the next event on a subscription

    The subscription is unsubscribed before this returns, whichever way the
    wait ends.

    Args:
        subscription: Subscription to wait on
        timeout: Maximum wait in milliseconds. None or 0 means
                 DEFAULT_EVENT_TIMEOUT_MS

    Returns:
        Any: The event payload

    Raises:
        EventTimeoutError: No event arrived in time
        ValueError: timeout is negative
    """
    if not timeout:
        timeout = DEFAULT_EVENT_TIMEOUT_MS
    elif timeout < 0:
        raise ValueError("timeout must not be negative")

    next_event = asyncio.ensure_future(subscription.next_event())
    try:
        done, _ = await asyncio.wait({next_event}, timeout=timeout / 1000)
        if not done:
            logger.warning(f"No event after {timeout} ms")
            raise EventTimeoutError()
        return next_event.result()
    finally:
        if not next_event.done():
            next_event.cancel()
        await subscription.unsubscribe()
