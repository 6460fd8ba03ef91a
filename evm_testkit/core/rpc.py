"""
Raw JSON-RPC calls understood by EVM test nodes

These methods are not part of the standard ``eth_`` namespace, so they are
sent straight through the provider. The provider frames the JSON-RPC 2.0
envelope and request id.
"""

from typing import Any, Sequence

from web3 import AsyncWeb3
from web3.types import RPCEndpoint, RPCResponse

from evm_testkit.exceptions import ChainRPCError
from evm_testkit.logger import logger

EVM_MINE = RPCEndpoint("evm_mine")
EVM_INCREASE_TIME = RPCEndpoint("evm_increaseTime")


async def make_rpc_request(
    web3: AsyncWeb3, method: str, params: Sequence[Any] = ()
) -> RPCResponse:
    """
    Send a raw RPC request to the test node

    Args:
        web3: Client whose provider receives the request
        method: JSON-RPC method name
        params: Positional parameters

    Returns:
        RPCResponse: The node's response

    Raises:
        ChainRPCError: If the node answered with an error payload
    """
    logger.debug(f"RPC request {method} params={list(params)}")
    response = await web3.provider.make_request(RPCEndpoint(method), list(params))

    if "error" in response:
        logger.error(f"Node returned error for {method}: {response['error']}")
        raise ChainRPCError(method, response["error"])

    return response
