from typing import Any


class EvmTestkitError(Exception):
    """Base class for evm-testkit errors"""


class ChainRPCError(EvmTestkitError):
    """The test node answered a raw RPC call with an error response"""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        super().__init__(f"RPC method {method} failed: {error}")


class EventTimeoutError(EvmTestkitError, TimeoutError):
    """No event arrived before the wait timed out"""

    def __init__(self, message: str = "Timeout waiting for event"):
        super().__init__(message)


class SubscriptionClosedError(EvmTestkitError):
    """The subscription was already unsubscribed"""
