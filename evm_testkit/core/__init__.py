from .context import ChainContext
from .options import TxOptions, default_tx_options, to_tx_params
from .rpc import EVM_INCREASE_TIME, EVM_MINE, make_rpc_request
from .subscriptions import CallbackSubscription, EventSubscription, FilterSubscription

__all__ = [
    "ChainContext",
    "TxOptions",
    "default_tx_options",
    "to_tx_params",
    "EVM_MINE",
    "EVM_INCREASE_TIME",
    "make_rpc_request",
    "EventSubscription",
    "CallbackSubscription",
    "FilterSubscription",
]
