from .config import Config
from .core.context import ChainContext
from .core.options import TxOptions
from .core.subscriptions import CallbackSubscription, EventSubscription, FilterSubscription
from .exceptions import (
    ChainRPCError,
    EventTimeoutError,
    EvmTestkitError,
    SubscriptionClosedError,
)
from .helpers import (
    assert_throws,
    deploy,
    get_current_blocktime,
    increase_time,
    mine_one_block,
    wait_for_event,
)
