"""
Cancelable event subscriptions

A subscription hands out events one at a time through ``next_event()`` and
releases whatever it holds on the node through ``unsubscribe()``.
"""

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, Optional, Union

from web3.types import BlockIdentifier, EventData

from evm_testkit.config import DEFAULT_POLL_INTERVAL
from evm_testkit.exceptions import EvmTestkitError, SubscriptionClosedError
from evm_testkit.logger import logger


class EventSubscription(ABC):
    """Subscription base class"""

    def __init__(self):
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether unsubscribe() has been called"""
        return self._closed

    async def next_event(self) -> Any:
        """
        Wait for the next event

        Returns:
            Any: The event payload

        Raises:
            SubscriptionClosedError: The subscription was unsubscribed
        """
        if self._closed:
            raise SubscriptionClosedError(f"{type(self).__name__} is closed")
        return await self._next_event()

    async def unsubscribe(self) -> None:
        """Release the subscription. Safe to call more than once"""
        if self._closed:
            return
        self._closed = True
        await self._unsubscribe()

    @abstractmethod
    async def _next_event(self) -> Any:
        """Subclasses return the next payload or raise the source's error"""
        pass

    async def _unsubscribe(self) -> None:
        """Subclasses can override this method to release resources"""
        pass

    async def __aenter__(self) -> "EventSubscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unsubscribe()


class CallbackSubscription(EventSubscription):
    """
    Adapter for callback-style event sources

    Pass ``subscription.callback`` wherever a source expects an
    ``(error, result)`` callback. Each invocation is queued and surfaced by
    ``next_event()`` in arrival order.
    """

    def __init__(self):
        super().__init__()
        self._queue: asyncio.Queue = asyncio.Queue()

    def callback(self, error: Optional[Union[BaseException, str]], result: Any = None) -> None:
        if self._closed:
            logger.debug("Dropping event delivered after unsubscribe")
            return
        self._queue.put_nowait((error, result))

    async def _next_event(self) -> Any:
        error, result = await self._queue.get()
        if error is not None:
            if isinstance(error, BaseException):
                raise error
            raise EvmTestkitError(str(error))
        return result


class FilterSubscription(EventSubscription):
    """
    Subscription backed by a node-side log filter

    Polls ``get_new_entries()`` on a filter created from a contract event
    (``contract.events.Transfer``) and uninstalls the filter on unsubscribe.
    """

    def __init__(
        self,
        event: Any,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        from_block: BlockIdentifier = "latest",
        argument_filters: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            event: Async contract event, e.g. ``contract.events.Transfer``
            poll_interval: Seconds between filter polls
            from_block: First block the filter covers
            argument_filters: Indexed argument filters passed to web3
        """
        super().__init__()
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        self.event = event
        self.poll_interval = poll_interval
        self.from_block = from_block
        self.argument_filters = argument_filters
        self._filter = None
        self._pending: Deque[EventData] = deque()

    @classmethod
    async def watch(cls, event: Any, **kwargs) -> "FilterSubscription":
        """Create a subscription and install its filter right away"""
        subscription = cls(event, **kwargs)
        await subscription.start()
        return subscription

    async def start(self) -> None:
        """Install the log filter if not installed yet"""
        if self._filter is not None:
            return

        filter_kwargs: Dict[str, Any] = {"from_block": self.from_block}
        if self.argument_filters:
            filter_kwargs["argument_filters"] = self.argument_filters

        self._filter = await self.event.create_filter(**filter_kwargs)
        logger.debug(f"Installed log filter {self._filter.filter_id}")

    async def _next_event(self) -> EventData:
        await self.start()

        while not self._pending:
            entries = await self._filter.get_new_entries()
            self._pending.extend(entries)
            if not self._pending:
                await asyncio.sleep(self.poll_interval)

        return self._pending.popleft()

    async def _unsubscribe(self) -> None:
        if self._filter is None:
            return

        filter_id = self._filter.filter_id
        self._pending.clear()
        try:
            await self._filter.eth_module.uninstall_filter(filter_id)
            logger.debug(f"Uninstalled log filter {filter_id}")
        except Exception as e:
            logger.warning(f"Error uninstalling log filter {filter_id}: {e}")
