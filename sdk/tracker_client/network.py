# sdk/tracker_client/network.py
"""
Network Status Observer

Holds a single "can we reach the API" flag. Listeners hear about
transitions only, never about repeated reports of the same state, so a
subscriber reacting to "online" runs once per reconnect.

The flag can be pushed by the platform (`set_online`) or checked against
the API (`check`, `watch`).
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

import httpx

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "You are offline. Changes will be saved when you're back online."

Listener = Callable[[bool], Union[None, Awaitable[None]]]


class NetworkMonitor:
    """Edge-triggered connectivity signal."""

    def __init__(
        self,
        check_url: Optional[str] = None,
        initial: bool = True,
        check_timeout: float = 3.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            check_url: URL requested by `check()`; any HTTP response counts as online
            initial: Starting state
            check_timeout: Timeout in seconds for a single check
            transport: Custom httpx transport for the check
        """
        self._online = initial
        self._check_url = check_url
        self._check_timeout = check_timeout
        self._transport = transport
        self._listeners: List[Listener] = []
        self._watch_task: Optional[asyncio.Task] = None

    @property
    def is_online(self) -> bool:
        return self._online

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def set_online(self, online: bool) -> bool:
        """
        Record the current connectivity.

        Returns True if this was a transition (listeners were notified). A
        listener that raises is logged and the others are still notified.
        """
        online = bool(online)
        if online == self._online:
            return False

        self._online = online
        logger.info("Network is back online" if online else "Network went offline")

        for listener in list(self._listeners):
            try:
                outcome = listener(online)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                # Later listeners still run
                logger.error(f"Network listener {listener!r} failed: {e}")
        return True

    async def check(self) -> bool:
        """Request the API once and record the result."""
        if not self._check_url:
            return self._online

        try:
            async with httpx.AsyncClient(timeout=self._check_timeout, transport=self._transport) as http:
                await http.head(self._check_url)
            reachable = True
        except httpx.TransportError as e:
            logger.debug(f"Check of {self._check_url} failed: {e}")
            reachable = False

        await self.set_online(reachable)
        return reachable

    async def _watch(self, interval: float) -> None:
        while True:
            try:
                await self.check()
            except Exception as e:
                logger.error(f"Connectivity check failed: {e}")
            await asyncio.sleep(interval)

    def watch(self, interval: float = 5.0) -> asyncio.Task:
        """Start polling `check()` every `interval` seconds."""
        if self._watch_task is None or self._watch_task.done():
            self._watch_task = asyncio.create_task(self._watch(interval))
        return self._watch_task

    async def stop(self) -> None:
        """Stop polling started by `watch()`."""
        task, self._watch_task = self._watch_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def offline_banner(self) -> Optional[str]:
        """Notice to show while offline, None while online."""
        return None if self._online else OFFLINE_MESSAGE
