# sdk/tracker_client/tests/test_sdk_network.py
"""
Unit tests for the network status observer.
"""

import asyncio

import pytest
import httpx

from tracker_client import NetworkMonitor
from tracker_client.network import OFFLINE_MESSAGE


@pytest.mark.asyncio
class TestNetworkMonitor:
    """Tests for NetworkMonitor transitions."""

    async def test_notifies_on_transitions_only(self):
        monitor = NetworkMonitor(initial=True)
        events = []
        monitor.subscribe(events.append)

        await monitor.set_online(True)
        await monitor.set_online(False)
        await monitor.set_online(False)
        await monitor.set_online(True)

        assert events == [False, True]

    async def test_set_online_reports_transition(self):
        monitor = NetworkMonitor(initial=False)

        assert await monitor.set_online(True) is True
        assert await monitor.set_online(True) is False

    async def test_async_listeners_are_awaited(self):
        monitor = NetworkMonitor(initial=False)
        events = []

        async def listener(online):
            events.append(online)

        monitor.subscribe(listener)
        await monitor.set_online(True)

        assert events == [True]

    async def test_failing_listener_does_not_stop_others(self):
        monitor = NetworkMonitor(initial=False)
        events = []

        async def broken(online):
            raise RuntimeError("listener blew up")

        monitor.subscribe(broken)
        monitor.subscribe(events.append)

        assert await monitor.set_online(True) is True
        assert events == [True]
        assert monitor.is_online

    async def test_unsubscribe(self):
        monitor = NetworkMonitor()
        events = []
        unsubscribe = monitor.subscribe(events.append)

        unsubscribe()
        await monitor.set_online(False)

        assert events == []

    async def test_offline_banner(self):
        monitor = NetworkMonitor()
        assert monitor.offline_banner() is None

        await monitor.set_online(False)

        assert monitor.offline_banner() == OFFLINE_MESSAGE
        assert OFFLINE_MESSAGE == "You are offline. Changes will be saved when you're back online."


@pytest.mark.asyncio
class TestNetworkCheck:
    """Tests for NetworkMonitor.check."""

    async def test_any_response_counts_as_online(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(405))
        monitor = NetworkMonitor(check_url="http://tracker.test/openapi.json", initial=False, transport=transport)

        assert await monitor.check() is True
        assert monitor.is_online

    async def test_transport_error_means_offline(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        monitor = NetworkMonitor(check_url="http://tracker.test/openapi.json", transport=httpx.MockTransport(handler))
        events = []
        monitor.subscribe(events.append)

        assert await monitor.check() is False
        assert events == [False]

    async def test_without_check_url_keeps_state(self):
        monitor = NetworkMonitor(initial=False)

        assert await monitor.check() is False

    async def test_watch_and_stop(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200))
        monitor = NetworkMonitor(check_url="http://tracker.test/", initial=False, transport=transport)

        task = monitor.watch(interval=60)
        assert monitor.watch(interval=60) is task

        await monitor.stop()

        assert task.done()

    async def test_watch_survives_failing_listener(self):
        """Polling keeps running after a listener raises."""
        responses = iter([httpx.Response(200), None, httpx.Response(200)])

        def handler(request):
            response = next(responses, httpx.Response(200))
            if response is None:
                raise httpx.ConnectError("unreachable", request=request)
            return response

        monitor = NetworkMonitor(
            check_url="http://tracker.test/", initial=False, transport=httpx.MockTransport(handler),
        )
        events = []

        def listener(online):
            events.append(online)
            raise RuntimeError("listener blew up")

        monitor.subscribe(listener)
        task = monitor.watch(interval=0)

        for _ in range(100):
            if len(events) >= 3:
                break
            await asyncio.sleep(0.01)

        assert events[:3] == [True, False, True]
        assert not task.done()
        await monitor.stop()
