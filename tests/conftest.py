"""pytest configuration and shared fakes for the Hue platform tests."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from bridge.client import BridgeClient
from bridge.models import Accessory


class FakeBridgeClient(BridgeClient):
    """In-memory bridge: returns canned accessories and records heartbeats."""

    def __init__(self, address, count=0, error=None, delay=0.0):
        self.address = address
        self.count = count
        self.error = error
        self.delay = delay
        self.probe_calls = 0
        self.heartbeats = []

    async def accessories(self):
        self.probe_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return [
            Accessory(name=f"{self.address} #{i}", kind="light",
                      resource=f"/lights/{i}", bridge=self.address)
            for i in range(self.count)
        ]

    async def heartbeat(self, beat):
        self.heartbeats.append(beat)


@pytest.fixture
def client_factory():
    """Factory building FakeBridgeClients from a per-address layout.

    ``layout`` maps address -> int (accessory count) or dict of
    FakeBridgeClient keyword arguments. Built clients are kept in
    ``factory.clients`` by address.
    """
    def make(layout):
        clients = {}

        def factory(address):
            options = layout.get(address, 0)
            if isinstance(options, int):
                options = {"count": options}
            clients[address] = FakeBridgeClient(address, **options)
            return clients[address]

        factory.clients = clients
        return factory

    return make


def make_response(status=200, body=None, json_error=None):
    mock_resp = MagicMock()
    mock_resp.status = status
    if json_error is not None:
        mock_resp.json = AsyncMock(side_effect=json_error)
    else:
        mock_resp.json = AsyncMock(return_value=body)
    mock_resp.__aenter__ = AsyncMock(return_value=mock_resp)
    mock_resp.__aexit__ = AsyncMock(return_value=False)
    return mock_resp


def make_session(responses=None, error=None):
    """Mock aiohttp session; ``responses`` maps URL -> mock response."""
    mock_session = MagicMock()
    if error is not None:
        mock_session.get = MagicMock(side_effect=error)
    else:
        mock_session.get = MagicMock(side_effect=lambda url, **kwargs: responses[url])
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    return mock_session
