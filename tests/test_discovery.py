"""Tests for bridge discovery: static hosts and the meethue portal."""

import asyncio
import logging
from unittest.mock import patch

import aiohttp
import pytest

from config_loader import resolve_config
from conftest import make_response, make_session
from discovery import PORTAL_URL, BridgeDescriptor, BridgeDiscovery


def _errors(caplog):
    return [r for r in caplog.records if r.levelno == logging.ERROR]


class TestStaticHosts:
    @pytest.mark.parametrize("hosts", [["10.0.0.5"], ["10.0.0.9", "10.0.0.5", "bridge.local"]])
    async def test_returns_configured_hosts_in_order(self, hosts):
        discovery = BridgeDiscovery(resolve_config({"host": hosts}))
        with patch("discovery.manager.create_portal_session") as session_factory:
            result = await discovery.discover()
        assert result == [BridgeDescriptor(address=h) for h in hosts]
        session_factory.assert_not_called()

    async def test_single_host(self):
        discovery = BridgeDiscovery(resolve_config({"host": "10.0.0.5"}))
        assert await discovery.discover() == [BridgeDescriptor("10.0.0.5")]


class TestPortalDiscovery:
    async def _discover(self, session):
        discovery = BridgeDiscovery(resolve_config({"timeout": 3}))
        with patch("discovery.manager.create_portal_session", return_value=session) as factory:
            result = await discovery.discover()
        factory.assert_called_once_with(3)
        return result

    async def test_maps_entries_in_order(self, caplog):
        body = [
            {"id": "001788fffe100001", "internalipaddress": "192.168.1.20"},
            {"id": "001788fffe100002", "internalipaddress": "192.168.1.21"},
        ]
        session = make_session({PORTAL_URL: make_response(200, body)})
        result = await self._discover(session)
        assert result == [BridgeDescriptor("192.168.1.20"), BridgeDescriptor("192.168.1.21")]
        assert not _errors(caplog)

    async def test_empty_array_is_a_failure(self, caplog):
        session = make_session({PORTAL_URL: make_response(200, [])})
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1
        assert "no bridges registered" in _errors(caplog)[0].getMessage()

    @pytest.mark.parametrize("status", [404, 500, 503])
    async def test_bad_status(self, status, caplog):
        session = make_session({PORTAL_URL: make_response(status, None)})
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1
        assert str(status) in _errors(caplog)[0].getMessage()

    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_transport_error(self, error, caplog):
        session = make_session(error=error)
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1
        assert "communication error" in _errors(caplog)[0].getMessage()

    async def test_undecodable_body(self, caplog):
        session = make_session({PORTAL_URL: make_response(200, json_error=ValueError("bad json"))})
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1

    async def test_entry_without_address_is_a_failure(self, caplog):
        body = [{"internalipaddress": "192.168.1.20"}, {"id": "001788fffe100002"}]
        session = make_session({PORTAL_URL: make_response(200, body)})
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1

    async def test_non_list_body_is_a_failure(self, caplog):
        session = make_session({PORTAL_URL: make_response(200, {"error": "nope"})})
        assert await self._discover(session) == []
        assert len(_errors(caplog)) == 1
