import asyncio
import socket
from types import SimpleNamespace

import pytest

from pingwatch.config.models import ProbeFailure, ProbeSuccess
from pingwatch.core import probe as probe_module


class FakeServer:
    def __init__(self, online=3, max_players=20, latency=12.5, ping=8.0, ping_error=None, delay=0.0):
        self.online = online
        self.max_players = max_players
        self.latency = latency
        self.ping = ping
        self.ping_error = ping_error
        self.delay = delay

    async def async_status(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        players = SimpleNamespace(online=self.online, max=self.max_players)
        return SimpleNamespace(players=players, latency=self.latency)

    async def async_ping(self):
        if self.ping_error:
            raise self.ping_error
        return self.ping


def _patch_lookup(monkeypatch, server=None, error=None):
    calls = []

    async def fake_lookup(address, timeout=3):
        calls.append((address, timeout))
        if error:
            raise error
        return server

    monkeypatch.setattr(probe_module.JavaServer, "async_lookup", fake_lookup)
    return calls


def test_success(monkeypatch):
    calls = _patch_lookup(monkeypatch, FakeServer(online=5, max_players=40, ping=21.3))
    outcome = probe_module.probe("mc.example.org", timeout=2.0)
    assert outcome == ProbeSuccess(player_count=5, round_trip_ms=21.3, max_players=40)
    assert calls == [("mc.example.org", 2.0)]


def test_ping_failure_uses_status_latency(monkeypatch):
    _patch_lookup(monkeypatch, FakeServer(online=0, latency=14.0, ping_error=OSError("reset")))
    outcome = probe_module.probe("mc.example.org", timeout=2.0)
    assert isinstance(outcome, ProbeSuccess)
    assert outcome.player_count == 0
    assert outcome.round_trip_ms == 14.0


@pytest.mark.parametrize(
    "error",
    [
        ConnectionRefusedError("refused"),
        socket.gaierror("Name or service not known"),
        OSError("Server did not respond with any information!"),
        ValueError("Received invalid status response packet."),
    ],
)
def test_lookup_or_query_errors_become_failure(monkeypatch, error):
    _patch_lookup(monkeypatch, error=error)
    outcome = probe_module.probe("mc.example.org", timeout=1.0)
    assert isinstance(outcome, ProbeFailure)
    assert outcome.reason


def test_hanging_server_times_out(monkeypatch):
    _patch_lookup(monkeypatch, FakeServer(delay=5.0))
    outcome = probe_module.probe("mc.example.org", timeout=0.05)
    assert isinstance(outcome, ProbeFailure)
    assert "timed out" in outcome.reason


def test_missing_capacity(monkeypatch):
    _patch_lookup(monkeypatch, FakeServer(online=1, max_players=None))
    outcome = probe_module.probe("mc.example.org")
    assert isinstance(outcome, ProbeSuccess)
    assert outcome.max_players is None
