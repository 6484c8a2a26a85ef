"""
Minecraft server probe.

One lookup, one status query and one latency ping, all inside a single
deadline. Never raises: every failure becomes a ProbeFailure.
"""

from __future__ import annotations

import asyncio
import logging

from mcstatus import JavaServer

from pingwatch.config.models import ProbeFailure, ProbeOutcome, ProbeSuccess
from pingwatch.config.settings import PROBE_TIMEOUT, SERVER_ADDRESS

logger = logging.getLogger(__name__)


async def _query(address: str, timeout: float) -> ProbeSuccess:
    server = await JavaServer.async_lookup(address, timeout=timeout)
    status = await server.async_status()

    players_online = status.players.online
    players_max = getattr(status.players, "max", None)

    try:
        round_trip = await server.async_ping()
    except Exception as e:
        # Status already answered, so the server is up; fall back to its latency
        logger.warning("Ping to %s failed after status query: %s", address, e)
        round_trip = status.latency

    return ProbeSuccess(
        player_count=max(0, int(players_online)),
        round_trip_ms=float(round_trip),
        max_players=int(players_max) if players_max is not None else None,
    )


async def async_probe(address: str = SERVER_ADDRESS, timeout: float = PROBE_TIMEOUT) -> ProbeOutcome:
    """Probe the server, bounded by `timeout` seconds overall."""
    try:
        outcome = await asyncio.wait_for(_query(address, timeout), timeout=timeout)
    except TimeoutError:
        logger.info("Probe of %s timed out after %ss", address, timeout)
        return ProbeFailure(reason=f"timed out after {timeout}s")
    except Exception as e:
        logger.info("Probe of %s failed: %s", address, e)
        return ProbeFailure(reason=str(e) or type(e).__name__)

    logger.info(
        "Probe of %s: %d player(s) online, %.1fms",
        address,
        outcome.player_count,
        outcome.round_trip_ms,
    )
    return outcome


def probe(address: str = SERVER_ADDRESS, timeout: float = PROBE_TIMEOUT) -> ProbeOutcome:
    """Blocking wrapper around async_probe."""
    return asyncio.run(async_probe(address, timeout))
