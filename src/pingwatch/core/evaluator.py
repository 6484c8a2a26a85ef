"""
Status evaluation.

Combines one probe outcome with the previous state into the next state and a
Report. Pure: no I/O, no clock, no time zone handling.
"""

from __future__ import annotations

import math
from datetime import datetime

from pingwatch.config.models import (
    PersistedState,
    ProbeFailure,
    ProbeOutcome,
    ProbeSuccess,
    Report,
    ServerStatus,
)
from pingwatch.config.settings import DEFAULT_MAX_PLAYERS

LAST_ACTIVITY_LABEL = "Last activity seen on"
LAST_ONLINE_LABEL = "last online at"


def latency_to_ms(round_trip_ms: float) -> int:
    """Whole milliseconds, never negative."""
    if not math.isfinite(round_trip_ms) or round_trip_ms < 0:
        return 0
    return int(round_trip_ms)


def evaluate(
    outcome: ProbeOutcome,
    previous: PersistedState,
    now: datetime,
    default_max_players: int = DEFAULT_MAX_PLAYERS,
) -> tuple[PersistedState, Report]:
    """
    Decide the next state and the report for one probe run.

    Args:
        outcome: Result of the probe
        previous: State loaded at the start of the run
        now: Instant the run started
        default_max_players: Capacity shown when the server does not report one

    Returns:
        Tuple of (new state, report)
    """
    if isinstance(outcome, ProbeSuccess):
        return _evaluate_success(outcome, previous, now, default_max_players)
    if isinstance(outcome, ProbeFailure):
        return _evaluate_failure(previous)
    raise TypeError(f"Unknown probe outcome: {outcome!r}")


def _evaluate_success(
    outcome: ProbeSuccess,
    previous: PersistedState,
    now: datetime,
    default_max_players: int,
) -> tuple[PersistedState, Report]:
    capacity = outcome.max_players if outcome.max_players is not None else default_max_players
    body = f"with {outcome.player_count}/{capacity} players."
    latency = latency_to_ms(outcome.round_trip_ms)

    if outcome.player_count > 0:
        state = PersistedState(last_online_at=now, last_players_seen_at=now)
        report = Report(status=ServerStatus.ONLINE, body=f"{body} yay!", latency_ms=latency)
        return state, report

    # Nobody online: keep the last time players were seen
    state = previous.model_copy(update={"last_online_at": now})
    last_seen = previous.last_players_seen_at
    report = Report(
        status=ServerStatus.ONLINE,
        body=body,
        annotation_label=LAST_ACTIVITY_LABEL if last_seen else None,
        annotation_at=last_seen,
        latency_ms=latency,
    )
    return state, report


def _evaluate_failure(previous: PersistedState) -> tuple[PersistedState, Report]:
    last_online = previous.last_online_at
    report = Report(
        status=ServerStatus.OFFLINE,
        annotation_label=LAST_ONLINE_LABEL if last_online else None,
        annotation_at=last_online,
    )
    return previous, report
