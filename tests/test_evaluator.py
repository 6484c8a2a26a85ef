from datetime import UTC, datetime, timedelta

import pytest

from pingwatch.config.models import (
    PersistedState,
    ProbeFailure,
    ProbeSuccess,
    ServerStatus,
)
from pingwatch.core.evaluator import (
    LAST_ACTIVITY_LABEL,
    LAST_ONLINE_LABEL,
    evaluate,
    latency_to_ms,
)

T0 = datetime(2024, 10, 19, 12, 0, 0, tzinfo=UTC)
T1 = T0 + timedelta(minutes=5)

PREVIOUS_STATES = [
    PersistedState(),
    PersistedState(last_online_at=T0),
    PersistedState(last_online_at=T0, last_players_seen_at=T0),
    PersistedState(last_online_at=T0, last_players_seen_at=T0 - timedelta(days=2)),
]


@pytest.mark.parametrize("previous", PREVIOUS_STATES)
def test_empty_server_keeps_last_players_seen(previous):
    state, _ = evaluate(ProbeSuccess(player_count=0, round_trip_ms=10), previous, T1)
    assert state.last_players_seen_at == previous.last_players_seen_at
    assert state.last_online_at == T1


@pytest.mark.parametrize("previous", PREVIOUS_STATES)
def test_players_present_refreshes_both_timestamps(previous):
    state, report = evaluate(ProbeSuccess(player_count=3, round_trip_ms=10), previous, T1)
    assert state.last_online_at == T1
    assert state.last_players_seen_at == T1
    assert report.annotation_at is None


@pytest.mark.parametrize("previous", PREVIOUS_STATES)
def test_failure_leaves_state_untouched(previous):
    state, report = evaluate(ProbeFailure("connection refused"), previous, T1)
    assert state == previous
    assert report.status == ServerStatus.OFFLINE
    assert report.latency_ms is None


def test_first_run_empty_server_has_no_annotation():
    state, report = evaluate(ProbeSuccess(player_count=0, round_trip_ms=12.7), PersistedState(), T1)
    assert report.online
    assert report.body == "with 0/20 players."
    assert report.annotation_label is None
    assert report.annotation_at is None
    assert report.latency_ms == 12
    assert state == PersistedState(last_online_at=T1)


def test_empty_server_annotates_last_activity():
    previous = PersistedState(last_online_at=T0, last_players_seen_at=T0)
    state, report = evaluate(ProbeSuccess(player_count=0, round_trip_ms=5), previous, T1)
    assert report.annotation_label == LAST_ACTIVITY_LABEL
    assert report.annotation_at == T0
    assert state == PersistedState(last_online_at=T1, last_players_seen_at=T0)


def test_offline_annotates_last_online():
    previous = PersistedState(last_online_at=T0)
    _, report = evaluate(ProbeFailure(), previous, T1)
    assert report.annotation_label == LAST_ONLINE_LABEL
    assert report.annotation_at == T0


def test_offline_never_seen_has_no_annotation():
    _, report = evaluate(ProbeFailure(), PersistedState(), T1)
    assert report.annotation_label is None
    assert report.annotation_at is None
    assert report.body == ""


def test_players_present_report_contains_count_and_latency():
    _, report = evaluate(ProbeSuccess(player_count=5, round_trip_ms=42.9), PersistedState(), T1)
    assert report.body == "with 5/20 players. yay!"
    assert report.latency_ms == 42


def test_capacity_comes_from_probe_when_available():
    _, report = evaluate(
        ProbeSuccess(player_count=2, round_trip_ms=1, max_players=64), PersistedState(), T1
    )
    assert report.body.startswith("with 2/64 players.")


def test_default_capacity_override():
    _, report = evaluate(
        ProbeSuccess(player_count=0, round_trip_ms=1), PersistedState(), T1, default_max_players=8
    )
    assert report.body == "with 0/8 players."


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.0, 0), (0.9, 0), (31.6, 31), (-4.0, 0), (float("nan"), 0), (float("inf"), 0)],
)
def test_latency_to_ms(value, expected):
    assert latency_to_ms(value) == expected
