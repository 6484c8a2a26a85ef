"""
Pingwatch - Data Models

Persisted state, probe outcomes and the report produced from them.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class ServerStatus(str, Enum):
    """Reachability of the monitored server"""

    ONLINE = "online"
    OFFLINE = "offline"


# =============================================================================
# Persisted State
# =============================================================================

_EARLIEST = datetime.min.replace(tzinfo=UTC) + timedelta(days=1)
_LATEST = datetime.max.replace(tzinfo=UTC) - timedelta(days=1)


class PersistedState(BaseModel):
    """State carried between probe runs (state.json)"""

    last_online_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("last_online_at", "online_timestamp"),
        description="Last time the server answered a status query",
    )
    last_players_seen_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("last_players_seen_at", "players_timestamp"),
        description="Last time the server answered with at least one player online",
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("last_online_at", "last_players_seen_at", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        """Accept epoch seconds and the legacy {"secs_since_epoch": ..} shape."""
        try:
            if isinstance(v, dict) and "secs_since_epoch" in v:
                seconds = int(v["secs_since_epoch"]) + int(v.get("nanos_since_epoch", 0)) / 1e9
                return datetime.fromtimestamp(seconds, tz=UTC)
            if isinstance(v, int | float) and not isinstance(v, bool):
                return datetime.fromtimestamp(v, tz=UTC)
        except (TypeError, OverflowError, OSError) as e:
            # pydantic only wraps ValueError into a ValidationError
            raise ValueError(f"invalid timestamp: {v!r}") from e
        return v

    @field_validator("last_online_at", "last_players_seen_at")
    @classmethod
    def ensure_aware(cls, v: datetime | None) -> datetime | None:
        """Naive timestamps on disk are UTC. Values are normalized to UTC."""
        if v is None:
            return v
        if v.tzinfo is None:
            v = v.replace(tzinfo=UTC)
        try:
            v = v.astimezone(UTC)
        except OverflowError as e:
            raise ValueError(f"timestamp out of range: {v.isoformat()}") from e
        # Must stay convertible to any zone offset (< 24h) when reported
        if not (_EARLIEST <= v <= _LATEST):
            raise ValueError(f"timestamp out of range: {v.isoformat()}")
        return v


# =============================================================================
# Probe Outcomes
# =============================================================================


@dataclass(frozen=True)
class ProbeSuccess:
    """Server answered the status query"""

    player_count: int
    round_trip_ms: float
    max_players: int | None = None


@dataclass(frozen=True)
class ProbeFailure:
    """Server could not be reached or queried"""

    reason: str = ""


ProbeOutcome = ProbeSuccess | ProbeFailure


# =============================================================================
# Report
# =============================================================================


@dataclass(frozen=True)
class Report:
    """Result of one evaluation, rendered to text by the reporter"""

    status: ServerStatus
    body: str = ""
    annotation_label: str | None = None
    annotation_at: datetime | None = None
    latency_ms: int | None = None

    @property
    def online(self) -> bool:
        return self.status == ServerStatus.ONLINE
