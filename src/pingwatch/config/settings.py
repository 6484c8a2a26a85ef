"""
Pingwatch - Configuration

Centralized settings for the probe target, output files and time formatting.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Environment Configuration
# =============================================================================

SERVER_ADDRESS = os.getenv("SERVER_ADDRESS", "ptyonic.dev")
# Numeric overrides are read and validated by ProbeSettings.from_env
PROBE_TIMEOUT = 5.0  # seconds
DEFAULT_MAX_PLAYERS = 20  # capacity when the server omits it

# strftime pattern + IANA zone used when printing timestamps
TIME_FORMAT = os.getenv("TIME_FORMAT", "%b%d %H:%M:%S %Z")
TIME_FORMAT_TIMEZONE = os.getenv("TIME_FORMAT_TIMEZONE", "Europe/Berlin")
FALLBACK_TIMEZONE = "UTC"


# =============================================================================
# Files
# =============================================================================

STATUS_PATH = Path(os.getenv("STATUS_PATH", "status.txt"))  # "-" writes to stdout
STATE_PATH = Path(os.getenv("STATE_PATH", "state.json"))


class ProbeSettings(BaseModel):
    """Settings for a single probe run"""

    server_address: str = Field(default=SERVER_ADDRESS, min_length=1)
    timeout: float = Field(default=PROBE_TIMEOUT, gt=0, description="Probe deadline in seconds")
    default_max_players: int = Field(default=DEFAULT_MAX_PLAYERS, ge=0)
    time_format: str = TIME_FORMAT
    timezone: str = TIME_FORMAT_TIMEZONE
    status_path: Path = STATUS_PATH
    state_path: Path = STATE_PATH

    model_config = {"validate_assignment": True}

    @field_validator("status_path", "state_path", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Convert strings to Path objects."""
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Build settings from the current environment, not the import-time snapshot."""
        return cls(
            server_address=os.getenv("SERVER_ADDRESS", SERVER_ADDRESS),
            timeout=os.getenv("PROBE_TIMEOUT", str(PROBE_TIMEOUT)),
            default_max_players=os.getenv("DEFAULT_MAX_PLAYERS", str(DEFAULT_MAX_PLAYERS)),
            time_format=os.getenv("TIME_FORMAT", TIME_FORMAT),
            timezone=os.getenv("TIME_FORMAT_TIMEZONE", TIME_FORMAT_TIMEZONE),
            status_path=os.getenv("STATUS_PATH", str(STATUS_PATH)),
            state_path=os.getenv("STATE_PATH", str(STATE_PATH)),
        )
