"""
Probe state persistence.

The state file only remembers when the server was last online and when players
were last seen. Losing it must never stop a probe from running, so reading
falls back to an empty state; writing failures are raised because they break
every later report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from pingwatch.config.models import PersistedState
from pingwatch.config.settings import STATE_PATH
from pingwatch.core.errors import StateStoreError
from pingwatch.utils.file_utils import atomic_write_text

logger = logging.getLogger(__name__)


class StateStore:
    """Loads and saves PersistedState as JSON"""

    def __init__(self, path: Path | None = None):
        self.path = path or STATE_PATH

    def load(self) -> PersistedState:
        """Return the stored state, or an empty state if none can be read."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No state file at %s, starting fresh", self.path)
            return PersistedState()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read state file %s: %s", self.path, e)
            return PersistedState()

        try:
            return PersistedState.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring corrupt state file %s: %s", self.path, e)
            return PersistedState()

    def save(self, state: PersistedState) -> None:
        """Replace the stored state. Raises StateStoreError on I/O failure."""
        try:
            atomic_write_text(self.path, state.model_dump_json(indent=2) + "\n")
        except OSError as e:
            raise StateStoreError(f"Failed to write state file {self.path}: {e}") from e
        logger.debug("State saved to %s", self.path)
