"""
Status line rendering and output.

Format:
    Online✅ with 0/20 players. Last activity seen on Oct19 14:02:11 CEST (ping 31ms)
    Offline❎ last online at Oct19 14:02:11 CEST
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pingwatch.config.models import Report
from pingwatch.config.settings import FALLBACK_TIMEZONE, TIME_FORMAT, TIME_FORMAT_TIMEZONE
from pingwatch.core.errors import ReportWriteError
from pingwatch.utils.file_utils import atomic_write_text

logger = logging.getLogger(__name__)

ONLINE_MARKER = "Online✅"
OFFLINE_MARKER = "Offline❎"
STDOUT_PATH = "-"


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Return the named zone, falling back to UTC for unknown or empty names."""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            # OSError covers names like "Europe" that resolve to a tzdata directory
            logger.warning("Unknown time zone %r (%s), using %s", name, e, FALLBACK_TIMEZONE)
    else:
        logger.warning("No time zone configured, using %s", FALLBACK_TIMEZONE)
    return ZoneInfo(FALLBACK_TIMEZONE)


def format_timestamp(
    instant: datetime,
    pattern: str = TIME_FORMAT,
    timezone: str | None = TIME_FORMAT_TIMEZONE,
) -> str:
    """
    Format an instant in the given zone.

    Args:
        instant: Timezone-aware datetime
        pattern: strftime pattern
        timezone: IANA zone name (e.g. "Europe/Berlin")

    Returns:
        Formatted local date/time

    Examples:
        >>> from datetime import UTC
        >>> format_timestamp(datetime(2024, 7, 1, 12, 0, tzinfo=UTC), "%H:%M %Z", "Europe/Berlin")
        '14:00 CEST'
    """
    return instant.astimezone(resolve_timezone(timezone)).strftime(pattern)


def render(
    report: Report,
    time_format: str = TIME_FORMAT,
    timezone: str | None = TIME_FORMAT_TIMEZONE,
) -> str:
    """Render a report as a single newline-terminated line."""
    parts = [ONLINE_MARKER if report.online else OFFLINE_MARKER]
    if report.body:
        parts.append(report.body)
    if report.annotation_at is not None:
        when = format_timestamp(report.annotation_at, time_format, timezone)
        parts.append(f"{report.annotation_label} {when}" if report.annotation_label else when)
    if report.latency_ms is not None:
        parts.append(f"(ping {report.latency_ms}ms)")

    # Keep it one line whatever the time format contains
    line = " ".join(" ".join(parts).split())
    return line + "\n"


def write_report(line: str, path: Path | str) -> None:
    """Overwrite the status file with the rendered line ("-" for stdout)."""
    if str(path) == STDOUT_PATH:
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except OSError as e:
            raise ReportWriteError(f"Failed to write report to stdout: {e}") from e
        return

    path = Path(path)
    try:
        atomic_write_text(path, line)
    except OSError as e:
        raise ReportWriteError(f"Failed to write report {path}: {e}") from e
    logger.debug("Report written to %s", path)
