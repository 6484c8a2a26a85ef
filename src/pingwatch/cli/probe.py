#!/usr/bin/env python3
"""
Pingwatch - Single Probe Run

Meant to be started periodically (cron, systemd timer):
1. Load state.json
2. Probe the server once
3. Save the updated state
4. Overwrite status.txt with one status line

Exit code is 0 whenever a report was written, online or offline.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime

from pydantic import ValidationError

from pingwatch.config.settings import ProbeSettings
from pingwatch.core import probe as probe_client
from pingwatch.core.errors import PingwatchError
from pingwatch.core.evaluator import evaluate
from pingwatch.core.reporter import render, write_report
from pingwatch.core.state_store import StateStore

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None, defaults: ProbeSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe a Minecraft server and write a status line.")
    parser.add_argument("--address", default=defaults.server_address, help="Server host[:port]")
    parser.add_argument("--state-path", default=str(defaults.state_path), help="State JSON file")
    parser.add_argument(
        "--status-path", default=str(defaults.status_path), help='Status file ("-" for stdout)'
    )
    parser.add_argument(
        "--timeout", type=float, default=defaults.timeout, help="Probe deadline in seconds"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run(settings: ProbeSettings) -> str:
    """Run one probe cycle and return the rendered status line."""
    store = StateStore(settings.state_path)
    previous = store.load()
    now = datetime.now(UTC)

    outcome = probe_client.probe(settings.server_address, settings.timeout)
    state, report = evaluate(outcome, previous, now, settings.default_max_players)

    line = render(report, settings.time_format, settings.timezone)
    store.save(state)
    write_report(line, settings.status_path)
    return line


def main(argv: list[str] | None = None) -> int:
    try:
        defaults = ProbeSettings.from_env()
    except ValidationError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    args = _parse_args(argv, defaults)
    _setup_logging(args.verbose)

    try:
        settings = ProbeSettings(
            **{
                **defaults.model_dump(),
                "server_address": args.address,
                "state_path": args.state_path,
                "status_path": args.status_path,
                "timeout": args.timeout,
            }
        )
    except ValidationError as e:
        logger.error("Invalid options: %s", e)
        return 2

    try:
        line = run(settings)
    except PingwatchError as e:
        logger.error("%s", e)
        return 1

    logger.info("Status: %s", line.strip())
    return 0


if __name__ == "__main__":
    sys.exit(main())
