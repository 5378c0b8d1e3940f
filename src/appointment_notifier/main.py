# -*- coding: utf-8 -*-
"""
Entry point: deliver appointment events read from a JSON file.

Orchestrates: logging, settings, container, dispatcher lifecycle, shutdown.
The file holds one event object or a list of them; ``-`` reads stdin.

Run with: python -m appointment_notifier.main events.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from appointment_notifier.DI import Container
from appointment_notifier.exceptions import InvalidEventError
from appointment_notifier.logging.config import configure_logging
from appointment_notifier.models import VisaAppointment


def load_events(source: str) -> list[VisaAppointment]:
    """Parse events from a JSON file path (or '-' for stdin)."""
    if source == "-":
        raw: Any = json.load(sys.stdin)
    else:
        raw = json.loads(Path(source).read_text(encoding="utf-8"))
    items = raw if isinstance(raw, list) else [raw]
    events: list[VisaAppointment] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise InvalidEventError(f"event #{index} is not an object")
        events.append(VisaAppointment.from_payload(item))
    return events


async def run(events: Sequence[VisaAppointment], container: Container | None = None) -> int:
    """Deliver events in order; return the number of failed deliveries."""
    logger = structlog.get_logger("main")
    container = container or Container()
    dispatcher = container.dispatcher()
    await dispatcher.initialize()
    try:
        results = await dispatcher.notify_many(events)
    finally:
        await dispatcher.shutdown()
    failed = results.count(False)
    logger.info("main_run_complete", delivered=len(results) - failed, failed=failed)
    return failed


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="appointment-notifier",
        description="Send new appointment notifications to the configured channel.",
    )
    parser.add_argument("events", help="JSON file with one event or a list of events ('-' for stdin)")
    args = parser.parse_args(argv)

    configure_logging()
    events = load_events(args.events)
    failed = asyncio.run(run(events))
    return 1 if failed else 0


__all__ = ["load_events", "run", "main"]

if __name__ == "__main__":
    sys.exit(main())
