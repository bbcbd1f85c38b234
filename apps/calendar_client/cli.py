from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, List, Optional, Sequence

from packages.core.calendar.client import (
    CalendarEvent,
    EventsApiClient,
    default_api_client,
    parse_time,
)
from packages.core.calendar.controller import (
    DEFAULT_DURATION,
    DEFAULT_TYPE,
    CalendarController,
)
from packages.core.logging_config import configure_logging


def _alert(message: str) -> None:
    print(message, file=sys.stderr)


def _prompt_confirm(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def format_event(event: CalendarEvent) -> str:
    start = event.start.astimezone().strftime("%Y-%m-%d %H:%M")
    end = event.end.astimezone().strftime("%H:%M")
    return f"{event.id}  {start} - {end}  [{event.type}] {event.name}"


def _print_events(events: List[CalendarEvent]) -> None:
    for event in events:
        print(format_event(event))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calendar-events")
    parser.add_argument("--api-url", default=None, help="Events API base URL")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all events")

    summary = commands.add_parser("summary", help="List events in a recent range")
    summary.add_argument("range", choices=["weekly", "monthly"])

    create = commands.add_parser("create", help="Create an event")
    create.add_argument("--name", required=True)
    create.add_argument("--start", required=True, type=parse_time, help="ISO-8601 start")
    create.add_argument("--duration", default=str(DEFAULT_DURATION), help="Minutes")
    create.add_argument("--type", default=DEFAULT_TYPE)
    create.add_argument("--description", default="")

    delete = commands.add_parser("delete", help="Delete an event")
    delete.add_argument("event_id")
    delete.add_argument("--yes", action="store_true", help="Skip confirmation")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    api_factory: Optional[Callable[[Optional[str]], EventsApiClient]] = None,
) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "WARNING"))
    if api_factory is not None:
        api = api_factory(args.api_url)
    elif args.api_url:
        api = EventsApiClient(base_url=args.api_url)
    else:
        api = default_api_client()

    confirm = (lambda _message: True) if getattr(args, "yes", False) else _prompt_confirm
    controller = CalendarController(api, alert=_alert, confirm=confirm)

    if args.command == "list":
        _print_events(controller.refresh())
        return 0
    if args.command == "summary":
        _print_events(api.summary(args.range))
        return 0
    if args.command == "create":
        draft = controller.select_slot(args.start)
        if draft is None:
            return 1
        draft = draft.with_values(
            name=args.name,
            duration=args.duration,
            type=args.type,
            description=args.description,
        )
        created = controller.submit(draft)
        if created is None:
            return 1
        print(format_event(created))
        return 0

    controller.refresh()
    event = controller.select_event(args.event_id)
    if event is None:
        _alert(f"Event not found: {args.event_id}")
        return 1
    return 0 if controller.delete(event) else 1


if __name__ == "__main__":
    sys.exit(main())
