from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

from pydantic import ValidationError

from .classifier import classify
from .dispatch import render_events
from .logs import configure_logging
from .models import Scope
from .settings import get_settings


class InputError(ValueError):
    pass


def parse_events(text: str) -> List[Dict[str, Any]]:
    """Accept a JSON array, a single JSON object or JSON Lines."""
    stripped = text.strip()
    if not stripped:
        return []
    try:
        decoded = json.loads(stripped)
    except json.JSONDecodeError:
        events = []
        for number, line in enumerate(stripped.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise InputError(f"Invalid JSON on line {number}: {e.msg}") from e
    else:
        events = decoded if isinstance(decoded, list) else [decoded]

    for index, event in enumerate(events):
        if not isinstance(event, dict):
            raise InputError(f"Event #{index} is not a JSON object")
    return events


def read_events(source: str, stdin: Optional[TextIO] = None) -> List[Dict[str, Any]]:
    if source == "-":
        return parse_events((stdin or sys.stdin).read())
    path = Path(source)
    if not path.exists():
        raise InputError(f"File not found: {source}")
    with path.open("r", encoding="utf-8") as f:
        return parse_events(f.read())


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(settings.log_level)

    parser = argparse.ArgumentParser(description="Classify and render LoRaWAN stack events")
    sub = parser.add_subparsers(dest="command", required=True)

    classify_cmd = sub.add_parser("classify", help="Print the category of each event")
    classify_cmd.add_argument("file", help="JSON/JSON Lines file with events, or - for stdin")

    render_cmd = sub.add_parser("render", help="Print the display fields of each event")
    render_cmd.add_argument("file", help="JSON/JSON Lines file with events, or - for stdin")
    render_cmd.add_argument(
        "--scope",
        choices=[scope.value for scope in Scope],
        default=settings.default_scope.value,
        help="Entity scope of the event stream",
    )
    render_cmd.add_argument(
        "--widget",
        action="store_true",
        default=settings.widget_mode,
        help="Only identity, time and category",
    )

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("lorawan_events.main:app", host=args.host, port=args.port)
        return

    try:
        events = read_events(args.file)
    except (InputError, OSError, UnicodeDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "classify":
        _dump([classify(event).model_dump(mode="json") for event in events])
    elif args.command == "render":
        rendered = render_events(events, Scope(args.scope), widget=args.widget)
        _dump([event.model_dump(mode="json") for event in rendered])


if __name__ == "__main__":
    main()
