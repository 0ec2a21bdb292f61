# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from trackplan import app
from trackplan.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from trackplan.app import OperationResult

log = logging.getLogger(__name__)

_RESOURCES: dict[str, str] = {
    "plan": "tracking plan",
    "event": "event",
    "property": "property",
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage tracking plans and their catalog")
    subparsers = parser.add_subparsers(dest="resource", required=True)

    for resource, label in _RESOURCES.items():
        resource_parser = subparsers.add_parser(resource, help=f"Manage {label}s")
        actions = resource_parser.add_subparsers(dest="action", required=True)

        create = actions.add_parser("create", help=f"Create a {label} from a JSON document")
        create.add_argument("document", type=str, help="Path to a JSON file ('-' for stdin)")

        update = actions.add_parser("update", help=f"Update a {label} from a JSON document")
        update.add_argument("id", type=str, help=f"Id of the {label}")
        update.add_argument("document", type=str, help="Path to a JSON file ('-' for stdin)")

        show = actions.add_parser("show", help=f"Show a single {label}")
        show.add_argument("id", type=str, help=f"Id of the {label}")

        actions.add_parser("list", help=f"List {label}s that are not deleted")

        delete = actions.add_parser("delete", help=f"Soft-delete a {label}")
        delete.add_argument("id", type=str, help=f"Id of the {label}")

    return parser.parse_args(list(argv))


def _read_document(source: str) -> dict[str, Any]:
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read document {source}: {exc}") from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source}: {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError(f"Document {source} must contain a JSON object")
    return document  # pyright: ignore[reportUnknownVariableType]


_COMMANDS: dict[tuple[str, str], Callable[..., OperationResult[Any]]] = {
    ("plan", "create"): app.create_tracking_plan,
    ("plan", "update"): app.update_tracking_plan,
    ("plan", "show"): app.get_tracking_plan,
    ("plan", "list"): app.list_tracking_plans,
    ("plan", "delete"): app.delete_tracking_plan,
    ("event", "create"): app.create_event,
    ("event", "update"): app.update_event,
    ("event", "show"): app.get_event,
    ("event", "list"): app.list_events,
    ("event", "delete"): app.delete_event,
    ("property", "create"): app.create_property,
    ("property", "update"): app.update_property,
    ("property", "show"): app.get_property,
    ("property", "list"): app.list_properties,
    ("property", "delete"): app.delete_property,
}


def _build_call_args(args: argparse.Namespace) -> list[object]:
    call_args: list[object] = []
    if getattr(args, "id", None) is not None:
        call_args.append(args.id)
    if getattr(args, "document", None) is not None:
        call_args.append(_read_document(args.document))
    return call_args


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        command = _COMMANDS[(parsed_args.resource, parsed_args.action)]
        call_args = _build_call_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    result = command(*call_args)
    print(json.dumps(result.to_dict(), indent=2))
    if not result.success:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` before reading configuration."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
