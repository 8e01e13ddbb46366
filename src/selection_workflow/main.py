"""CLI entrypoint for the selection workflow.

Replays a sequence of events against the workflow using the simulated delete
operation and prints one JSON snapshot per processed event.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from selection_workflow import __version__
from selection_workflow.config import WorkflowSettings
from selection_workflow.errors import UnknownEventError
from selection_workflow.logging import configure_logging
from selection_workflow.models import Item
from selection_workflow.seed import resolve_items
from selection_workflow.workflow.events import parse_event_token
from selection_workflow.workflow.interpreter import SelectionWorkflow
from selection_workflow.workflow.operations import SimulatedDeleteOperation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="selection-workflow",
        description="Selection and bulk-delete workflow runner",
    )
    parser.add_argument(
        "--version", action="version", version=f"selection-workflow {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser(
        "run",
        help="Replay events and print a JSON snapshot after each one",
    )
    run.add_argument(
        "events",
        nargs="+",
        metavar="EVENT",
        help=(
            "Event tokens: select:<id>, deselect:<id>, select-all, reset, delete, dismiss"
        ),
    )
    run.add_argument(
        "--fail",
        action="store_true",
        default=None,
        help="Make the simulated delete fail (overrides SELECTION_WORKFLOW_DELETE_FAILS)",
    )
    run.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Simulated delete latency in seconds (overrides SELECTION_WORKFLOW_DELETE_DELAY_SECONDS)",
    )

    subparsers.add_parser("items", help="Print the initial items as JSON")

    return parser


async def replay(
    *,
    tokens: list[str],
    items: list[Item],
    operation: SimulatedDeleteOperation,
) -> list[dict[str, object]]:
    """Send each token to a fresh workflow, waiting for deletes to settle in between."""

    workflow = SelectionWorkflow(delete_operation=operation, items=items)
    out: list[dict[str, object]] = []
    try:
        for token in tokens:
            event = parse_event_token(token, workflow.context)
            workflow.send(event)
            snapshot = await workflow.settled()
            out.append(snapshot.to_json())
    finally:
        workflow.stop()
    return out


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = WorkflowSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        items = resolve_items(settings.items_path)
    except (OSError, ValueError) as e:
        # ValidationError and DuplicateItemError are both ValueErrors.
        logger.error("Failed to load items", extra={"path": str(settings.items_path)})
        print(f"Error loading items: {e}", file=sys.stderr)
        return 2

    if args.command == "items":
        print(json.dumps([item.to_json() for item in items], indent=2, ensure_ascii=False))
        return 0

    if args.command == "run":
        operation = SimulatedDeleteOperation(
            delay_seconds=args.delay if args.delay is not None else settings.delete_delay_seconds,
            fail=args.fail if args.fail is not None else settings.delete_fails,
        )
        try:
            snapshots = asyncio.run(replay(tokens=args.events, items=items, operation=operation))
        except UnknownEventError as e:
            print(str(e), file=sys.stderr)
            return 2
        for snapshot in snapshots:
            print(json.dumps(snapshot, ensure_ascii=False))
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
