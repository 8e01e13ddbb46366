#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates driving the workflow directly:

* load settings from `.env`
* select a few items and delete them with the simulated operation
* react to a failure by dismissing the prompt or retrying

Pass `--fail` to see the retry prompt.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Sequence

from selection_workflow.config import WorkflowSettings
from selection_workflow.logging import configure_logging
from selection_workflow.seed import resolve_items
from selection_workflow.workflow import (
    DeleteSelection,
    DismissPrompt,
    SelectItem,
    SelectionWorkflow,
    SimulatedDeleteOperation,
    WorkflowSnapshot,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Select and delete items (programmatic example).")
    parser.add_argument("--fail", action="store_true", help="Make the simulated delete fail")
    parser.add_argument("--retry", action="store_true", help="Retry instead of dismissing on failure")
    parser.add_argument("--delay", type=float, default=0.5, help="Simulated delete latency")
    return parser.parse_args(argv)


def _print(snapshot: WorkflowSnapshot) -> None:
    print(json.dumps(snapshot.to_json(), ensure_ascii=False))


async def _run(args: argparse.Namespace) -> None:
    settings = WorkflowSettings()
    configure_logging(settings.log_level)

    operation = SimulatedDeleteOperation(delay_seconds=args.delay, fail=args.fail)
    workflow = SelectionWorkflow(
        delete_operation=operation, items=resolve_items(settings.items_path)
    )
    workflow.subscribe(_print)

    first, second = workflow.context.items[:2]
    workflow.send(SelectItem(item=first))
    workflow.send(SelectItem(item=second))
    workflow.send(DeleteSelection())
    snapshot = await workflow.settled()

    if snapshot.matches("prompting"):
        if args.retry:
            operation.fail = False
            workflow.send(DeleteSelection())
            await workflow.settled()
        else:
            workflow.send(DismissPrompt())

    workflow.stop()


def main(argv: Sequence[str] | None = None) -> int:
    asyncio.run(_run(_parse_args(argv)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
