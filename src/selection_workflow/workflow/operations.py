from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from selection_workflow.models import Item

logger = logging.getLogger(__name__)


class DeleteOperation(Protocol):
    """Deletes a selection of items.

    Returning (with any value) means success. Raising an `Exception` means
    failure. The workflow inspects neither the value nor the error content.
    """

    async def execute(self, selection: tuple[Item, ...]) -> object: ...


class DeleteOperationError(Exception):
    pass


def failure_message(selection: tuple[Item, ...]) -> str:
    return (
        f"Error deleting the {len(selection)} selected item(s). Please try again later."
    )


@dataclass
class SimulatedDeleteOperation:
    """Stand-in for a deletion backend: waits `delay_seconds`, then succeeds or fails."""

    delay_seconds: float = 3.0
    fail: bool = False

    async def execute(self, selection: tuple[Item, ...]) -> object:
        logger.info(
            "Simulated delete started",
            extra={"count": len(selection), "delay_seconds": self.delay_seconds},
        )
        await asyncio.sleep(self.delay_seconds)
        if self.fail:
            raise DeleteOperationError(failure_message(selection))
        return f"{len(selection)} items deleted successfully"
