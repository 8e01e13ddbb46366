"""Unit tests for the simulated delete operation."""

from __future__ import annotations

import pytest

from selection_workflow.models import Item
from selection_workflow.workflow.operations import (
    DeleteOperationError,
    SimulatedDeleteOperation,
    failure_message,
)


@pytest.mark.asyncio
async def test_simulated_delete_succeeds(items: list[Item]) -> None:
    result = await SimulatedDeleteOperation(delay_seconds=0).execute(tuple(items))
    assert result == "3 items deleted successfully"


@pytest.mark.asyncio
async def test_simulated_delete_fails(items: list[Item]) -> None:
    operation = SimulatedDeleteOperation(delay_seconds=0, fail=True)

    with pytest.raises(DeleteOperationError) as excinfo:
        await operation.execute((items[0],))

    assert str(excinfo.value) == failure_message((items[0],))
