"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from selection_workflow.models import Item
from selection_workflow.workflow.interpreter import SelectionWorkflow

from tests.doubles import ControlledDeleteOperation, FakePromptFactory


@pytest.fixture
def items() -> list[Item]:
    """Provide three items I0, I1, I2."""
    return [
        Item(0, "Summer Photos", "Anthony Stevens", datetime(2017, 7, 12, tzinfo=UTC)),
        Item(1, "Surfing", "Scott Masterson", datetime(2017, 7, 16, tzinfo=UTC)),
        Item(2, "Beach Concerts", "Jonathan Lee", datetime(2017, 2, 16, tzinfo=UTC)),
    ]


@pytest.fixture
def delete_operation() -> ControlledDeleteOperation:
    return ControlledDeleteOperation()


@pytest.fixture
def prompt_factory() -> FakePromptFactory:
    return FakePromptFactory()


@pytest.fixture
def make_workflow(
    items: list[Item], delete_operation: ControlledDeleteOperation
) -> Callable[..., SelectionWorkflow]:
    """Build a workflow over the `items` fixture; keyword arguments override defaults."""

    def _make(**kwargs: object) -> SelectionWorkflow:
        kwargs.setdefault("items", items)
        kwargs.setdefault("delete_operation", delete_operation)
        return SelectionWorkflow(**kwargs)  # type: ignore[arg-type]

    return _make
