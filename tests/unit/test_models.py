"""Unit tests for the domain types."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from selection_workflow.errors import DuplicateItemError
from selection_workflow.models import Item, WorkflowContext


def test_create_rejects_duplicate_ids(items: list[Item]) -> None:
    with pytest.raises(DuplicateItemError) as excinfo:
        WorkflowContext.create([*items, items[0]])
    assert excinfo.value.item_id == 0


def test_context_is_immutable(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items)
    with pytest.raises(FrozenInstanceError):
        ctx.items = ()  # type: ignore[misc]


def test_context_lookups(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[2]])

    assert ctx.item_ids == {0, 1, 2}
    assert ctx.selected_ids == {2}
    assert ctx.find(1) == items[1]
    assert ctx.find(42) is None
    assert ctx.is_selected(items[2])


def test_item_to_json(items: list[Item]) -> None:
    assert items[0].to_json() == {
        "id": 0,
        "title": "Summer Photos",
        "owner": "Anthony Stevens",
        "updated_at": "2017-07-12T00:00:00+00:00",
    }
