"""Unit tests for the view projections."""

from __future__ import annotations

from selection_workflow.models import Item, WorkflowContext
from selection_workflow.workflow.events import (
    DeselectItem,
    ResetSelection,
    SelectAllItems,
    SelectItem,
)
from selection_workflow.workflow.projection import (
    all_items_selected,
    selectable_items,
    selection_count,
    toggle_all_event,
    toggle_item_event,
)
from selection_workflow.workflow.state_machine import WorkflowSnapshot, WorkflowState


def _snapshot(items: list[Item], selected: list[Item]) -> WorkflowSnapshot:
    state = WorkflowState.SELECTING if selected else WorkflowState.BROWSING
    return WorkflowSnapshot(state=state, context=WorkflowContext.create(items, selected))


def test_selectable_items_flags_selection(items: list[Item]) -> None:
    rows = selectable_items(_snapshot(items, [items[1]]))

    assert [row.item for row in rows] == items
    assert [row.selected for row in rows] == [False, True, False]


def test_selection_count_uses_distinct_ids(items: list[Item]) -> None:
    assert selection_count(_snapshot(items, [items[0], items[0], items[2]])) == 2


def test_all_items_selected(items: list[Item]) -> None:
    assert all_items_selected(_snapshot(items, items))
    assert not all_items_selected(_snapshot(items, items[:2]))
    assert not all_items_selected(_snapshot([], []))


def test_toggle_item_event(items: list[Item]) -> None:
    snap = _snapshot(items, [items[0]])

    assert toggle_item_event(snap, items[0]) == DeselectItem(item=items[0])
    assert toggle_item_event(snap, items[1]) == SelectItem(item=items[1])


def test_toggle_all_event(items: list[Item]) -> None:
    assert toggle_all_event(_snapshot(items, items)) == ResetSelection()
    assert toggle_all_event(_snapshot(items, [items[0]])) == SelectAllItems()
