"""Read-only projections for a view layer.

A view renders from a `WorkflowSnapshot` and turns user gestures into events
with the toggle helpers; it never touches the context directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from selection_workflow.models import Item

from .events import DeselectItem, ResetSelection, SelectAllItems, SelectItem, WorkflowEvent
from .state_machine import WorkflowSnapshot


@dataclass(frozen=True, slots=True)
class SelectableItem:
    item: Item
    selected: bool


def selectable_items(snapshot: WorkflowSnapshot) -> list[SelectableItem]:
    selected = snapshot.context.selected_ids
    return [SelectableItem(item=item, selected=item.id in selected) for item in snapshot.items]


def selection_count(snapshot: WorkflowSnapshot) -> int:
    return len(snapshot.context.selected_ids)


def all_items_selected(snapshot: WorkflowSnapshot) -> bool:
    return bool(snapshot.items) and snapshot.context.selected_ids == snapshot.context.item_ids


def toggle_item_event(snapshot: WorkflowSnapshot, item: Item) -> WorkflowEvent:
    """Deselect `item` if it is selected, otherwise select it."""

    if snapshot.is_selected(item):
        return DeselectItem(item=item)
    return SelectItem(item=item)


def toggle_all_event(snapshot: WorkflowSnapshot) -> WorkflowEvent:
    if all_items_selected(snapshot):
        return ResetSelection()
    return SelectAllItems()
