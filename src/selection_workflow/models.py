"""Domain types for the selection workflow.

Both types are immutable. Context transformations return new instances rather
than mutating in place, so snapshots handed to observers never change.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from selection_workflow.errors import DuplicateItemError

ItemId = int | str


@dataclass(frozen=True, slots=True)
class Item:
    """A deletable unit shown in the list."""

    id: ItemId
    title: str
    owner: str
    updated_at: datetime

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "owner": self.owner,
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class WorkflowContext:
    """Extended state of the workflow: the items and the current selection.

    `selected_items` keeps insertion order for display but is treated as a set
    keyed by `Item.id`.
    """

    items: tuple[Item, ...] = ()
    selected_items: tuple[Item, ...] = field(default=())

    @staticmethod
    def create(
        items: Iterable[Item], selected_items: Iterable[Item] = ()
    ) -> WorkflowContext:
        """Build a context, rejecting duplicate item ids."""

        ordered = tuple(items)
        seen: set[ItemId] = set()
        for item in ordered:
            if item.id in seen:
                raise DuplicateItemError(item.id)
            seen.add(item.id)
        return WorkflowContext(items=ordered, selected_items=tuple(selected_items))

    @property
    def item_ids(self) -> frozenset[ItemId]:
        return frozenset(item.id for item in self.items)

    @property
    def selected_ids(self) -> frozenset[ItemId]:
        return frozenset(item.id for item in self.selected_items)

    def find(self, item_id: ItemId) -> Item | None:
        return next((item for item in self.items if item.id == item_id), None)

    def is_selected(self, item: Item) -> bool:
        return item.id in self.selected_ids

    def to_json(self) -> dict[str, object]:
        return {
            "items": [item.to_json() for item in self.items],
            "selected_items": [item.to_json() for item in self.selected_items],
        }
