from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from selection_workflow.errors import UnknownEventError
from selection_workflow.models import Item, WorkflowContext


class EventType(str, Enum):
    SELECT_ITEM = "SELECT_ITEM"
    SELECT_ALL_ITEMS = "SELECT_ALL_ITEMS"
    DESELECT_ITEM = "DESELECT_ITEM"
    RESET_SELECTION = "RESET_SELECTION"
    DELETE_SELECTION = "DELETE_SELECTION"
    DISMISS_PROMPT = "DISMISS_PROMPT"

    # Raised by the runtime itself, never accepted from callers.
    DELETE_SUCCEEDED = "DELETE_SUCCEEDED"
    DELETE_FAILED = "DELETE_FAILED"
    PROMPT_DONE = "PROMPT_DONE"


INTERNAL_EVENT_TYPES: frozenset[EventType] = frozenset(
    {EventType.DELETE_SUCCEEDED, EventType.DELETE_FAILED, EventType.PROMPT_DONE}
)


@dataclass(frozen=True, slots=True)
class SelectItem:
    item: Item
    type: EventType = EventType.SELECT_ITEM


@dataclass(frozen=True, slots=True)
class SelectAllItems:
    type: EventType = EventType.SELECT_ALL_ITEMS


@dataclass(frozen=True, slots=True)
class DeselectItem:
    item: Item
    type: EventType = EventType.DESELECT_ITEM


@dataclass(frozen=True, slots=True)
class ResetSelection:
    type: EventType = EventType.RESET_SELECTION


@dataclass(frozen=True, slots=True)
class DeleteSelection:
    type: EventType = EventType.DELETE_SELECTION


@dataclass(frozen=True, slots=True)
class DismissPrompt:
    type: EventType = EventType.DISMISS_PROMPT


@dataclass(frozen=True, slots=True)
class DeleteSucceeded:
    """Completion of the delete invocation identified by `generation`."""

    generation: int
    result: object = None
    type: EventType = EventType.DELETE_SUCCEEDED


@dataclass(frozen=True, slots=True)
class DeleteFailed:
    generation: int
    error: BaseException | None = None
    type: EventType = EventType.DELETE_FAILED


@dataclass(frozen=True, slots=True)
class PromptDone:
    """The prompt instance `prompt_id` reached its terminal state."""

    prompt_id: int
    type: EventType = EventType.PROMPT_DONE


WorkflowEvent = (
    SelectItem
    | SelectAllItems
    | DeselectItem
    | ResetSelection
    | DeleteSelection
    | DismissPrompt
    | DeleteSucceeded
    | DeleteFailed
    | PromptDone
)


def parse_event_token(token: str, ctx: WorkflowContext) -> WorkflowEvent:
    """Parse a CLI token such as `select:3` or `delete` into an event.

    Item ids are matched against the string form of the ids in `ctx.items`.
    """

    name, _, arg = token.strip().partition(":")
    name = name.lower()

    if name in {"select", "deselect"}:
        if not arg:
            raise UnknownEventError(f"Event {name!r} requires an item id, e.g. {name}:1")
        item = next((i for i in ctx.items if str(i.id) == arg), None)
        if item is None:
            raise UnknownEventError(f"Unknown item id: {arg!r}")
        return SelectItem(item=item) if name == "select" else DeselectItem(item=item)

    simple: dict[str, WorkflowEvent] = {
        "select-all": SelectAllItems(),
        "reset": ResetSelection(),
        "delete": DeleteSelection(),
        "dismiss": DismissPrompt(),
    }
    if name in simple and not arg:
        return simple[name]
    raise UnknownEventError(f"Unknown event token: {token!r}")
