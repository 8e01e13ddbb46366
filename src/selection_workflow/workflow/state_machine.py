from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from selection_workflow.models import Item, WorkflowContext

from .actions import (
    add_all_items_to_selection,
    add_item_to_selection,
    delete_selection,
    remove_item_from_selection,
    reset_selection,
)
from .events import DeselectItem, EventType, SelectItem, WorkflowEvent
from .prompt import PromptSnapshot


class WorkflowState(str, Enum):
    BROWSING = "browsing"
    SELECTING = "selecting"
    DELETING = "deleting"
    PROMPTING = "prompting"


INITIAL_STATE = WorkflowState.BROWSING


class Invocation(str, Enum):
    """Effects tied to the lifetime of a state."""

    DELETE_OPERATION = "delete_operation"
    PROMPT = "prompt"


STATE_INVOCATIONS: dict[WorkflowState, Invocation] = {
    WorkflowState.DELETING: Invocation.DELETE_OPERATION,
    WorkflowState.PROMPTING: Invocation.PROMPT,
}


Guard = Callable[[WorkflowContext, WorkflowEvent], bool]
ContextAction = Callable[[WorkflowContext, WorkflowEvent], WorkflowContext]


def _event_item(event: WorkflowEvent) -> Item | None:
    if isinstance(event, (SelectItem, DeselectItem)):
        return event.item
    return None


# Guards


def item_is_known(ctx: WorkflowContext, event: WorkflowEvent) -> bool:
    item = _event_item(event)
    return item is not None and item.id in ctx.item_ids


def is_last_selected(ctx: WorkflowContext, event: WorkflowEvent) -> bool:
    """The event's item is selected and no other id is."""

    item = _event_item(event)
    return item is not None and ctx.selected_ids == {item.id}


def has_more_selected(ctx: WorkflowContext, event: WorkflowEvent) -> bool:
    item = _event_item(event)
    selected = ctx.selected_ids
    return item is not None and item.id in selected and len(selected) > 1


# Actions bound to events


def select_item(ctx: WorkflowContext, event: WorkflowEvent) -> WorkflowContext:
    item = _event_item(event)
    return ctx if item is None else add_item_to_selection(ctx, item)


def select_all_items(ctx: WorkflowContext, _event: WorkflowEvent) -> WorkflowContext:
    return add_all_items_to_selection(ctx)


def deselect_item(ctx: WorkflowContext, event: WorkflowEvent) -> WorkflowContext:
    item = _event_item(event)
    return ctx if item is None else remove_item_from_selection(ctx, item)


def clear_selection(ctx: WorkflowContext, _event: WorkflowEvent) -> WorkflowContext:
    return reset_selection(ctx)


def remove_deleted_items(ctx: WorkflowContext, _event: WorkflowEvent) -> WorkflowContext:
    return delete_selection(ctx)


@dataclass(frozen=True, slots=True)
class Transition:
    """One candidate transition for a (state, event) pair.

    `target=None` is a targetless transition: actions run but the state is
    neither exited nor re-entered, so invocations keep running.
    """

    target: WorkflowState | None = None
    actions: tuple[ContextAction, ...] = ()
    guard: Guard | None = None
    forward_to_prompt: bool = False

    def applies(self, ctx: WorkflowContext, event: WorkflowEvent) -> bool:
        return self.guard is None or self.guard(ctx, event)

    @property
    def action_names(self) -> list[str]:
        return [action.__name__ for action in self.actions]


# Candidates are evaluated in order; the first whose guard passes is taken.
TRANSITIONS: dict[WorkflowState, dict[EventType, tuple[Transition, ...]]] = {
    WorkflowState.BROWSING: {
        EventType.SELECT_ITEM: (
            Transition(
                target=WorkflowState.SELECTING, actions=(select_item,), guard=item_is_known
            ),
        ),
        EventType.SELECT_ALL_ITEMS: (
            Transition(target=WorkflowState.SELECTING, actions=(select_all_items,)),
        ),
    },
    WorkflowState.SELECTING: {
        EventType.SELECT_ITEM: (Transition(actions=(select_item,), guard=item_is_known),),
        EventType.SELECT_ALL_ITEMS: (Transition(actions=(select_all_items,)),),
        EventType.DESELECT_ITEM: (
            Transition(
                target=WorkflowState.BROWSING, actions=(deselect_item,), guard=is_last_selected
            ),
            Transition(actions=(deselect_item,), guard=has_more_selected),
        ),
        EventType.RESET_SELECTION: (
            Transition(target=WorkflowState.BROWSING, actions=(clear_selection,)),
        ),
        EventType.DELETE_SELECTION: (Transition(target=WorkflowState.DELETING),),
    },
    WorkflowState.DELETING: {
        EventType.DELETE_SUCCEEDED: (
            Transition(target=WorkflowState.BROWSING, actions=(remove_deleted_items,)),
        ),
        EventType.DELETE_FAILED: (Transition(target=WorkflowState.PROMPTING),),
    },
    WorkflowState.PROMPTING: {
        EventType.DISMISS_PROMPT: (Transition(forward_to_prompt=True),),
        EventType.DELETE_SELECTION: (Transition(target=WorkflowState.DELETING),),
        EventType.PROMPT_DONE: (Transition(target=WorkflowState.SELECTING),),
    },
}


def resolve_transition(
    *, state: WorkflowState, ctx: WorkflowContext, event: WorkflowEvent
) -> Transition | None:
    """Return the first applicable transition, or None when the event is a no-op."""

    candidates = TRANSITIONS.get(state, {}).get(event.type, ())
    return next((t for t in candidates if t.applies(ctx, event)), None)


def apply_actions(
    transition: Transition, ctx: WorkflowContext, event: WorkflowEvent
) -> WorkflowContext:
    for action in transition.actions:
        ctx = action(ctx, event)
    return ctx


def accepted_events(state: WorkflowState) -> frozenset[EventType]:
    return frozenset(TRANSITIONS.get(state, {}))


@dataclass(frozen=True, slots=True)
class WorkflowSnapshot:
    """Read-only view of the workflow after an event was processed.

    `changed` is False when the event matched no transition.
    """

    state: WorkflowState
    context: WorkflowContext
    prompt: PromptSnapshot | None = None
    changed: bool = True
    event_type: EventType | None = None

    @property
    def items(self) -> tuple[Item, ...]:
        return self.context.items

    @property
    def selected_items(self) -> tuple[Item, ...]:
        return self.context.selected_items

    def matches(self, state: WorkflowState | str) -> bool:
        return self.state == WorkflowState(state)

    def is_selected(self, item: Item) -> bool:
        return self.context.is_selected(item)

    def can(self, event_type: EventType) -> bool:
        """Whether the current state has any transition for `event_type`."""

        return event_type in accepted_events(self.state)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "state": self.state.value,
            "changed": self.changed,
            **self.context.to_json(),
        }
        if self.event_type is not None:
            out["event"] = self.event_type.value
        if self.prompt is not None:
            out["prompt"] = self.prompt.to_json()
        return out
