"""Unit tests for the transition table and its dispatcher."""

from __future__ import annotations

import pytest

from selection_workflow.models import Item, WorkflowContext
from selection_workflow.workflow.events import (
    DeleteFailed,
    DeleteSelection,
    DeleteSucceeded,
    DeselectItem,
    DismissPrompt,
    EventType,
    PromptDone,
    ResetSelection,
    SelectAllItems,
    SelectItem,
)
from selection_workflow.workflow.state_machine import (
    TRANSITIONS,
    WorkflowSnapshot,
    WorkflowState,
    apply_actions,
    resolve_transition,
)


def test_every_state_has_transitions() -> None:
    assert set(TRANSITIONS) == set(WorkflowState)


def test_deleting_accepts_only_completion_events() -> None:
    assert set(TRANSITIONS[WorkflowState.DELETING]) == {
        EventType.DELETE_SUCCEEDED,
        EventType.DELETE_FAILED,
    }


@pytest.mark.parametrize(
    ("state", "event"),
    [
        (WorkflowState.BROWSING, ResetSelection()),
        (WorkflowState.BROWSING, DeleteSelection()),
        (WorkflowState.BROWSING, DismissPrompt()),
        (WorkflowState.DELETING, SelectAllItems()),
        (WorkflowState.DELETING, DeleteSelection()),
        (WorkflowState.PROMPTING, SelectAllItems()),
        (WorkflowState.SELECTING, DismissPrompt()),
    ],
)
def test_events_without_transition_resolve_to_none(
    items: list[Item], state: WorkflowState, event: object
) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0]])
    assert resolve_transition(state=state, ctx=ctx, event=event) is None  # type: ignore[arg-type]


def test_deselect_last_item_targets_browsing(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[1]])
    transition = resolve_transition(
        state=WorkflowState.SELECTING, ctx=ctx, event=DeselectItem(item=items[1])
    )
    assert transition is not None
    assert transition.target is WorkflowState.BROWSING


def test_deselect_with_more_selected_stays(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0], items[1]])
    event = DeselectItem(item=items[1])

    transition = resolve_transition(state=WorkflowState.SELECTING, ctx=ctx, event=event)

    assert transition is not None
    assert transition.target is None
    assert apply_actions(transition, ctx, event).selected_items == (items[0],)


def test_deselect_with_empty_selection_is_noop(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items)
    assert (
        resolve_transition(
            state=WorkflowState.SELECTING, ctx=ctx, event=DeselectItem(item=items[0])
        )
        is None
    )


def test_deselect_unselected_item_is_noop(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0]])
    assert (
        resolve_transition(
            state=WorkflowState.SELECTING, ctx=ctx, event=DeselectItem(item=items[2])
        )
        is None
    )


def test_select_unknown_item_is_noop(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items[:2])
    assert (
        resolve_transition(state=WorkflowState.BROWSING, ctx=ctx, event=SelectItem(item=items[2]))
        is None
    )


def test_delete_success_applies_delete_selection(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0]])
    event = DeleteSucceeded(generation=1)

    transition = resolve_transition(state=WorkflowState.DELETING, ctx=ctx, event=event)

    assert transition is not None
    assert transition.target is WorkflowState.BROWSING
    assert transition.action_names == ["remove_deleted_items"]
    assert apply_actions(transition, ctx, event).items == (items[1], items[2])


def test_delete_failure_targets_prompting(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0]])
    transition = resolve_transition(
        state=WorkflowState.DELETING, ctx=ctx, event=DeleteFailed(generation=1)
    )
    assert transition is not None
    assert transition.target is WorkflowState.PROMPTING
    assert transition.actions == ()


def test_prompting_routes(items: list[Item]) -> None:
    ctx = WorkflowContext.create(items, selected_items=[items[0]])

    dismiss = resolve_transition(state=WorkflowState.PROMPTING, ctx=ctx, event=DismissPrompt())
    retry = resolve_transition(state=WorkflowState.PROMPTING, ctx=ctx, event=DeleteSelection())
    done = resolve_transition(state=WorkflowState.PROMPTING, ctx=ctx, event=PromptDone(prompt_id=1))

    assert dismiss is not None and dismiss.forward_to_prompt and dismiss.target is None
    assert retry is not None and retry.target is WorkflowState.DELETING
    assert done is not None and done.target is WorkflowState.SELECTING


def test_snapshot_helpers(items: list[Item]) -> None:
    snap = WorkflowSnapshot(
        state=WorkflowState.SELECTING,
        context=WorkflowContext.create(items, selected_items=[items[1]]),
        event_type=EventType.SELECT_ITEM,
    )

    assert snap.matches("selecting")
    assert snap.matches(WorkflowState.SELECTING)
    assert not snap.matches("browsing")
    assert snap.is_selected(items[1])
    assert not snap.is_selected(items[0])
    assert snap.can(EventType.DELETE_SELECTION)
    assert not snap.can(EventType.DISMISS_PROMPT)

    payload = snap.to_json()
    assert payload["state"] == "selecting"
    assert payload["event"] == "SELECT_ITEM"
    assert [i["id"] for i in payload["selected_items"]] == [1]  # type: ignore[index]
    assert "prompt" not in payload
