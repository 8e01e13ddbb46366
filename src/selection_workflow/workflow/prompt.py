"""Prompt sub-workflow shown after a failed delete.

The parent workflow only relies on the `PromptHandle` protocol: it forwards
`DISMISS_PROMPT` through `send()` and listens for completion through
`on_done()`. `PromptWorkflow` is the default implementation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .events import EventType, WorkflowEvent

logger = logging.getLogger(__name__)


class PromptState(str, Enum):
    VISIBLE = "visible"
    DISMISSED = "dismissed"


PROMPT_TRANSITIONS: dict[PromptState, dict[EventType, PromptState]] = {
    PromptState.VISIBLE: {EventType.DISMISS_PROMPT: PromptState.DISMISSED},
}

FINAL_PROMPT_STATES: frozenset[PromptState] = frozenset({PromptState.DISMISSED})


@dataclass(frozen=True, slots=True)
class PromptContext:
    """Data the prompt is instantiated with."""

    message: str
    title: str = "Delete failed"


@dataclass(frozen=True, slots=True)
class PromptSnapshot:
    state: PromptState
    context: PromptContext

    @property
    def done(self) -> bool:
        return self.state in FINAL_PROMPT_STATES

    def to_json(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "title": self.context.title,
            "message": self.context.message,
        }


DoneListener = Callable[[], None]


class PromptHandle(Protocol):
    """What the parent workflow needs from a running prompt."""

    def send(self, event: WorkflowEvent) -> None: ...

    def on_done(self, listener: DoneListener) -> None: ...

    def stop(self) -> None: ...

    def snapshot(self) -> PromptSnapshot: ...


PromptFactory = Callable[[PromptContext], PromptHandle]


class PromptWorkflow:
    """A two-state machine: `visible` until dismissed, then `dismissed` (final).

    Done listeners fire exactly once, when the final state is reached. A
    stopped prompt ignores further events and never notifies.
    """

    def __init__(self, context: PromptContext) -> None:
        self._context = context
        self._state = PromptState.VISIBLE
        self._listeners: list[DoneListener] = []
        self._stopped = False

    @property
    def state(self) -> PromptState:
        return self._state

    @property
    def stopped(self) -> bool:
        return self._stopped

    def snapshot(self) -> PromptSnapshot:
        return PromptSnapshot(state=self._state, context=self._context)

    def on_done(self, listener: DoneListener) -> None:
        self._listeners.append(listener)

    def send(self, event: WorkflowEvent) -> None:
        if self._stopped:
            logger.debug("Prompt stopped; event ignored", extra={"event": event.type.value})
            return

        target = PROMPT_TRANSITIONS.get(self._state, {}).get(event.type)
        if target is None:
            logger.debug(
                "Prompt event ignored",
                extra={"event": event.type.value, "state": self._state.value},
            )
            return

        self._state = target
        if target in FINAL_PROMPT_STATES:
            self._notify_done()

    def stop(self) -> None:
        self._stopped = True
        self._listeners.clear()

    def _notify_done(self) -> None:
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener()
