"""Runtime for the selection workflow.

`SelectionWorkflow` owns the context and current state, dispatches events
through the transition table and manages the two state-bound invocations:

* entering `deleting` starts the delete operation as an asyncio task;
* entering `prompting` starts a prompt sub-workflow.

Both are torn down when their state is exited. Completions come back as
internal events that are dropped when they no longer belong to the current
invocation.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections import deque
from collections.abc import Callable, Iterable

from selection_workflow.errors import WorkflowError
from selection_workflow.models import Item, WorkflowContext

from .events import (
    INTERNAL_EVENT_TYPES,
    DeleteFailed,
    DeleteSucceeded,
    PromptDone,
    WorkflowEvent,
)
from .operations import DeleteOperation, failure_message
from .prompt import PromptContext, PromptFactory, PromptHandle, PromptWorkflow
from .state_machine import (
    INITIAL_STATE,
    STATE_INVOCATIONS,
    Invocation,
    WorkflowSnapshot,
    WorkflowState,
    apply_actions,
    resolve_transition,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[WorkflowSnapshot], None]


async def _invoke_delete(operation: DeleteOperation, selection: tuple[Item, ...]) -> object:
    return await operation.execute(selection)


class SelectionWorkflow:
    """Caller-owned workflow instance.

    Events are processed one at a time. Events raised while another event is
    being processed (listener callbacks, prompt completion) are queued and
    handled before the outer `send()` returns.
    """

    def __init__(
        self,
        *,
        delete_operation: DeleteOperation,
        items: Iterable[Item] = (),
        prompt_factory: PromptFactory = PromptWorkflow,
    ) -> None:
        self._delete_operation = delete_operation
        self._prompt_factory = prompt_factory

        self._state = INITIAL_STATE
        self._context = WorkflowContext.create(items)

        self._queue: deque[WorkflowEvent] = deque()
        self._processing = False
        self._stopped = False
        self._listeners: list[SnapshotListener] = []

        self._generation = 0
        self._delete_task: asyncio.Task[object] | None = None

        self._prompt_id = 0
        self._prompt: PromptHandle | None = None

        self._snapshot = self._build_snapshot(changed=False, event=None)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def context(self) -> WorkflowContext:
        return self._context

    @property
    def snapshot(self) -> WorkflowSnapshot:
        return self._snapshot

    @property
    def stopped(self) -> bool:
        return self._stopped

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register `listener` for every processed snapshot. Returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def send(self, event: WorkflowEvent) -> WorkflowSnapshot:
        """Process a user event and return the resulting snapshot.

        Events with no matching transition are ignored (`changed=False`).

        Raises:
            WorkflowError: If the event would enter `deleting` while no event
                loop is running. Nothing has changed when this is raised.
        """

        if event.type in INTERNAL_EVENT_TYPES:
            logger.warning(
                "Internal event rejected from send()", extra={"event": event.type.value}
            )
            return self._snapshot
        return self._enqueue(event)

    async def settled(self) -> WorkflowSnapshot:
        """Wait until no delete invocation is outstanding and its outcome is applied."""

        while self._delete_task is not None:
            task = self._delete_task
            await asyncio.wait({task})
            if self._delete_task is task:
                # Completion is delivered by a done callback; give it a turn.
                await asyncio.sleep(0)
            if self._delete_task is task and task.done():
                logger.warning(
                    "Delete invocation finished without an outcome",
                    extra={"generation": self._generation},
                )
                self._delete_task = None
        return self._snapshot

    def stop(self) -> None:
        """Tear down running invocations. Later events and completions are ignored."""

        if self._stopped:
            return
        self._stopped = True
        self._queue.clear()
        self._exit_state(self._state)
        self._listeners.clear()
        logger.info("Workflow stopped", extra={"state": self._state.value})

    # ==========================================================================
    # Event processing
    # ==========================================================================

    def _enqueue(self, event: WorkflowEvent) -> WorkflowSnapshot:
        self._queue.append(event)
        if self._processing:
            return self._snapshot

        self._processing = True
        try:
            while self._queue:
                self._snapshot = self._process(self._queue.popleft())
                for listener in list(self._listeners):
                    listener(self._snapshot)
        except BaseException:
            self._queue.clear()
            raise
        finally:
            self._processing = False
        return self._snapshot

    def _process(self, event: WorkflowEvent) -> WorkflowSnapshot:
        if self._is_stale(event):
            logger.info(
                "Stale completion ignored",
                extra={"event": event.type.value, "state": self._state.value},
            )
            return self._build_snapshot(changed=False, event=event)

        if self._stopped:
            return self._build_snapshot(changed=False, event=event)

        transition = resolve_transition(state=self._state, ctx=self._context, event=event)
        if transition is None:
            logger.debug(
                "Event ignored",
                extra={"event": event.type.value, "state": self._state.value},
            )
            return self._build_snapshot(changed=False, event=event)

        target = transition.target
        if target is not None and STATE_INVOCATIONS.get(target) is Invocation.DELETE_OPERATION:
            self._require_running_loop()

        source = self._state
        next_context = apply_actions(transition, self._context, event)

        if target is None:
            self._context = next_context
        else:
            self._exit_state(source)
            self._context = next_context
            self._state = target

        logger.info(
            "Workflow transition",
            extra={
                "event": event.type.value,
                "from_state": source.value,
                "to_state": self._state.value,
                "actions": transition.action_names,
                "selected": len(self._context.selected_items),
            },
        )

        if transition.forward_to_prompt:
            self._forward_to_prompt(event)

        if target is not None:
            self._enter_state(target, event)

        return self._build_snapshot(changed=True, event=event)

    def _is_stale(self, event: WorkflowEvent) -> bool:
        if isinstance(event, (DeleteSucceeded, DeleteFailed)):
            return event.generation != self._generation or self._state is not WorkflowState.DELETING
        if isinstance(event, PromptDone):
            return event.prompt_id != self._prompt_id or self._prompt is None
        return False

    def _build_snapshot(self, *, changed: bool, event: WorkflowEvent | None) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            state=self._state,
            context=self._context,
            prompt=self._prompt.snapshot() if self._prompt is not None else None,
            changed=changed,
            event_type=event.type if event is not None else None,
        )

    # ==========================================================================
    # Invocations
    # ==========================================================================

    def _enter_state(self, state: WorkflowState, event: WorkflowEvent) -> None:
        invocation = STATE_INVOCATIONS.get(state)
        if invocation is Invocation.DELETE_OPERATION:
            self._start_delete()
        elif invocation is Invocation.PROMPT:
            self._start_prompt(event)

    def _exit_state(self, state: WorkflowState) -> None:
        invocation = STATE_INVOCATIONS.get(state)
        if invocation is Invocation.DELETE_OPERATION:
            self._cancel_delete()
        elif invocation is Invocation.PROMPT:
            self._stop_prompt()

    def _require_running_loop(self) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError as e:
            raise WorkflowError(
                "Deleting requires a running event loop; call send() from async code"
            ) from e

    def _start_delete(self) -> None:
        self._generation += 1
        generation = self._generation
        selection = self._context.selected_items

        task = asyncio.get_running_loop().create_task(
            _invoke_delete(self._delete_operation, selection),
            name=f"delete-selection-{generation}",
        )
        task.add_done_callback(functools.partial(self._on_delete_done, generation))
        self._delete_task = task
        logger.info(
            "Delete invocation started",
            extra={"generation": generation, "count": len(selection)},
        )

    def _cancel_delete(self) -> None:
        detached = self._generation
        # Any completion of the detached invocation is stale from here on.
        self._generation += 1
        task, self._delete_task = self._delete_task, None
        if task is not None and not task.done():
            task.cancel()
            logger.info("Delete invocation cancelled", extra={"generation": detached})

    def _on_delete_done(self, generation: int, task: asyncio.Task[object]) -> None:
        error: BaseException | None
        if task.cancelled():
            if self._delete_task is not task:
                # Detached by _cancel_delete.
                return
            error = asyncio.CancelledError()
        else:
            error = task.exception()

        event: WorkflowEvent
        if error is not None:
            logger.warning(
                "Delete invocation failed",
                extra={"generation": generation, "error": repr(error)},
            )
            event = DeleteFailed(generation=generation, error=error)
        else:
            event = DeleteSucceeded(generation=generation, result=task.result())

        self._enqueue(event)
        if self._delete_task is task:
            # Outcome was not applied (stopped or superseded); nothing is outstanding.
            self._delete_task = None

    def _start_prompt(self, event: WorkflowEvent) -> None:
        self._prompt_id += 1
        prompt_id = self._prompt_id
        message = failure_message(self._context.selected_items)

        prompt = self._prompt_factory(PromptContext(message=message))
        prompt.on_done(lambda: self._enqueue(PromptDone(prompt_id=prompt_id)))
        self._prompt = prompt
        logger.info(
            "Prompt started",
            extra={
                "prompt_id": prompt_id,
                "trigger": event.type.value,
                "prompt_message": message,
            },
        )

    def _stop_prompt(self) -> None:
        prompt, self._prompt = self._prompt, None
        if prompt is not None:
            prompt.stop()

    def _forward_to_prompt(self, event: WorkflowEvent) -> None:
        if self._prompt is None:
            return
        self._prompt.send(event)
