"""Workflow machinery.

This package contains:
- pure context transformations (`actions`)
- event types (`events`)
- the transition table and snapshots (`state_machine`)
- the delete operation contract (`operations`)
- the prompt sub-workflow (`prompt`)
- the runtime that ties them together (`interpreter`)
- read-only view helpers (`projection`)
"""

from .events import (
    DeleteSelection,
    DeselectItem,
    DismissPrompt,
    EventType,
    ResetSelection,
    SelectAllItems,
    SelectItem,
)
from .interpreter import SelectionWorkflow
from .operations import DeleteOperation, SimulatedDeleteOperation
from .prompt import PromptContext, PromptWorkflow
from .state_machine import WorkflowSnapshot, WorkflowState

__all__ = [
    "DeleteOperation",
    "DeleteSelection",
    "DeselectItem",
    "DismissPrompt",
    "EventType",
    "PromptContext",
    "PromptWorkflow",
    "ResetSelection",
    "SelectAllItems",
    "SelectItem",
    "SelectionWorkflow",
    "SimulatedDeleteOperation",
    "WorkflowSnapshot",
    "WorkflowState",
]
