"""Selection Workflow.

An in-process state machine coordinating item selection and bulk deletion:
- explicit, table-driven transitions over an immutable context
- an asynchronous delete invocation with stale-result protection
- a composed prompt sub-workflow shown when deletion fails
"""

__version__ = "0.1.0"

from selection_workflow.config import WorkflowSettings
from selection_workflow.models import Item, WorkflowContext
from selection_workflow.workflow.interpreter import SelectionWorkflow
from selection_workflow.workflow.state_machine import WorkflowSnapshot, WorkflowState

__all__ = [
    "__version__",
    "Item",
    "SelectionWorkflow",
    "WorkflowContext",
    "WorkflowSettings",
    "WorkflowSnapshot",
    "WorkflowState",
]
