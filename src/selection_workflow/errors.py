from __future__ import annotations


class WorkflowError(RuntimeError):
    """Base error for misuse of the workflow runtime."""


class DuplicateItemError(ValueError):
    def __init__(self, item_id: object) -> None:
        super().__init__(f"Duplicate item id: {item_id!r}")
        self.item_id = item_id


class UnknownEventError(ValueError):
    pass
