"""Pure context transformations.

Each function takes a context (and, where needed, an item) and returns a new
context. None of them raise for a well-formed context.
"""

from __future__ import annotations

from dataclasses import replace

from selection_workflow.models import Item, WorkflowContext


def add_item_to_selection(ctx: WorkflowContext, item: Item) -> WorkflowContext:
    # No dedup here; callers are expected to only select unselected items.
    return replace(ctx, selected_items=(*ctx.selected_items, item))


def add_all_items_to_selection(ctx: WorkflowContext) -> WorkflowContext:
    return replace(ctx, selected_items=ctx.items)


def remove_item_from_selection(ctx: WorkflowContext, item: Item) -> WorkflowContext:
    return replace(
        ctx,
        selected_items=tuple(s for s in ctx.selected_items if s.id != item.id),
    )


def reset_selection(ctx: WorkflowContext) -> WorkflowContext:
    return replace(ctx, selected_items=())


def delete_selection(ctx: WorkflowContext) -> WorkflowContext:
    """Drop every selected item from `items` and clear the selection."""

    selected = ctx.selected_ids
    return WorkflowContext(
        items=tuple(item for item in ctx.items if item.id not in selected),
        selected_items=(),
    )
