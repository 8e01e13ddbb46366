"""Initial items for the workflow.

Items come either from the built-in defaults or from a JSON file holding a
list of objects with `id`, `title`, `owner` and `updated_at`.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, TypeAdapter

from selection_workflow.models import Item, WorkflowContext

logger = logging.getLogger(__name__)


class ItemRecord(BaseModel):
    id: int | str
    title: str
    owner: str
    updated_at: datetime

    def to_item(self) -> Item:
        updated_at = self.updated_at
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=UTC)
        return Item(id=self.id, title=self.title, owner=self.owner, updated_at=updated_at)


_ITEM_RECORDS = TypeAdapter(list[ItemRecord])


def default_items() -> list[Item]:
    return [
        Item(0, "Summer Photos", "Anthony Stevens", datetime(2017, 7, 12, tzinfo=UTC)),
        Item(1, "Surfing", "Scott Masterson", datetime(2017, 7, 16, tzinfo=UTC)),
        Item(2, "Beach Concerts", "Jonathan Lee", datetime(2017, 2, 16, tzinfo=UTC)),
        Item(3, "Sandcastles", "Aaron Bennett", datetime(2017, 6, 5, tzinfo=UTC)),
        Item(4, "Boardwalk", "Mary Johnson", datetime(2017, 6, 1, tzinfo=UTC)),
        Item(5, "Beach Picnics", "Janet Perkins", datetime(2017, 5, 7, tzinfo=UTC)),
    ]


def load_items(path: Path) -> list[Item]:
    """Load items from a JSON file.

    Raises:
        pydantic.ValidationError: If the file does not hold a list of items.
        DuplicateItemError: If two items share an id.
    """

    raw = json.loads(path.read_text(encoding="utf-8"))
    items = [record.to_item() for record in _ITEM_RECORDS.validate_python(raw)]
    WorkflowContext.create(items)
    logger.info("Items loaded", extra={"path": str(path), "count": len(items)})
    return items


def resolve_items(path: Path | None) -> list[Item]:
    return load_items(path) if path is not None else default_items()
