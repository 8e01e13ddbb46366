"""JSON-lines logging for the workflow runtime and CLI.

Every record becomes a single JSON object. Keyword data handed to a logger
call via `extra=` is collected into a nested `extra` object so transition
and invocation details stay machine-readable.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

# Attribute names every LogRecord carries on this interpreter, plus the two
# that formatters add later.
_BUILTIN_RECORD_FIELDS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"asctime", "message"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _BUILTIN_RECORD_FIELDS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Format records as JSON lines with timestamp, level, logger and message."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        line: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = _extra_fields(record)
        if fields:
            line["extra"] = fields
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: TextIO | None = None) -> None:
    """Route all logging through one JSON handler at `level`.

    Output defaults to stderr since stdout carries CLI snapshots. Calling this
    again replaces the handler rather than adding a second one.
    """

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    # asyncio debug chatter only shows at WARNING or when the root is stricter.
    logging.getLogger("asyncio").setLevel(max(root.level, logging.WARNING))
