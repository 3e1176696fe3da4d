"""Formatters for stream selection log output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from stream_selection.logging.context import SELECTION_FIELDS

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(selection_tag)s%(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord has, plus ones added by SelectionContextFilter
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "selection_tag"}


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, message, logger (omitted for the
    root logger), the selection fields present on the record (period_start,
    variant_id, stream_id, reason), context for any other extra fields, and
    exception when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        for name in SELECTION_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in SELECTION_FIELDS
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
