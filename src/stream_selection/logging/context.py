"""Selection context for structured logging.

Log calls about a particular period, variant or stream pass the identifiers
as extra fields, e.g. ``extra={"period_start": 0.0, "variant_id": 3}``.
SelectionContextFilter renders them as a compact tag for text output;
JSONFormatter emits them as top-level keys.
"""

from __future__ import annotations

import logging

# Extra fields that identify what a record is about, in display order
SELECTION_FIELDS: tuple[str, ...] = (
    "period_start",
    "variant_id",
    "stream_id",
    "reason",
)

_TAG_NAMES: dict[str, str] = {
    "period_start": "period",
    "variant_id": "variant",
    "stream_id": "stream",
    "reason": "reason",
}


class SelectionContextFilter(logging.Filter):
    """Logging filter that adds a selection_tag attribute to every record.

    The tag looks like ``[period=0.0 variant=3] `` and is empty when the
    record carries no selection fields.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Attach the tag. Records are never dropped."""
        parts = [
            f"{_TAG_NAMES[name]}={getattr(record, name)}"
            for name in SELECTION_FIELDS
            if getattr(record, name, None) is not None
        ]
        record.selection_tag = f"[{' '.join(parts)}] " if parts else ""
        return True
