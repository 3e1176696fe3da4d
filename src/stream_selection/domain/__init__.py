"""Domain models and enums for stream selection.

- Domain models: Stream, Variant, DrmInfo, Period, Manifest
- Domain enums: StreamType, KeyStatus

Usage:
    from stream_selection.domain import Period, Stream, Variant
"""

from .enums import KeyStatus, StreamType
from .models import DrmInfo, Manifest, Period, Stream, Variant

__all__ = [
    # Models
    "DrmInfo",
    "Manifest",
    "Period",
    "Stream",
    "Variant",
    # Enums
    "KeyStatus",
    "StreamType",
]
