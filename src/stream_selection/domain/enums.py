"""Domain enums for stream selection."""

from enum import Enum


class StreamType(Enum):
    """Content type carried by a single stream."""

    AUDIO = "audio"
    VIDEO = "video"
    TEXT = "text"


class KeyStatus(Enum):
    """Status reported by the key system for a single key id.

    Only OUTPUT_RESTRICTED and INTERNAL_ERROR make content unplayable;
    the remaining statuses leave a variant eligible.
    """

    USABLE = "usable"
    EXPIRED = "expired"
    RELEASED = "released"
    OUTPUT_RESTRICTED = "output-restricted"
    OUTPUT_DOWNSCALED = "output-downscaled"
    STATUS_PENDING = "status-pending"
    INTERNAL_ERROR = "internal-error"

    @property
    def is_restricting(self) -> bool:
        """Return True if content protected by this key cannot be played."""
        return self in (KeyStatus.OUTPUT_RESTRICTED, KeyStatus.INTERNAL_ERROR)
