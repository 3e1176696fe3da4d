"""Stream selection for media playback clients.

Chooses, from a period's catalog of variants and text streams, the subset that
best matches a preferred language and role, after removing entries the
platform cannot play.

Usage:
    from stream_selection import (
        filter_new_period,
        filter_streams_by_language_and_role,
        filter_variants_by_language_and_role,
    )
"""

from stream_selection.capabilities import (
    KeySystemSupport,
    MediaCapabilities,
    filter_new_period,
)
from stream_selection.domain import DrmInfo, Manifest, Period, Stream, Variant
from stream_selection.selection import (
    filter_streams_by_language_and_role,
    filter_variants_by_language_and_role,
    get_playable_variants,
    select_by_language_and_role,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Domain
    "DrmInfo",
    "Manifest",
    "Period",
    "Stream",
    "Variant",
    # Selection
    "filter_streams_by_language_and_role",
    "filter_variants_by_language_and_role",
    "get_playable_variants",
    "select_by_language_and_role",
    # Capabilities
    "KeySystemSupport",
    "MediaCapabilities",
    "filter_new_period",
]
