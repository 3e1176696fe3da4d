"""Platform capability checks applied to newly encountered periods."""

from stream_selection.capabilities.mime import (
    are_streams_compatible,
    get_base_codec,
    get_full_type,
    get_stream_full_type,
)
from stream_selection.capabilities.period_filter import filter_new_period
from stream_selection.capabilities.platform import (
    DEFAULT_MEDIA_TYPES,
    DEFAULT_TEXT_TYPES,
    KeySystemCapability,
    KeySystemSupport,
    MediaCapabilities,
    TypeSupportOracle,
)

__all__ = [
    "DEFAULT_MEDIA_TYPES",
    "DEFAULT_TEXT_TYPES",
    "KeySystemCapability",
    "KeySystemSupport",
    "MediaCapabilities",
    "TypeSupportOracle",
    "are_streams_compatible",
    "filter_new_period",
    "get_base_codec",
    "get_full_type",
    "get_stream_full_type",
]
