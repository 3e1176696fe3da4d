"""Platform capability oracles.

The period filter depends only on the two protocols defined here, so any
platform probe (a browser bridge, a decoder inventory, a test fake) can be
plugged in. MediaCapabilities and KeySystemSupport are configurable
implementations backed by static pattern lists.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from typing import Protocol

from stream_selection.domain import Variant

# Full MIME descriptors playable by a typical MSE-style media pipeline.
# Patterns use fnmatch syntax and are matched case-insensitively.
DEFAULT_MEDIA_TYPES: tuple[str, ...] = (
    'video/mp4; codecs="avc1.*"',
    'video/mp4; codecs="avc3.*"',
    'video/mp4; codecs="hvc1.*"',
    'video/mp4; codecs="hev1.*"',
    'video/mp4; codecs="av01.*"',
    'video/mp4; codecs="vp09.*"',
    'video/webm; codecs="vp8"',
    'video/webm; codecs="vp9"',
    'video/webm; codecs="vp09.*"',
    'audio/mp4; codecs="mp4a.*"',
    'audio/mp4; codecs="ac-3"',
    'audio/mp4; codecs="ec-3"',
    'audio/mp4; codecs="opus"',
    'audio/mp4; codecs="flac"',
    'audio/webm; codecs="opus"',
    'audio/webm; codecs="vorbis"',
)

# Text formats with a registered parser.
DEFAULT_TEXT_TYPES: tuple[str, ...] = (
    "text/vtt",
    'application/mp4; codecs="wvtt"',
    "application/ttml+xml",
    'application/mp4; codecs="stpp"',
    'application/mp4; codecs="stpp.*"',
)


class TypeSupportOracle(Protocol):
    """Answers whether full MIME descriptors can be played."""

    def is_media_type_supported(self, full_mime_type: str) -> bool: ...

    def is_text_type_supported(self, full_mime_type: str) -> bool: ...


class KeySystemCapability(Protocol):
    """Answers whether a variant can be decrypted by the active key system."""

    def initialized(self) -> bool: ...

    def is_supported_by_key_system(self, variant: Variant) -> bool: ...


def _normalize_descriptor(descriptor: str) -> str:
    """Lowercase a descriptor and standardize the spacing around ';'."""
    parts = [part.strip() for part in descriptor.split(";")]
    return "; ".join(part for part in parts if part).lower()


class MediaCapabilities:
    """Support oracle backed by lists of descriptor patterns.

    Example:
        caps = MediaCapabilities(text_types=("text/vtt",))
        caps.is_text_type_supported("text/vtt")  # True
        caps.is_text_type_supported("text/bogus")  # False
    """

    def __init__(
        self,
        media_types: Iterable[str] = DEFAULT_MEDIA_TYPES,
        text_types: Iterable[str] = DEFAULT_TEXT_TYPES,
    ) -> None:
        """Initialize the oracle.

        Args:
            media_types: Patterns of supported audio/video descriptors.
            text_types: Patterns of supported text descriptors.
        """
        self._media_types = tuple(_normalize_descriptor(p) for p in media_types)
        self._text_types = tuple(_normalize_descriptor(p) for p in text_types)

    @property
    def media_types(self) -> tuple[str, ...]:
        """Get the normalized media patterns."""
        return self._media_types

    @property
    def text_types(self) -> tuple[str, ...]:
        """Get the normalized text patterns."""
        return self._text_types

    def is_media_type_supported(self, full_mime_type: str) -> bool:
        """Check an audio or video descriptor against the media patterns."""
        return self._matches(full_mime_type, self._media_types)

    def is_text_type_supported(self, full_mime_type: str) -> bool:
        """Check a text descriptor against the text patterns."""
        return self._matches(full_mime_type, self._text_types)

    @staticmethod
    def _matches(full_mime_type: str, patterns: tuple[str, ...]) -> bool:
        descriptor = _normalize_descriptor(full_mime_type)
        return any(fnmatch.fnmatchcase(descriptor, p) for p in patterns)


class KeySystemSupport:
    """Key-system capability for a single active key system.

    Unencrypted variants (no DRM info) are supported by every key system.
    When no key system is active the capability reports itself as not
    initialized and the period filter skips key-system checks.
    """

    def __init__(self, key_system: str | None = None) -> None:
        self._key_system = key_system or None

    @property
    def key_system(self) -> str | None:
        """Get the active key system, or None."""
        return self._key_system

    def initialized(self) -> bool:
        """Return True once a key system has been chosen."""
        return self._key_system is not None

    def is_supported_by_key_system(self, variant: Variant) -> bool:
        """Check if the active key system can decrypt the variant."""
        if not variant.drm_infos:
            return True
        return any(info.key_system == self._key_system for info in variant.drm_infos)
