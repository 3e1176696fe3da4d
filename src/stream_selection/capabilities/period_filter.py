"""Removal of unplayable variants and text streams from a new period.

A period is filtered once, the first time the player encounters it. The
input period is left untouched: the result is a new Period whose lists hold
references to the surviving originals. Filtering the result again removes
nothing further.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from stream_selection.capabilities.mime import (
    are_streams_compatible,
    get_stream_full_type,
)
from stream_selection.capabilities.platform import (
    KeySystemCapability,
    TypeSupportOracle,
)
from stream_selection.domain import Period, Stream, Variant

logger = logging.getLogger(__name__)


def _variant_drop_reason(
    variant: Variant,
    key_systems: KeySystemCapability | None,
    active_audio: Stream | None,
    active_video: Stream | None,
    capabilities: TypeSupportOracle,
) -> str | None:
    """Return why a variant is unplayable, or None if it is playable."""
    if (
        key_systems is not None
        and key_systems.initialized()
        and not key_systems.is_supported_by_key_system(variant)
    ):
        return "not compatible with the key system"

    for stream in variant.streams:
        full_type = get_stream_full_type(stream)
        if not capabilities.is_media_type_supported(full_type):
            return f"{stream.type.value} type {full_type!r} is not supported"

    audio, video = variant.audio, variant.video
    if audio is not None and active_audio is not None:
        if not are_streams_compatible(audio, active_audio):
            return "audio is not compatible with the active audio stream"
    if video is not None and active_video is not None:
        if not are_streams_compatible(video, active_video):
            return "video is not compatible with the active video stream"

    return None


def filter_new_period(
    key_systems: KeySystemCapability | None,
    active_audio: Stream | None,
    active_video: Stream | None,
    period: Period,
    capabilities: TypeSupportOracle,
) -> Period:
    """Drop the variants and text streams the platform cannot play.

    Text streams are tested by their full MIME descriptor (container type
    plus codecs). A stream is never dropped merely for declaring codecs.

    Args:
        key_systems: Active key-system capability, or None for clear content.
        active_audio: Audio stream currently buffered, if any. Variants whose
            audio cannot replace it on the same buffer are dropped.
        active_video: Video stream currently buffered, if any.
        period: The newly encountered period. Not modified.
        capabilities: Oracle for media and text descriptor support.

    Returns:
        A new Period with only playable variants and text streams.
    """
    variants: list[Variant] = []
    for variant in period.variants:
        reason = _variant_drop_reason(
            variant, key_systems, active_audio, active_video, capabilities
        )
        if reason is None:
            variants.append(variant)
        else:
            logger.debug(
                "Dropping variant %s: %s",
                variant.id,
                reason,
                extra={
                    "period_start": period.start_time,
                    "variant_id": variant.id,
                    "reason": reason,
                },
            )

    text_streams: list[Stream] = []
    for stream in period.text_streams:
        full_type = get_stream_full_type(stream)
        if capabilities.is_text_type_supported(full_type):
            text_streams.append(stream)
        else:
            logger.debug(
                "Dropping text stream %s: type %r is not supported",
                stream.id,
                full_type,
                extra={"period_start": period.start_time, "stream_id": stream.id},
            )

    removed = (len(period.variants) - len(variants)) + (
        len(period.text_streams) - len(text_streams)
    )
    if removed:
        logger.info(
            "Removed %d unplayable entries from period starting at %s",
            removed,
            period.start_time,
            extra={"period_start": period.start_time},
        )

    return replace(period, variants=variants, text_streams=text_streams)
