"""Flat track descriptions for presenting a period's choices to a user.

A Track is a read-only summary of one playable variant or one text stream.
Tracks carry the id of the record they describe so a user's pick can be
mapped back to the record with the find_* helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from stream_selection.domain import Period, Stream, Variant
from stream_selection.selection import get_playable_variants


@dataclass(frozen=True)
class Track:
    """User-facing description of a variant or a text stream."""

    id: int
    type: Literal["variant", "text"]
    active: bool = False
    language: str = ""
    label: str | None = None
    kind: str | None = None
    primary: bool = False
    roles: tuple[str, ...] = field(default_factory=tuple)
    bandwidth: int | None = None
    mime_type: str | None = None
    codecs: str | None = None
    # Variant-only fields
    audio_id: int | None = None
    video_id: int | None = None
    audio_codec: str | None = None
    video_codec: str | None = None
    width: int | None = None
    height: int | None = None
    frame_rate: float | None = None
    channels: int | None = None


def _variant_track(
    variant: Variant, active_audio_id: int | None, active_video_id: int | None
) -> Track:
    audio, video = variant.audio, variant.video
    audio_id = audio.id if audio is not None else None
    video_id = video.id if video is not None else None
    codecs = ", ".join(s.codecs for s in variant.streams if s.codecs)
    # A muxed variant reports the container of whichever stream it has
    container = video if video is not None else audio

    return Track(
        id=variant.id,
        type="variant",
        active=audio_id == active_audio_id and video_id == active_video_id,
        language=variant.language,
        label=audio.label if audio is not None else None,
        kind=audio.kind if audio is not None else None,
        primary=variant.primary,
        roles=tuple(variant.roles),
        bandwidth=variant.bandwidth,
        mime_type=container.mime_type if container is not None else None,
        codecs=codecs or None,
        audio_id=audio_id,
        video_id=video_id,
        audio_codec=audio.codecs if audio is not None else None,
        video_codec=video.codecs if video is not None else None,
        width=video.width if video is not None else None,
        height=video.height if video is not None else None,
        frame_rate=video.frame_rate if video is not None else None,
        channels=audio.channels if audio is not None else None,
    )


def get_variant_tracks(
    period: Period,
    active_audio_id: int | None = None,
    active_video_id: int | None = None,
) -> list[Track]:
    """Describe every playable variant of a period.

    Args:
        period: Period to describe.
        active_audio_id: Id of the audio stream being played, if any.
        active_video_id: Id of the video stream being played, if any.

    Returns:
        One Track per playable variant, in manifest order. A track is active
        when both its audio and video ids match the active ids.
    """
    return [
        _variant_track(variant, active_audio_id, active_video_id)
        for variant in get_playable_variants(period.variants)
    ]


def get_text_tracks(period: Period, active_text_id: int | None = None) -> list[Track]:
    """Describe every text stream of a period, in manifest order."""
    return [
        Track(
            id=stream.id,
            type="text",
            active=stream.id == active_text_id,
            language=stream.language,
            label=stream.label,
            kind=stream.kind,
            primary=stream.primary,
            roles=tuple(stream.roles),
            bandwidth=stream.bandwidth,
            mime_type=stream.mime_type,
            codecs=stream.codecs or None,
        )
        for stream in period.text_streams
    ]


def find_variant_for_track(period: Period, track: Track) -> Variant | None:
    """Return the period's variant described by a track, or None."""
    if track.type != "variant":
        return None
    return next((v for v in period.variants if v.id == track.id), None)


def find_text_stream_for_track(period: Period, track: Track) -> Stream | None:
    """Return the period's text stream described by a track, or None."""
    if track.type != "text":
        return None
    return next((s for s in period.text_streams if s.id == track.id), None)
