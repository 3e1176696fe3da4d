"""Domain models for stream selection.

These records are produced by manifest construction and consumed read-only
by the selection functions. Candidates compare by identity: selection results
are references into a period's own lists, never copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stream_selection.domain.enums import StreamType


@dataclass(eq=False)
class DrmInfo:
    """Key system a variant may be decrypted with."""

    key_system: str
    key_ids: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Stream:
    """A single-track rendition (audio, video, or text)."""

    id: int
    type: StreamType = StreamType.TEXT
    mime_type: str = ""
    codecs: str = ""
    language: str = ""
    label: str | None = None
    kind: str | None = None  # text only: "subtitle", "caption"
    primary: bool = False
    # Ordered; the first tag is the stream's representative role
    roles: list[str] = field(default_factory=list)
    key_id: str | None = None
    bandwidth: int | None = None
    # Video-specific
    width: int | None = None
    height: int | None = None
    frame_rate: float | None = None
    # Audio-specific
    channels: int | None = None

    @property
    def encrypted(self) -> bool:
        """Return True if the stream references a content key."""
        return self.key_id is not None


@dataclass(eq=False)
class Variant:
    """A playable combination of an audio and/or video stream."""

    id: int
    language: str = ""
    primary: bool = False
    audio: Stream | None = None
    video: Stream | None = None
    bandwidth: int = 0
    drm_infos: list[DrmInfo] = field(default_factory=list)
    allowed_by_key_system: bool = True
    allowed_by_application: bool = True

    @property
    def roles(self) -> list[str]:
        """Roles of the audio stream, or an empty list without audio."""
        return self.audio.roles if self.audio is not None else []

    @property
    def streams(self) -> list[Stream]:
        """Audio and video streams present on this variant, in that order."""
        return [s for s in (self.audio, self.video) if s is not None]

    @property
    def is_restricted(self) -> bool:
        """Return True if a key system or application policy disallows it."""
        return not (self.allowed_by_key_system and self.allowed_by_application)


@dataclass(eq=False)
class Period:
    """Time-bounded segment of a presentation with its own catalog."""

    start_time: float = 0.0
    variants: list[Variant] = field(default_factory=list)
    text_streams: list[Stream] = field(default_factory=list)


@dataclass(eq=False)
class Manifest:
    """Ordered periods of a presentation."""

    periods: list[Period] = field(default_factory=list)

    def find_period(self, time: float) -> Period | None:
        """Return the period containing the given presentation time.

        Periods are assumed sorted by start time. A time before the first
        period resolves to the first period.
        """
        if not self.periods:
            return None
        found = self.periods[0]
        for period in self.periods[1:]:
            if time >= period.start_time:
                found = period
        return found
