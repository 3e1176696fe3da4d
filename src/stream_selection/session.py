"""Per-presentation selection state.

PeriodSelector ties the pieces together the way a player uses them: a period
is capability-filtered the first time it is seen, and every selection event
afterwards narrows the filtered catalog by the current preferences.

A PeriodSelector is not thread-safe; use one per playback session.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, replace

from stream_selection.capabilities import (
    KeySystemCapability,
    KeySystemSupport,
    MediaCapabilities,
    TypeSupportOracle,
    filter_new_period,
)
from stream_selection.config.models import StreamSelectionConfig
from stream_selection.domain import Period, Stream, Variant
from stream_selection.profile import PlaybackProfile
from stream_selection.selection import (
    filter_streams_by_language_and_role,
    filter_variants_by_language_and_role,
)

logger = logging.getLogger(__name__)

# Live presentations add periods indefinitely; only recent ones are kept.
DEFAULT_MAX_CACHED_PERIODS = 16


@dataclass(frozen=True)
class SelectionResult:
    """Candidates chosen for one period."""

    period: Period
    variants: list[Variant]
    text_streams: list[Stream]


class PeriodSelector:
    """Chooses variants and text streams for the periods of a presentation."""

    def __init__(
        self,
        capabilities: TypeSupportOracle,
        key_systems: KeySystemCapability | None = None,
        profile: PlaybackProfile | None = None,
        max_cached_periods: int = DEFAULT_MAX_CACHED_PERIODS,
    ) -> None:
        """Initialize the selector.

        Args:
            capabilities: Oracle for media and text descriptor support.
            key_systems: Active key-system capability, None for clear content.
            profile: Preferences and restrictions; defaults to no preference.
            max_cached_periods: Filtered periods kept before the least
                recently used one is evicted.

        Raises:
            ValueError: If max_cached_periods is less than 1.
        """
        if max_cached_periods < 1:
            raise ValueError(
                f"max_cached_periods must be >= 1, got {max_cached_periods}"
            )
        self._capabilities = capabilities
        self._key_systems = key_systems
        self._profile = profile or PlaybackProfile()
        self._max_cached_periods = max_cached_periods
        # id(original period) -> (original, filtered); the original is kept
        # so its id cannot be reused while cached
        self._filtered: OrderedDict[int, tuple[Period, Period]] = OrderedDict()

    @classmethod
    def from_config(
        cls, config: StreamSelectionConfig, profile: PlaybackProfile | None = None
    ) -> PeriodSelector:
        """Build a selector from loaded configuration.

        Args:
            config: Loaded configuration.
            profile: Overrides the configured language and role preferences.
        """
        caps = config.capabilities
        return cls(
            capabilities=MediaCapabilities(caps.media_types, caps.text_types),
            key_systems=KeySystemSupport(caps.key_system),
            profile=profile or PlaybackProfile.from_config(config.selection),
        )

    @property
    def profile(self) -> PlaybackProfile:
        """Get the current playback profile."""
        return self._profile

    @property
    def cached_period_count(self) -> int:
        """Get the number of filtered periods currently held."""
        return len(self._filtered)

    def set_preferences(
        self,
        *,
        audio_language: str | None = None,
        audio_role: str | None = None,
        text_language: str | None = None,
        text_role: str | None = None,
    ) -> None:
        """Change preferences. Already filtered periods are not re-filtered."""
        changes = {
            key: value
            for key, value in (
                ("audio_language", audio_language),
                ("audio_role", audio_role),
                ("text_language", text_language),
                ("text_role", text_role),
            )
            if value is not None
        }
        self._profile = replace(self._profile, **changes)

    def prepare_period(
        self,
        period: Period,
        active_audio: Stream | None = None,
        active_video: Stream | None = None,
    ) -> Period:
        """Return the capability-filtered form of a period.

        The filter runs once per cached period; later calls return the cached
        result even if the active streams differ.
        """
        key = id(period)
        cached = self._filtered.get(key)
        if cached is not None:
            self._filtered.move_to_end(key)
            return cached[1]

        logger.debug(
            "Filtering new period starting at %s",
            period.start_time,
            extra={"period_start": period.start_time},
        )
        filtered = filter_new_period(
            self._key_systems, active_audio, active_video, period, self._capabilities
        )
        self._filtered[key] = (period, filtered)
        if len(self._filtered) > self._max_cached_periods:
            _, (evicted, _) = self._filtered.popitem(last=False)
            logger.debug(
                "Evicted filtered period starting at %s",
                evicted.start_time,
                extra={"period_start": evicted.start_time},
            )
        return filtered

    def forget_period(self, period: Period) -> bool:
        """Drop a period's filtered form, e.g. once it leaves the timeline.

        Returns:
            True if the period was cached.
        """
        return self._filtered.pop(id(period), None) is not None

    def select(
        self,
        period: Period,
        active_audio: Stream | None = None,
        active_video: Stream | None = None,
    ) -> SelectionResult:
        """Choose variants and text streams for a period.

        Variants outside the profile's restrictions are excluded in addition
        to those the key system or application already disallowed. The
        allowed flags of the period's variants are never written.

        Args:
            period: Period from the manifest.
            active_audio: Audio stream currently buffered, if any.
            active_video: Video stream currently buffered, if any.

        Returns:
            The filtered period and the chosen candidates.
        """
        filtered = self.prepare_period(period, active_audio, active_video)

        restrictions = self._profile.restrictions
        within_limits = [v for v in filtered.variants if restrictions.meets(v)]
        if len(within_limits) < len(filtered.variants):
            logger.debug(
                "Excluded %d variant(s) outside profile restrictions",
                len(filtered.variants) - len(within_limits),
                extra={"period_start": period.start_time},
            )

        variants = filter_variants_by_language_and_role(
            within_limits, self._profile.audio_language, self._profile.audio_role
        )
        text_streams = filter_streams_by_language_and_role(
            filtered.text_streams, self._profile.text_language, self._profile.text_role
        )
        if not variants:
            logger.warning(
                "No playable variant in period starting at %s",
                period.start_time,
                extra={"period_start": period.start_time},
            )
        return SelectionResult(
            period=filtered, variants=variants, text_streams=text_streams
        )
