"""Inputs to the variant restriction flags.

Two collaborators decide whether a variant may be played regardless of its
language or role:

- the application, through size and bandwidth restrictions
  (``allowed_by_application``);
- the key system, through per-key statuses (``allowed_by_key_system``).

Both functions update the flags on the variants they are given and report
whether anything changed, so the caller knows to re-run selection.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from stream_selection.domain import KeyStatus, Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Restrictions:
    """Application limits on playable variants.

    Bounds are inclusive. Width, height and pixel limits apply only to
    variants with video.
    """

    min_width: int = 0
    max_width: float = math.inf
    min_height: int = 0
    max_height: float = math.inf
    min_pixels: int = 0
    max_pixels: float = math.inf
    min_bandwidth: int = 0
    max_bandwidth: float = math.inf

    def __post_init__(self) -> None:
        """Validate that every range is well-formed."""
        for name in ("width", "height", "pixels", "bandwidth"):
            low = getattr(self, f"min_{name}")
            high = getattr(self, f"max_{name}")
            if low < 0:
                raise ValueError(f"min_{name} must be >= 0, got {low}")
            if low > high:
                raise ValueError(
                    f"min_{name} ({low}) must not exceed max_{name} ({high})"
                )

    def meets(self, variant: Variant) -> bool:
        """Check if a variant satisfies every restriction."""
        if not self.min_bandwidth <= variant.bandwidth <= self.max_bandwidth:
            return False

        video = variant.video
        if video is not None:
            width = video.width or 0
            height = video.height or 0
            if not self.min_width <= width <= self.max_width:
                return False
            if not self.min_height <= height <= self.max_height:
                return False
            if not self.min_pixels <= width * height <= self.max_pixels:
                return False

        return True


def apply_restrictions(
    variants: Iterable[Variant], restrictions: Restrictions
) -> bool:
    """Set ``allowed_by_application`` from the application restrictions.

    Args:
        variants: Variants to update in place.
        restrictions: Limits to apply.

    Returns:
        True if any variant's flag changed.
    """
    changed = False
    for variant in variants:
        allowed = restrictions.meets(variant)
        if allowed != variant.allowed_by_application:
            logger.debug(
                "Variant %s %s by application restrictions",
                variant.id,
                "allowed" if allowed else "disallowed",
            )
            variant.allowed_by_application = allowed
            changed = True
    return changed


def apply_key_statuses(
    variants: Iterable[Variant], key_statuses: Mapping[str, KeyStatus | str]
) -> bool:
    """Set ``allowed_by_key_system`` from the key system's key statuses.

    A variant is disallowed when any of its streams uses a key whose status
    restricts output. Variants whose keys have no reported status keep
    their current flag.

    Args:
        variants: Variants to update in place.
        key_statuses: Status per key id, as enum members or their values.

    Returns:
        True if any variant's flag changed.

    Raises:
        ValueError: If a status string is not a known KeyStatus value.
    """
    statuses = {key_id: KeyStatus(status) for key_id, status in key_statuses.items()}

    changed = False
    for variant in variants:
        reported = [
            statuses[s.key_id]
            for s in variant.streams
            if s.key_id is not None and s.key_id in statuses
        ]
        if not reported:
            continue
        allowed = not any(status.is_restricting for status in reported)
        if allowed != variant.allowed_by_key_system:
            logger.debug(
                "Variant %s %s by key status",
                variant.id,
                "allowed" if allowed else "disallowed",
            )
            variant.allowed_by_key_system = allowed
            changed = True
    return changed
