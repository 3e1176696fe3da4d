"""Variant filtering by restriction, language and role."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from stream_selection.domain import Variant
from stream_selection.selection.selector import select_by_language_and_role

logger = logging.getLogger(__name__)


def get_playable_variants(variants: Sequence[Variant]) -> list[Variant]:
    """Return the variants allowed by both the key system and the application.

    Args:
        variants: Variants in manifest order.

    Returns:
        Allowed variants, in their original order.
    """
    playable = [v for v in variants if not v.is_restricted]
    if len(playable) < len(variants):
        logger.debug(
            "Excluded %d restricted variant(s)", len(variants) - len(playable)
        )
    return playable


def _variant_roles(variant: Variant) -> list[str]:
    return variant.roles


def filter_variants_by_language_and_role(
    variants: Sequence[Variant],
    preferred_language: str,
    preferred_role: str,
) -> list[Variant]:
    """Choose the variants that best match a language and role preference.

    Restricted variants are never returned, whatever their language or role.
    A variant's role set is the role set of its audio stream; variants
    without audio have no roles.

    Args:
        variants: Variants in manifest order. Not modified.
        preferred_language: Preferred language tag, "" for no preference.
        preferred_role: Preferred audio role, "" for no preference.

    Returns:
        The chosen variants, in their original relative order.
    """
    return select_by_language_and_role(
        get_playable_variants(variants),
        preferred_language,
        preferred_role,
        roles_of=_variant_roles,
    )
