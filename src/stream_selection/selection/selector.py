"""Language and role selection shared by variant and text stream filtering.

Narrowing happens in two phases, each working only on the survivors of the
previous one:

1. Language: keep the candidates in the best language-match tier. When no
   candidate matches the preferred language at all, fall back to the
   primary-flagged candidates (or to every candidate if none is primary).
   The survivors are then reduced to the language of the first survivor.
2. Role: keep the candidates carrying the preferred role. When no role is
   preferred, or nobody carries it, standardize on the first survivor's
   representative role (its first role tag, or "no role"). Text streams
   prefer role-less candidates when no role is requested.

The result is homogeneous in language and role, and ties always resolve to
the first qualifying candidate in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from stream_selection.language import MatchType, match_type, normalize_language

logger = logging.getLogger(__name__)


class LanguageRoleCandidate(Protocol):
    """Anything with a language tag and a primary flag."""

    language: str
    primary: bool


CandidateT = TypeVar("CandidateT", bound=LanguageRoleCandidate)

RolesOf = Callable[[CandidateT], Sequence[str]]


def select_by_language_and_role(
    candidates: Sequence[CandidateT],
    preferred_language: str,
    preferred_role: str,
    *,
    roles_of: RolesOf,
    prefer_roleless: bool = False,
) -> list[CandidateT]:
    """Select the best language- and role-matching subset of candidates.

    Args:
        candidates: Candidates in manifest order. Not modified.
        preferred_language: Preferred language tag, "" for no preference.
        preferred_role: Preferred role tag, "" for no preference.
        roles_of: Returns the ordered role tags of a candidate.
        prefer_roleless: When no role is preferred, choose candidates without
            any role over candidates with one, if such candidates exist.

    Returns:
        The chosen candidates, in their original relative order.
    """
    candidates = list(candidates)
    if not candidates:
        return []

    chosen = _filter_by_language(candidates, preferred_language)
    return _filter_by_role(chosen, preferred_role, roles_of, prefer_roleless)


def _filter_by_language(
    candidates: list[CandidateT], preferred_language: str
) -> list[CandidateT]:
    """Reduce candidates to a single language, best match first."""
    tiers = [match_type(preferred_language, c.language) for c in candidates]
    best = max(tiers)

    if best != MatchType.NONE:
        pool = [c for c, tier in zip(candidates, tiers) if tier == best]
    else:
        if preferred_language:
            logger.debug(
                "No candidate matches preferred language %r", preferred_language
            )
        # Primary is a hint consulted only when language gives no signal
        pool = [c for c in candidates if c.primary] or candidates

    language = normalize_language(pool[0].language)
    return [c for c in pool if normalize_language(c.language) == language]


def _filter_by_role(
    candidates: list[CandidateT],
    preferred_role: str,
    roles_of: RolesOf,
    prefer_roleless: bool,
) -> list[CandidateT]:
    """Reduce candidates to a single role classification."""
    if preferred_role:
        matches = [c for c in candidates if preferred_role in roles_of(c)]
        if matches:
            return matches
        logger.debug(
            "No candidate has preferred role %r, choosing a role", preferred_role
        )
    elif prefer_roleless:
        roleless = [c for c in candidates if not roles_of(c)]
        if roleless:
            return roleless

    representative = _first_role(roles_of(candidates[0]))
    return [c for c in candidates if _first_role(roles_of(c)) == representative]


def _first_role(roles: Sequence[str]) -> str | None:
    """Return the representative role tag, or None for no role."""
    return roles[0] if roles else None
