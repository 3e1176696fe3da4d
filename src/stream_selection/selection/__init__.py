"""Language and role based selection of variants and text streams."""

from stream_selection.selection.selector import (
    LanguageRoleCandidate,
    select_by_language_and_role,
)
from stream_selection.selection.streams import filter_streams_by_language_and_role
from stream_selection.selection.variants import (
    filter_variants_by_language_and_role,
    get_playable_variants,
)

__all__ = [
    "LanguageRoleCandidate",
    "filter_streams_by_language_and_role",
    "filter_variants_by_language_and_role",
    "get_playable_variants",
    "select_by_language_and_role",
]
