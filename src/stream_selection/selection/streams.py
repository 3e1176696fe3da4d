"""Text stream filtering by language and role."""

from __future__ import annotations

from collections.abc import Sequence

from stream_selection.domain import Stream
from stream_selection.selection.selector import select_by_language_and_role


def _stream_roles(stream: Stream) -> list[str]:
    return stream.roles


def filter_streams_by_language_and_role(
    streams: Sequence[Stream],
    preferred_language: str,
    preferred_role: str,
) -> list[Stream]:
    """Choose the streams that best match a language and role preference.

    When no role is preferred, streams without any role are chosen over
    streams with one.

    Args:
        streams: Streams in manifest order. Not modified.
        preferred_language: Preferred language tag, "" for no preference.
        preferred_role: Preferred role, "" for no preference.

    Returns:
        The chosen streams, in their original relative order.
    """
    return select_by_language_and_role(
        streams,
        preferred_language,
        preferred_role,
        roles_of=_stream_roles,
        prefer_roleless=True,
    )
