"""MIME descriptor helpers."""

from __future__ import annotations

from stream_selection.domain import Stream


def get_full_type(mime_type: str, codecs: str | None = None) -> str:
    """Combine a container MIME type and a codec string into one descriptor.

    Examples:
        >>> get_full_type("text/vtt")
        'text/vtt'
        >>> get_full_type("application/mp4", "wvtt")
        'application/mp4; codecs="wvtt"'
    """
    if codecs:
        return f'{mime_type}; codecs="{codecs}"'
    return mime_type


def get_stream_full_type(stream: Stream) -> str:
    """Return the full MIME descriptor of a stream."""
    return get_full_type(stream.mime_type, stream.codecs)


def get_base_codec(codecs: str | None) -> str:
    """Return the codec family of a codec string, lowercased.

    Examples:
        >>> get_base_codec("avc1.42c01e")
        'avc1'
        >>> get_base_codec("mp4a.40.2")
        'mp4a'
    """
    if not codecs:
        return ""
    return codecs.split(".", 1)[0].strip().lower()


def are_streams_compatible(stream: Stream, other: Stream) -> bool:
    """Check if two streams can be switched between on one source buffer.

    Streams are compatible when they share a container MIME type and a codec
    family; profile and level may differ.
    """
    if stream.mime_type.lower() != other.mime_type.lower():
        return False
    return get_base_codec(stream.codecs) == get_base_codec(other.codecs)
