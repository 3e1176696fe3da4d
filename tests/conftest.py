"""Shared test fixtures for stream selection."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from stream_selection.domain import DrmInfo, Period, Stream, StreamType, Variant


class PeriodBuilder:
    """Fluent builder for test periods.

    language() and primary() apply to the current variant, or to the current
    text stream after add_text_stream(). roles() and mime() apply to the
    most recently added stream.

    Example:
        period = (
            PeriodBuilder()
            .add_variant(0).language("en").add_audio(0).roles(["main"])
            .add_text_stream(1).mime("application/mp4", "wvtt")
            .build()
        )
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._period = Period(start_time=start_time)
        self._variant: Variant | None = None
        self._stream: Stream | None = None

    def add_variant(self, variant_id: int, bandwidth: int = 0) -> PeriodBuilder:
        self._variant = Variant(id=variant_id, bandwidth=bandwidth)
        self._stream = None
        self._period.variants.append(self._variant)
        return self

    def add_audio(
        self,
        stream_id: int,
        mime_type: str = "audio/mp4",
        codecs: str = "mp4a.40.2",
    ) -> PeriodBuilder:
        assert self._variant is not None, "add_variant() first"
        self._stream = Stream(
            id=stream_id, type=StreamType.AUDIO, mime_type=mime_type, codecs=codecs
        )
        self._variant.audio = self._stream
        return self

    def add_video(
        self,
        stream_id: int,
        mime_type: str = "video/mp4",
        codecs: str = "avc1.4d401f",
        width: int | None = 1280,
        height: int | None = 720,
    ) -> PeriodBuilder:
        assert self._variant is not None, "add_variant() first"
        self._stream = Stream(
            id=stream_id,
            type=StreamType.VIDEO,
            mime_type=mime_type,
            codecs=codecs,
            width=width,
            height=height,
        )
        self._variant.video = self._stream
        return self

    def add_text_stream(self, stream_id: int) -> PeriodBuilder:
        self._variant = None
        self._stream = Stream(id=stream_id, type=StreamType.TEXT, mime_type="text/vtt")
        self._period.text_streams.append(self._stream)
        return self

    def language(self, language: str) -> PeriodBuilder:
        self._current().language = language
        return self

    def primary(self) -> PeriodBuilder:
        self._current().primary = True
        return self

    def roles(self, roles: list[str]) -> PeriodBuilder:
        assert self._stream is not None, "add a stream first"
        self._stream.roles = list(roles)
        return self

    def mime(self, mime_type: str, codecs: str = "") -> PeriodBuilder:
        assert self._stream is not None, "add a stream first"
        self._stream.mime_type = mime_type
        self._stream.codecs = codecs
        return self

    def key_id(self, key_id: str) -> PeriodBuilder:
        assert self._stream is not None, "add a stream first"
        self._stream.key_id = key_id
        return self

    def drm(self, key_system: str) -> PeriodBuilder:
        assert self._variant is not None, "add_variant() first"
        self._variant.drm_infos.append(DrmInfo(key_system=key_system))
        return self

    def build(self) -> Period:
        return self._period

    def _current(self) -> Variant | Stream:
        if self._variant is not None:
            return self._variant
        assert self._stream is not None, "add a variant or text stream first"
        return self._stream


@pytest.fixture
def builder() -> PeriodBuilder:
    """Return a fresh period builder."""
    return PeriodBuilder()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
