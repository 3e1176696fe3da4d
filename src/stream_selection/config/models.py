"""Configuration data models.

This module defines dataclasses for stream selection configuration options.
Values may come straight from TOML, so every model checks types as well as
ranges in __post_init__ and raises TypeError or ValueError.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path

from stream_selection.capabilities.platform import (
    DEFAULT_MEDIA_TYPES,
    DEFAULT_TEXT_TYPES,
)

LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error")
LOG_FORMATS: tuple[str, ...] = ("text", "json")


def _require_type(name: str, value: object, expected: type | tuple[type, ...]) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) and expected is int:
        raise TypeError(f"{name} must be an integer, got bool")
    if not isinstance(value, expected):
        raise TypeError(f"{name} has invalid type {type(value).__name__}")


@dataclass
class SelectionConfig:
    """Default language and role preferences.

    Empty strings mean "no preference".
    """

    audio_language: str = ""
    audio_role: str = ""
    text_language: str = ""
    text_role: str = ""

    def __post_init__(self) -> None:
        """Validate configuration."""
        for f in fields(self):
            _require_type(f.name, getattr(self, f.name), str)


@dataclass
class CapabilitiesConfig:
    """Platform capabilities used to filter new periods."""

    # fnmatch patterns of full MIME descriptors, e.g. 'audio/mp4; codecs="mp4a.*"'
    media_types: tuple[str, ...] = DEFAULT_MEDIA_TYPES
    text_types: tuple[str, ...] = DEFAULT_TEXT_TYPES

    # Active key system (e.g. "com.widevine.alpha"); None for clear content only
    key_system: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("media_types", "text_types"):
            patterns = getattr(self, name)
            _require_type(name, patterns, (list, tuple))
            for idx, pattern in enumerate(patterns):
                if not isinstance(pattern, str) or not pattern.strip():
                    raise ValueError(f"{name}[{idx}] must be a non-empty string")
            setattr(self, name, tuple(patterns))
        if self.key_system is not None:
            _require_type("key_system", self.key_system, str)
            self.key_system = self.key_system.strip() or None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only); "~" is expanded
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        _require_type("level", self.level, str)
        if self.level.lower() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got {self.level}")
        _require_type("format", self.format, str)
        if self.format.lower() not in LOG_FORMATS:
            raise ValueError(
                f"format must be one of {LOG_FORMATS}, got {self.format}"
            )
        if self.file is not None:
            _require_type("file", self.file, (str, Path))
            self.file = Path(self.file).expanduser()
        _require_type("include_stderr", self.include_stderr, bool)
        for name in ("max_bytes", "backup_count"):
            value = getattr(self, name)
            _require_type(name, value, int)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass
class StreamSelectionConfig:
    """Top-level configuration."""

    selection: SelectionConfig = field(default_factory=SelectionConfig)
    capabilities: CapabilitiesConfig = field(default_factory=CapabilitiesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
