"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Arguments passed directly to get_config()
2. Environment variables (STREAMSEL_*)
3. Config file (~/.streamsel/config.toml)
4. Default values

Environment variables:
- STREAMSEL_CONFIG_PATH: Path to config file (overrides default location)
- STREAMSEL_AUDIO_LANGUAGE: Preferred audio language
- STREAMSEL_AUDIO_ROLE: Preferred audio role
- STREAMSEL_TEXT_LANGUAGE: Preferred text language
- STREAMSEL_TEXT_ROLE: Preferred text role
- STREAMSEL_KEY_SYSTEM: Active key system
- STREAMSEL_LOG_LEVEL: Log level (debug, info, warning, error)
- STREAMSEL_LOG_FORMAT: Log format (text, json)
- STREAMSEL_LOG_FILE: Log file path
- STREAMSEL_LOG_INCLUDE_STDERR: Also log to stderr when a file is set
- STREAMSEL_LOG_MAX_BYTES: Rotation threshold in bytes
- STREAMSEL_LOG_BACKUP_COUNT: Number of rotated files to keep

An invalid environment value is logged as a warning and ignored, so the file
value or default applies. Invalid file values raise ConfigError.
"""

from __future__ import annotations

import logging
import threading
import tomllib
from dataclasses import fields
from pathlib import Path
from typing import Any

from stream_selection.config.env import EnvReader
from stream_selection.config.models import (
    LOG_FORMATS,
    LOG_LEVELS,
    CapabilitiesConfig,
    LoggingConfig,
    SelectionConfig,
    StreamSelectionConfig,
)
from stream_selection.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".streamsel"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Free-form string variables: name -> (section, key)
_ENV_STRINGS: dict[str, tuple[str, str]] = {
    "STREAMSEL_AUDIO_LANGUAGE": ("selection", "audio_language"),
    "STREAMSEL_AUDIO_ROLE": ("selection", "audio_role"),
    "STREAMSEL_TEXT_LANGUAGE": ("selection", "text_language"),
    "STREAMSEL_TEXT_ROLE": ("selection", "text_role"),
    "STREAMSEL_KEY_SYSTEM": ("capabilities", "key_system"),
}

# Enumerated variables: name -> (logging key, allowed values)
_ENV_CHOICES: dict[str, tuple[str, tuple[str, ...]]] = {
    "STREAMSEL_LOG_LEVEL": ("level", LOG_LEVELS),
    "STREAMSEL_LOG_FORMAT": ("format", LOG_FORMATS),
}

# Non-negative integer variables: name -> logging key
_ENV_COUNTS: dict[str, str] = {
    "STREAMSEL_LOG_MAX_BYTES": "max_bytes",
    "STREAMSEL_LOG_BACKUP_COUNT": "backup_count",
}

_SECTIONS: dict[str, type] = {
    "selection": SelectionConfig,
    "capabilities": CapabilitiesConfig,
    "logging": LoggingConfig,
}

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by the STREAMSEL_CONFIG_PATH environment variable.
    """
    reader = env_reader or EnvReader()
    return reader.get_path("STREAMSEL_CONFIG_PATH", DEFAULT_CONFIG_FILE)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Parse a TOML file.

    Args:
        path: File to read. A missing file yields an empty dict.
        strict: If True, raise ConfigError on parse failures.
                If False (default), log a warning and return an empty dict.

    Returns:
        Parsed configuration dict.

    Raises:
        ConfigError: When strict=True and the file cannot be parsed.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot parse config file: {e}", str(path)) from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation, so a modified file is
    re-read on the next call. Thread-safe.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _section_values(
    file_config: dict[str, Any], section: str, model: type
) -> dict[str, Any]:
    """Pick the known keys of one config file section."""
    raw = file_config.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")

    known = {f.name for f in fields(model)}
    for key in raw.keys() - known:
        logger.warning("Unknown config key %s.%s ignored", section, key)
    return {key: value for key, value in raw.items() if key in known}


def _apply_env_overrides(values: dict[str, dict[str, Any]], reader: EnvReader) -> None:
    """Merge STREAMSEL_* variables into the section values.

    Invalid values are logged and skipped.
    """
    for var, (section, key) in _ENV_STRINGS.items():
        env_value = reader.get_str(var)
        if env_value is not None:
            values[section][key] = env_value

    for var, (key, choices) in _ENV_CHOICES.items():
        env_value = reader.get_str(var)
        if env_value is None:
            continue
        if env_value.lower() not in choices:
            logger.warning(
                "Invalid value for %s: %s (expected one of %s)",
                var,
                env_value,
                ", ".join(choices),
            )
            continue
        values["logging"][key] = env_value

    for var, key in _ENV_COUNTS.items():
        count = reader.get_int(var)
        if count is None:
            continue
        if count < 0:
            logger.warning("Invalid value for %s: %d must be >= 0", var, count)
            continue
        values["logging"][key] = count

    log_file = reader.get_path("STREAMSEL_LOG_FILE")
    if log_file is not None:
        values["logging"]["file"] = log_file
    include_stderr = reader.get_bool("STREAMSEL_LOG_INCLUDE_STDERR")
    if include_stderr is not None:
        values["logging"]["include_stderr"] = include_stderr


def get_config(
    config_path: Path | None = None,
    *,
    audio_language: str | None = None,
    audio_role: str | None = None,
    text_language: str | None = None,
    text_role: str | None = None,
    key_system: str | None = None,
    env_reader: EnvReader | None = None,
    strict: bool = False,
) -> StreamSelectionConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides STREAMSEL_CONFIG_PATH).
        audio_language: Override for the preferred audio language.
        audio_role: Override for the preferred audio role.
        text_language: Override for the preferred text language.
        text_role: Override for the preferred text role.
        key_system: Override for the active key system.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        StreamSelectionConfig with merged configuration.

    Raises:
        ConfigError: If a value fails validation, or when strict=True and the
            config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_config_file(path, strict=strict)

    values = {
        section: _section_values(file_config, section, model)
        for section, model in _SECTIONS.items()
    }

    # Environment overrides file
    _apply_env_overrides(values, reader)

    # Arguments override environment
    overrides = {
        ("selection", "audio_language"): audio_language,
        ("selection", "audio_role"): audio_role,
        ("selection", "text_language"): text_language,
        ("selection", "text_role"): text_role,
        ("capabilities", "key_system"): key_system,
    }
    for (section, key), value in overrides.items():
        if value is not None:
            values[section][key] = value

    try:
        return StreamSelectionConfig(
            **{
                section: model(**values[section])
                for section, model in _SECTIONS.items()
            }
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}", str(path)) from e
