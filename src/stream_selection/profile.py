"""Playback profiles: a user's language, role and restriction preferences.

Profiles are YAML mappings validated with Pydantic, for example:

    schema_version: 1
    audio:
      language: fr-CA
      role: main
    text:
      language: fr
    restrictions:
      max_height: 1080
      max_bandwidth: 6000000
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stream_selection.config.models import SelectionConfig
from stream_selection.exceptions import ProfileValidationError
from stream_selection.restrictions import Restrictions

logger = logging.getLogger(__name__)

_LANGUAGE_TAG_PATTERN = re.compile(r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{1,8})*$")


class PreferenceModel(BaseModel):
    """Pydantic model for a language and role preference."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    language: str = ""
    role: str = ""

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate the language tag shape."""
        v = v.strip()
        if v and not _LANGUAGE_TAG_PATTERN.match(v):
            raise ValueError(
                f"Invalid language tag '{v}'. Use a tag such as 'en' or 'pt-BR'."
            )
        return v

    @field_validator("role")
    @classmethod
    def strip_role(cls, v: str) -> str:
        """Normalize surrounding whitespace in the role."""
        return v.strip()


class RestrictionsModel(BaseModel):
    """Pydantic model for application restrictions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_width: int = Field(default=0, ge=0)
    max_width: int | None = Field(default=None, ge=0)
    min_height: int = Field(default=0, ge=0)
    max_height: int | None = Field(default=None, ge=0)
    min_pixels: int = Field(default=0, ge=0)
    max_pixels: int | None = Field(default=None, ge=0)
    min_bandwidth: int = Field(default=0, ge=0)
    max_bandwidth: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_ranges(self) -> RestrictionsModel:
        """Check that every minimum is at most its maximum."""
        for name in ("width", "height", "pixels", "bandwidth"):
            low = getattr(self, f"min_{name}")
            high = getattr(self, f"max_{name}")
            if high is not None and low > high:
                raise ValueError(f"min_{name} must not exceed max_{name}")
        return self


class ProfileModel(BaseModel):
    """Pydantic model for a playback profile file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: Literal[1]
    audio: PreferenceModel = Field(default_factory=PreferenceModel)
    text: PreferenceModel = Field(default_factory=PreferenceModel)
    restrictions: RestrictionsModel = Field(default_factory=RestrictionsModel)


@dataclass(frozen=True)
class PlaybackProfile:
    """Validated playback preferences."""

    audio_language: str = ""
    audio_role: str = ""
    text_language: str = ""
    text_role: str = ""
    restrictions: Restrictions = field(default_factory=Restrictions)

    @classmethod
    def from_config(cls, config: SelectionConfig) -> PlaybackProfile:
        """Build an unrestricted profile from configured preferences."""
        return cls(
            audio_language=config.audio_language,
            audio_role=config.audio_role,
            text_language=config.text_language,
            text_role=config.text_role,
        )


def _convert_restrictions(model: RestrictionsModel) -> Restrictions:
    def upper(value: int | None) -> float:
        return math.inf if value is None else value

    return Restrictions(
        min_width=model.min_width,
        max_width=upper(model.max_width),
        min_height=model.min_height,
        max_height=upper(model.max_height),
        min_pixels=model.min_pixels,
        max_pixels=upper(model.max_pixels),
        min_bandwidth=model.min_bandwidth,
        max_bandwidth=upper(model.max_bandwidth),
    )


def _format_validation_error(error: Exception) -> tuple[str, str | None]:
    """Format a Pydantic validation error into a message and field path."""
    from pydantic import ValidationError

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Profile validation failed: {loc}: {msg}", loc
            return f"Profile validation failed: {msg}", None

    return f"Profile validation failed: {error}", None


def load_profile_from_dict(data: dict[str, Any]) -> PlaybackProfile:
    """Load and validate a playback profile from a dictionary.

    Raises:
        ProfileValidationError: If the profile data is invalid.
    """
    try:
        model = ProfileModel.model_validate(data)
    except Exception as e:
        message, loc = _format_validation_error(e)
        raise ProfileValidationError(message, field=loc) from e

    return PlaybackProfile(
        audio_language=model.audio.language,
        audio_role=model.audio.role,
        text_language=model.text.language,
        text_role=model.text.role,
        restrictions=_convert_restrictions(model.restrictions),
    )


def load_profile(profile_path: Path) -> PlaybackProfile:
    """Load and validate a playback profile from a YAML file.

    Raises:
        ProfileValidationError: If the profile file is invalid.
        FileNotFoundError: If the profile file does not exist.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile file not found: {profile_path}")

    try:
        with open(profile_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProfileValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise ProfileValidationError("Profile file is empty")

    if not isinstance(data, dict):
        raise ProfileValidationError("Profile file must be a YAML mapping")

    logger.debug("Loaded playback profile from %s", profile_path)
    return load_profile_from_dict(data)
