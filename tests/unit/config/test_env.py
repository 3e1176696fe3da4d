"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stream_selection.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        """Should return the value when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR") is None
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_returns_empty_string_when_set_to_empty(self) -> None:
        """Should return empty string when variable is set to empty."""
        reader = EnvReader(env={"MY_VAR": ""})
        assert reader.get_str("MY_VAR", "default") == ""

    def test_reads_os_environ_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should fall back to os.environ when no mapping is injected."""
        monkeypatch.setenv("STREAMSEL_TEST_VAR", "from-env")
        assert EnvReader().get_str("STREAMSEL_TEST_VAR") == "from-env"


class TestEnvReaderGetInt:
    """Tests for EnvReader.get_int method."""

    def test_returns_value_when_set(self) -> None:
        """Should parse and return integer when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "42"})
        assert reader.get_int("MY_VAR") == 42

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_int("MY_VAR", 100) == 100

    def test_returns_default_and_warns_for_invalid(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Should return default and log warning for invalid integer."""
        reader = EnvReader(env={"MY_VAR": "not_a_number"})
        with caplog.at_level(logging.WARNING):
            result = reader.get_int("MY_VAR", 100)
        assert result == 100
        assert "Invalid integer value for MY_VAR: not_a_number" in caplog.text


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
    def test_truthy_values(self, value: str) -> None:
        """Should treat common truthy spellings as True."""
        reader = EnvReader(env={"MY_VAR": value})
        assert reader.get_bool("MY_VAR") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "maybe"])
    def test_other_values_are_false(self, value: str) -> None:
        """Should treat anything else as False."""
        reader = EnvReader(env={"MY_VAR": value})
        assert reader.get_bool("MY_VAR", True) is False

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_bool("MY_VAR") is None
        assert reader.get_bool("MY_VAR", True) is True


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_returns_path_when_set(self) -> None:
        """Should return a Path when environment variable is set."""
        reader = EnvReader(env={"MY_VAR": "/some/path"})
        assert reader.get_path("MY_VAR") == Path("/some/path")

    def test_expands_tilde(self) -> None:
        """Should expand the home directory."""
        reader = EnvReader(env={"MY_VAR": "~/config.toml"})
        assert reader.get_path("MY_VAR") == Path.home() / "config.toml"

    def test_empty_value_returns_default(self) -> None:
        """Should treat an empty value as unset."""
        reader = EnvReader(env={"MY_VAR": ""})
        assert reader.get_path("MY_VAR", Path("/default")) == Path("/default")
