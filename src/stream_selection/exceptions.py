"""Custom exceptions for stream selection.

Selection itself never raises on well-formed input; these errors come from
loading configuration and playback profiles.
"""


class StreamSelectionError(Exception):
    """Base class for stream selection errors."""

    pass


class ConfigError(StreamSelectionError):
    """Raised when a configuration file cannot be parsed or is invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem.
            path: Path to the offending config file, if known.
        """
        self.message = message
        self.path = path
        error_msg = message
        if path:
            error_msg += f" (file: {path})"
        super().__init__(error_msg)


class ProfileValidationError(StreamSelectionError):
    """Raised when a playback profile is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)
