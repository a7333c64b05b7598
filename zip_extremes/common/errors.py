"""Domain errors and failure typing."""


class ExtremesError(Exception):
    """Base class for zip-extremes failures."""

    error_code = "EXTREMES_ERROR"


class ConfigError(ExtremesError):
    """Raised for invalid or unreadable settings."""

    error_code = "CONFIG_ERROR"


class UsageError(ExtremesError):
    """Raised when the command line is malformed."""

    error_code = "USAGE_ERROR"


class SourceOpenError(ExtremesError):
    """Raised when the input source is missing, unreadable, empty or not open."""

    error_code = "OPEN_FAILURE"


class SourceReadError(SourceOpenError):
    """Raised when an open source cannot be decoded mid-read."""

    error_code = "READ_FAILURE"


class RecordParseError(ExtremesError):
    """Raised for a single line that cannot be turned into a record."""

    error_code = "PARSE_FAILURE"

    def __init__(self, reason: str, line_number: int | None = None) -> None:
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"line {line_number}: {reason}")


class EmptyResultError(ExtremesError):
    """Raised when a bulk read yields no valid records."""

    error_code = "EMPTY_RESULT"
