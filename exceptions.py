"""Custom exception classes for swing-trends."""

from __future__ import annotations

from typing import Optional


class SwingTrendsError(Exception):
    """Base exception for all swing-trends errors."""

    pass


class IngestError(SwingTrendsError):
    """Base exception for file ingestion errors."""

    def __init__(self, message: str, filename: Optional[str] = None):
        self.filename = filename
        super().__init__(message)


class MalformedInputError(IngestError):
    """Raised when raw file content cannot be read as CSV text."""

    pass


class DecodeError(MalformedInputError):
    """Raised when file bytes are not valid text in the expected encoding."""

    pass


class HeaderNotFoundError(IngestError):
    """Raised when the Blast header row is missing from the scan window."""

    pass


class EmptyFileError(IngestError):
    """Raised when a HitTrax export has no data rows."""

    pass


class UnsupportedFormatError(IngestError):
    """Raised when a file matches neither supported vendor export."""

    pass


class NoValidFilesError(IngestError):
    """Raised when a batch produced no successfully parsed files."""

    pass


class CoercionError(SwingTrendsError):
    """Base exception for cell value coercion errors."""

    def __init__(self, message: str, value: Optional[str] = None, row: Optional[int] = None):
        self.value = value
        self.row = row
        super().__init__(message)


class DateParseError(CoercionError):
    """Raised when a date cell cannot be parsed into a timestamp."""

    pass


class NumericCoercionError(CoercionError):
    """Raised in strict mode when a numeric cell cannot be parsed."""

    pass


class ConfigError(SwingTrendsError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)


class StorageError(SwingTrendsError):
    """Raised when the dataset store cannot be written."""

    pass
