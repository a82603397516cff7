"""Custom exception hierarchy for the HTML localizer."""

from typing import Optional, List
from pathlib import Path


class LocalizerError(Exception):
    """Base exception for all localization errors."""
    pass


class ParsingError(LocalizerError):
    """HTML parsing failed or produced unexpected results."""

    def __init__(self, message: str, file_path: Optional[Path] = None):
        """
        Initialize parsing error.

        Args:
            message: Error message
            file_path: Path to file being parsed
        """
        self.file_path = file_path

        full_message = message
        if file_path:
            full_message = f"{message} (file: {file_path})"

        super().__init__(full_message)


class MissingFileError(LocalizerError):
    """Required file not found."""

    def __init__(self, file_path: Path, context: str = ""):
        """
        Initialize missing file error.

        Args:
            file_path: Path to missing file
            context: Additional context about why file is needed
        """
        self.file_path = file_path
        self.context = context

        message = f"File not found: {file_path}"
        if context:
            message = f"{message}. {context}"

        super().__init__(message)


class ConfigurationError(LocalizerError):
    """Configuration is invalid or incomplete."""

    def __init__(self, message: str, setting: Optional[str] = None):
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name of problematic setting
        """
        self.setting = setting

        full_message = message
        if setting:
            full_message = f"Configuration error for '{setting}': {message}"

        super().__init__(full_message)


class ProjectRecordError(LocalizerError):
    """Project record could not be decoded or failed validation."""

    def __init__(self, message: str, record_path: Optional[Path] = None,
                 errors: Optional[List[str]] = None):
        """
        Initialize project record error.

        Args:
            message: Error message
            record_path: Path of the record being loaded
            errors: List of specific validation errors
        """
        self.record_path = record_path
        self.errors = errors or []

        full_message = message
        if record_path:
            full_message = f"{full_message} (record: {record_path})"
        if errors:
            error_list = "\n  - ".join(errors)
            full_message = f"{full_message}\n  Errors:\n  - {error_list}"

        super().__init__(full_message)


class ExportError(LocalizerError):
    """Writing the project record or a localized document failed."""

    def __init__(self, message: str, output_path: Optional[Path] = None,
                 format_type: Optional[str] = None):
        """
        Initialize export error.

        Args:
            message: Error message
            output_path: Path where export was attempted
            format_type: Format being exported (e.g., "JSON", "HTML")
        """
        self.output_path = output_path
        self.format_type = format_type

        full_message = message
        if format_type:
            full_message = f"{format_type} export failed: {message}"
        if output_path:
            full_message = f"{full_message} (path: {output_path})"

        super().__init__(full_message)
