"""Configuration management for the HTML localizer."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from html_localizer.core.constants import LogLevels
from html_localizer.core.exceptions import ConfigurationError
from html_localizer.core.models import FileLayout
from html_localizer.utils.logger import DEFAULT_DATE_FORMAT, DEFAULT_FORMAT


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip('"').strip("'").lower() == "true"


def _env_int(name: str, default: int, setting: str) -> int:
    value = os.getenv(name, str(default)).strip('"').strip("'")
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{value}'", setting) from None


@dataclass
class Config:
    """Central configuration for the localizer application."""

    # Project record; its directory is the base directory of the project
    project_path: Optional[Path] = None

    # Run settings
    extract_only: bool = False
    file_layout: FileLayout = FileLayout.SUBDIRECTORY

    # Logging settings
    log_level: str = LogLevels.INFO
    log_format: str = DEFAULT_FORMAT
    log_date_format: str = DEFAULT_DATE_FORMAT
    verbose: bool = False

    # Performance settings
    parallel_enabled: bool = False
    max_workers: int = 4
    show_progress: bool = False

    @classmethod
    def from_env(cls) -> 'Config':
        """
        Create configuration from environment variables.

        Raises:
            ConfigurationError: If FILE_LAYOUT names no known layout or
                MAX_WORKERS is not an integer
        """
        project_path = os.getenv("HTML_LOCALIZER_PROJECT", "").strip('"').strip("'")
        verbose = _env_flag("VERBOSE")
        return cls(
            project_path=Path(project_path) if project_path else None,
            extract_only=_env_flag("EXTRACT_ONLY"),
            file_layout=FileLayout.parse(os.getenv("FILE_LAYOUT", FileLayout.SUBDIRECTORY.value)),
            log_level=os.getenv("LOG_LEVEL", LogLevels.DEBUG if verbose else LogLevels.INFO).upper(),
            verbose=verbose,
            parallel_enabled=_env_flag("PARALLEL_ENABLED"),
            max_workers=_env_int("MAX_WORKERS", 4, "max_workers"),
            show_progress=_env_flag("SHOW_PROGRESS", "true"),
        )

    @classmethod
    def from_args(cls, args) -> 'Config':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed argument namespace from argparse

        Returns:
            Config instance with values from arguments

        Raises:
            ConfigurationError: If the file layout is unknown
        """
        verbose = getattr(args, 'verbose', False)
        return cls(
            project_path=Path(args.project) if getattr(args, 'project', None) else None,
            extract_only=getattr(args, 'extract_only', False),
            file_layout=FileLayout.parse(getattr(args, 'file_layout', FileLayout.SUBDIRECTORY.value)),
            log_level=LogLevels.DEBUG if verbose else (getattr(args, 'log_level', None) or LogLevels.INFO).upper(),
            verbose=verbose,
            parallel_enabled=getattr(args, 'parallel', False),
            max_workers=getattr(args, 'max_workers', 4),
            show_progress=getattr(args, 'progress', True),
        )

    def validate(self) -> list[str]:
        """
        Validate configuration settings.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.project_path:
            errors.append("project_path is required")
        elif self.project_path.exists() and not self.project_path.is_file():
            errors.append(f"project_path is not a file: {self.project_path}")

        if self.max_workers < 1:
            errors.append("max_workers must be positive")

        if self.log_level not in LogLevels.ALL:
            errors.append(f"Invalid log_level: {self.log_level}")

        return errors

    @property
    def base_directory(self) -> Optional[Path]:
        if self.project_path is None:
            return None
        return self.project_path.resolve().parent
