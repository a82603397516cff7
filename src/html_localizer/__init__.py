"""HTML localizer.

Extracts translatable fields from HTML templates into a JSON project record
and renders one localized copy of each template per culture.
"""

__version__ = "1.0.0"

# Re-export commonly used classes and functions for convenience
from html_localizer.core.constants import Markers, PseudoAttributes, Defaults
from html_localizer.core.exceptions import (
    LocalizerError, ParsingError, MissingFileError, ConfigurationError,
    ProjectRecordError, ExportError
)
from html_localizer.core.models import (
    Field, DirectField, ReferenceField, FieldCollection,
    FileOptions, ExtractFieldOptions, FileLayout
)
from html_localizer.core.options import ProjectOptions
from html_localizer.config.settings import Config
from html_localizer.document import HtmlDocument
from html_localizer.project import Project

__all__ = [
    # Version
    '__version__',
    # Config
    'Config', 'ProjectOptions',
    # Constants
    'Markers', 'PseudoAttributes', 'Defaults',
    # Exceptions
    'LocalizerError', 'ParsingError', 'MissingFileError', 'ConfigurationError',
    'ProjectRecordError', 'ExportError',
    # Model
    'Field', 'DirectField', 'ReferenceField', 'FieldCollection',
    'FileOptions', 'ExtractFieldOptions', 'FileLayout',
    'HtmlDocument', 'Project',
]
