"""Project record decoding and validation using Pydantic models."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, ValidationError as PydanticValidationError

from html_localizer.core.constants import Defaults, RecordKeys
from html_localizer.core.exceptions import ProjectRecordError
from html_localizer.core.models import FileOptions, parse_flags
from html_localizer.utils.logger import get_logger

logger = get_logger(__name__)


def split_string_list(value):
    """Accept either a JSON array or a comma-separated string."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(Defaults.LIST_SEPARATOR) if item.strip()]
    return value


# ============================================================================
# Pydantic Models for the Record
# ============================================================================

class FieldRecord(BaseModel):
    """One field entry of a document."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias=RecordKeys.NAME, min_length=1)
    sort_order: int = Field(Defaults.NO_SORT_ORDER, alias=RecordKeys.SORT_ORDER)
    source_html: Optional[str] = Field(None, alias=RecordKeys.SOURCE_HTML)
    values: Optional[Dict[str, Dict[str, Optional[str]]]] = Field(None, alias=RecordKeys.VALUES)
    exists: bool = Field(True, alias=RecordKeys.EXISTS)

    @property
    def is_reference(self) -> bool:
        return Defaults.REFERENCE_SEPARATOR in self.name


class DocumentRecord(BaseModel):
    """One document entry of the project."""
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., alias=RecordKeys.PATH, min_length=1)
    options: FileOptions = Field(FileOptions.NONE, alias=RecordKeys.OPTIONS)
    field_entries: List[FieldRecord] = Field(default_factory=list, alias=RecordKeys.FIELDS)

    @field_validator('options', mode='before')
    @classmethod
    def parse_options(cls, v):
        """File options are stored by name, e.g. "ReferencesOnly"."""
        if v is None:
            return FileOptions.NONE
        if isinstance(v, str):
            return parse_flags(FileOptions, v, FileOptions.NONE)
        return v


class OptionsRecord(BaseModel):
    """Project options section."""
    model_config = ConfigDict(populate_by_name=True)

    localizable_attributes: Optional[List[str]] = Field(None, alias=RecordKeys.LOCALIZABLE_ATTRIBUTES)
    localizable_attributes_by_tag: Optional[Dict[str, List[str]]] = Field(
        None, alias=RecordKeys.LOCALIZABLE_ATTRIBUTES_BY_TAG)

    @field_validator('localizable_attributes', mode='before')
    @classmethod
    def parse_attribute_list(cls, v):
        return split_string_list(v)

    @field_validator('localizable_attributes_by_tag', mode='before')
    @classmethod
    def parse_attribute_lists_by_tag(cls, v):
        if isinstance(v, dict):
            return {tag: split_string_list(names) for tag, names in v.items()}
        return v


class ProjectRecord(BaseModel):
    """Top-level project record."""
    model_config = ConfigDict(populate_by_name=True)

    options: OptionsRecord = Field(default_factory=OptionsRecord, alias=RecordKeys.OPTIONS)
    files: List[DocumentRecord] = Field(default_factory=list, alias=RecordKeys.FILES)


# ============================================================================
# Validation Results
# ============================================================================

@dataclass
class ValidationResult:
    """Results from record validation."""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    validated_count: int = 0

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)


def validate_record(record: ProjectRecord) -> ValidationResult:
    """
    Check the invariants the schema cannot express.

    Document paths must be unique (case-insensitive) and field names unique
    within a document. Values stored on reference fields are reported as
    warnings since they are never used.

    Args:
        record: Decoded project record

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()
    seen_paths = {}

    for document in record.files:
        result.validated_count += 1
        key = document.path.lower()
        if key in seen_paths:
            result.add_error(f"Duplicate document path '{document.path}' (already declared as '{seen_paths[key]}')")
        else:
            seen_paths[key] = document.path

        seen_names = set()
        for field_record in document.field_entries:
            if field_record.name in seen_names:
                result.add_error(f"Duplicate field '{field_record.name}' in '{document.path}'")
            seen_names.add(field_record.name)

            if field_record.is_reference and field_record.values:
                result.add_warning(f"Reference field '{field_record.name}' in '{document.path}' "
                                   f"has values; they are ignored")

    return result


def parse_project_record(text: str, record_path: Optional[Path] = None) -> ProjectRecord:
    """
    Decode and validate a project record.

    Args:
        text: JSON text of the record
        record_path: Path the text was read from, for error messages

    Returns:
        Validated ProjectRecord

    Raises:
        ProjectRecordError: If the text is not valid JSON or fails validation
    """
    try:
        data = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise ProjectRecordError(f"Invalid JSON: {e}", record_path) from e

    if not isinstance(data, dict):
        raise ProjectRecordError("Project record must be a JSON object", record_path)

    try:
        record = ProjectRecord.model_validate(data)
    except PydanticValidationError as e:
        errors = [f"{error['msg']} at {error['loc']}" for error in e.errors()]
        raise ProjectRecordError("Invalid project record", record_path, errors) from e

    result = validate_record(record)
    for warning in result.warnings:
        logger.warning(warning)
    if not result.valid:
        raise ProjectRecordError("Invalid project record", record_path, result.errors)

    logger.debug(f"Validated project record with {result.validated_count} documents")
    return record
