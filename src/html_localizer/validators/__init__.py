"""Project record validation."""

from html_localizer.validators.record_validator import (
    ProjectRecord, ValidationResult, parse_project_record, validate_record
)

__all__ = ['ProjectRecord', 'ValidationResult', 'parse_project_record', 'validate_record']
