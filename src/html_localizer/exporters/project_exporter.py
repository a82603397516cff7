"""Export a project to its JSON record."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from html_localizer.core.constants import Defaults, Encodings, RecordKeys
from html_localizer.core.exceptions import ExportError
from html_localizer.core.models import DirectField, Field, format_flags
from html_localizer.core.options import ProjectOptions
from html_localizer.utils.logger import get_logger

if TYPE_CHECKING:
    from html_localizer.document import HtmlDocument
    from html_localizer.project import Project

logger = get_logger(__name__)


def _join(names: List[str]) -> str:
    return ", ".join(names)


def serialize_options(options: ProjectOptions) -> dict:
    """Serialize project options; attribute lists are written as comma-joined strings."""
    return {
        RecordKeys.LOCALIZABLE_ATTRIBUTES: _join(options.localizable_attributes),
        RecordKeys.LOCALIZABLE_ATTRIBUTES_BY_TAG: {
            tag: _join(names) for tag, names in options.localizable_attributes_by_tag.items()
        },
    }


def serialize_field(field: Field) -> dict:
    """
    Serialize one field, omitting default values.

    Reference fields carry no value table.
    """
    field_data = {RecordKeys.NAME: field.name}

    if field.sort_order != Defaults.NO_SORT_ORDER:
        field_data[RecordKeys.SORT_ORDER] = field.sort_order
    if field.source_html is not None:
        field_data[RecordKeys.SOURCE_HTML] = field.source_html
    if isinstance(field, DirectField):
        field_data[RecordKeys.VALUES] = {
            attribute: dict(localizations)
            for attribute, localizations in field.values.items()
        }
    if not field.exists:
        field_data[RecordKeys.EXISTS] = False

    return field_data


def serialize_document(document: 'HtmlDocument') -> dict:
    document_data = {RecordKeys.PATH: document.path}

    options = format_flags(document.options)
    if options is not None:
        document_data[RecordKeys.OPTIONS] = options

    document_data[RecordKeys.FIELDS] = [serialize_field(f) for f in document.fields]
    return document_data


def serialize_project(project: 'Project') -> dict:
    return {
        RecordKeys.OPTIONS: serialize_options(project.options),
        RecordKeys.FILES: [serialize_document(d) for d in project.documents],
    }


def dumps_project(project: 'Project') -> str:
    return json.dumps(serialize_project(project), indent=2, ensure_ascii=False)


def export_project(project: 'Project', output_path: Path) -> None:
    """
    Write the project record to ``output_path``, creating parent directories.

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    logger.info(f"Saving project with {len(project.documents)} documents to {output_path}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(dumps_project(project), encoding=Encodings.OUTPUT)
    except OSError as e:
        raise ExportError(str(e), output_path, "JSON") from e

    logger.info(f"Successfully saved {output_path}")


def project_summary(project: 'Project') -> Dict[str, int]:
    """Count documents, fields and translations of a project."""
    fields = [f for document in project.documents for f in document.fields]
    return {
        'documents': len(project.documents),
        'reference_only_documents': sum(1 for d in project.documents if not d.can_localize()),
        'fields': len(fields),
        'missing_fields': sum(1 for f in fields if not f.exists),
        'reference_fields': sum(1 for f in fields if f.is_reference),
        'cultures': len(project.cultures()),
    }


def print_summary(project: 'Project', written: Optional[Dict[str, List[Path]]] = None):
    """Print summary statistics of a project and of the files written."""
    summary = project_summary(project)

    print("\n" + "=" * 60)
    print("LOCALIZATION SUMMARY")
    print("=" * 60)
    print(f"Documents: {summary['documents']}")
    print(f"  - Reference only: {summary['reference_only_documents']}")
    print(f"Fields: {summary['fields']}")
    print(f"  - References: {summary['reference_fields']}")
    print(f"  - Missing from markup: {summary['missing_fields']}")
    print(f"Cultures: {', '.join(project.cultures()) or '(none)'}")
    if written is not None:
        print()
        print("Files written:")
        for culture, paths in written.items():
            print(f"  {culture}: {len(paths)}")
    print("=" * 60)
    print()
