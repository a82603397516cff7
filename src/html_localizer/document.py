"""HTML document: extraction, merge and rendering for one file of a project."""

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from bs4 import BeautifulSoup

from html_localizer.core.constants import Defaults
from html_localizer.core.models import DirectField, Field, FieldCollection, FileOptions, ReferenceField
from html_localizer.core.options import ProjectOptions
from html_localizer.extractors.field_extractor import FieldExtractor
from html_localizer.parsers.html_parser import parse_html, read_html_file
from html_localizer.renderers.localizer import DocumentLocalizer
from html_localizer.utils.logger import get_logger

if TYPE_CHECKING:
    from html_localizer.project import Project

logger = get_logger(__name__)


class HtmlDocument:
    """One HTML file of a project, with its fields and parsed tree."""

    def __init__(self, path: Optional[str] = None, project: Optional['Project'] = None,
                 options: FileOptions = FileOptions.NONE):
        """
        Initialize document.

        Args:
            path: Path relative to the project base directory, forward slashes
            project: Owning project, used for options and cross-document references
            options: File-level options
        """
        self.path = path
        self.project = project
        self.options = options
        self.fields = FieldCollection()
        self.tree: Optional[BeautifulSoup] = None

    @property
    def project_options(self) -> ProjectOptions:
        if self.project is not None:
            return self.project.options
        return ProjectOptions()

    def load_html(self, html: Optional[str] = None) -> None:
        """
        Parse markup into the document tree.

        Without ``html`` the file at ``path`` is read, relative to the project
        base directory when there is one. A missing file leaves the tree unset.
        """
        if html is not None:
            self.tree = parse_html(html)
            return

        if not self.path:
            return

        full_path = Path(self.path)
        if self.project is not None and self.project.base_directory is not None:
            full_path = Path(self.project.base_directory) / self.path

        if not full_path.is_file():
            logger.warning(f"Markup not found for {self.path}: {full_path}")
            return

        self.tree = parse_html(read_html_file(full_path))

    def extract_fields(self) -> List[Field]:
        """
        Extract fields from the current tree and merge them into ``fields``.

        Existing fields not seen in this pass are kept with ``exists = False``.
        Fields seen again keep their translations; only the values captured
        in this pass are overwritten.

        Returns:
            The freshly extracted fields, in document order
        """
        if self.tree is None:
            return []

        for existing in self.fields:
            existing.exists = False

        extractor = FieldExtractor(self.project_options)
        result = extractor.extract(list(self.tree.contents), self.path, self.options)
        self.options = result.file_options

        added = 0
        for sort_order, extracted in enumerate(result.fields):
            extracted.sort_order = sort_order

            existing = self.fields.find(extracted.name)
            if existing is None:
                self.fields.append(extracted)
                added += 1
                continue

            existing.exists = True
            existing.sort_order = sort_order
            existing.source_html = extracted.source_html
            if isinstance(existing, DirectField) and isinstance(extracted, DirectField):
                existing.merge_values(extracted)

        logger.debug(f"{self.path}: {len(result.fields)} fields extracted, {added} new, "
                     f"{sum(1 for f in self.fields if not f.exists)} missing")
        return result.fields

    def resolve_reference(self, field: Field) -> Optional[Field]:
        """
        Resolve a reference field to its target.

        A single hop is made: a target that is itself a reference is returned
        unchanged. Paths must match a project document path exactly.

        Returns:
            The target field, or None when the document or field is missing
        """
        if not isinstance(field, ReferenceField):
            return None

        if not field.target_path:
            return self.fields.find(field.target_name)

        if self.project is None:
            return None

        target_document = self.project.get_document(field.target_path)
        if target_document is None:
            return None
        return target_document.fields.find(field.target_name)

    def can_localize(self) -> bool:
        return FileOptions.REFERENCES_ONLY not in self.options

    def localize(self, culture: str) -> Optional[str]:
        """
        Render the document with the translations of ``culture``.

        Returns:
            Localized HTML, or None for reference-only documents
        """
        return DocumentLocalizer(self).render(culture)

    def cultures(self) -> List[str]:
        found = []
        for item in self.fields:
            if isinstance(item, DirectField):
                for culture in item.cultures():
                    if culture != Defaults.INVARIANT_CULTURE and culture not in found:
                        found.append(culture)
        return found

    def __repr__(self) -> str:
        return f"HtmlDocument(path={self.path!r}, fields={len(self.fields)})"
