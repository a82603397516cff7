"""Field extraction: discovers translatable elements in a parsed HTML tree."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from bs4 import PageElement, Tag

from html_localizer.core.constants import Defaults, Markers, PseudoAttributes
from html_localizer.core.models import (
    DirectField, ExtractFieldOptions, Field, FileOptions,
    normalize_attribute_name, parse_flags,
)
from html_localizer.core.options import ProjectOptions
from html_localizer.parsers.html_parser import (
    get_inner_html, get_inner_text, get_marker, get_source_html,
    has_child_elements, is_void_element, iter_breadth_first,
)
from html_localizer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """Fields found in one pass, in document order, plus the resulting file options."""
    fields: List[Field] = field(default_factory=list)
    file_options: FileOptions = FileOptions.NONE


class FieldExtractor:
    """Extractor for the fields of one document."""

    def __init__(self, options: Optional[ProjectOptions] = None):
        """
        Initialize field extractor.

        Args:
            options: Project options; library defaults when not provided
        """
        self.options = options or ProjectOptions()

    def extract(self, nodes: Iterable[PageElement], document_path: Optional[str] = None,
                file_options: FileOptions = FileOptions.NONE,
                culture: str = Defaults.INVARIANT_CULTURE) -> ExtractionResult:
        """
        Extract every field under ``nodes``.

        Each top-level node is walked breadth-first on its own, in document
        order, so a later sibling's subtree comes after an earlier one's.

        Args:
            nodes: Top-level nodes of the document
            document_path: Path of the owning document, recorded on each field
            file_options: Document options before this pass
            culture: Culture the captured values are stored under

        Returns:
            ExtractionResult with fields in traversal order
        """
        result = ExtractionResult(file_options=file_options)
        log = logger.for_document(document_path)

        for top_level_node in list(nodes):
            for node in iter_breadth_first([top_level_node]):
                if not isinstance(node, Tag):
                    continue

                file_options_value = get_marker(node, Markers.FILE_OPTIONS)
                if file_options_value is not None:
                    try:
                        result.file_options = parse_flags(FileOptions, file_options_value, FileOptions.NONE)
                    except ValueError as e:
                        log.warning(f"Ignoring file options on <{node.name}>: {e}")

                extracted = self.extract_field(node, culture, document_path)
                if extracted is not None:
                    log.debug(f"Extracted field '{extracted.name}' from <{node.name}>")
                    result.fields.append(extracted)

        return result

    def extract_field(self, element: Tag, culture: str = Defaults.INVARIANT_CULTURE,
                      document_path: Optional[str] = None) -> Optional[Field]:
        """
        Build the field for a single element.

        Returns:
            The field, or None when the element carries no ``loc:name``
        """
        if element is None:
            raise ValueError("Element is required")
        if culture is None:
            raise ValueError("Culture is required")

        name = get_marker(element, Markers.NAME)
        if name is None or not name.strip():
            return None

        extracted = Field.create(name, source_html=get_source_html(element),
                                 document_path=document_path)
        if not isinstance(extracted, DirectField):
            return extracted

        options = self._get_extract_options(element)
        trim = ExtractFieldOptions.TRIM_INNER_HTML in options

        for attribute_name in self.get_localizable_attribute_names(element):
            if attribute_name == PseudoAttributes.INNER_TEXT_OR_INNER_HTML:
                if has_child_elements(element):
                    attribute_name = PseudoAttributes.INNER_HTML
                else:
                    attribute_name = PseudoAttributes.INNER_TEXT

            if attribute_name == PseudoAttributes.INNER_HTML:
                value = get_inner_html(element)
                extracted.set_value(culture, attribute_name, value.strip() if trim else value)
            elif attribute_name == PseudoAttributes.INNER_TEXT:
                value = get_inner_text(element)
                extracted.set_value(culture, attribute_name, value.strip() if trim else value)
            else:
                value = element.get(attribute_name)
                if value is not None:
                    extracted.set_value(culture, attribute_name, value)

        return extracted

    def get_localizable_attribute_names(self, element: Tag) -> List[str]:
        """
        Attribute names to capture for ``element``.

        An explicit ``loc:attributes`` list wins. Otherwise the tag override
        list or the default list is used, preceded by the inner content
        sentinel unless the element is void.
        """
        explicit = get_marker(element, Markers.ATTRIBUTES)
        if explicit is not None:
            return [normalize_attribute_name(name)
                    for name in explicit.split(Defaults.LIST_SEPARATOR) if name.strip()]

        names = self.options.attributes_for_tag(element.name)
        if names is None:
            names = self.options.localizable_attributes
        names = [normalize_attribute_name(name) for name in names]

        if is_void_element(element):
            return names
        return [PseudoAttributes.INNER_TEXT_OR_INNER_HTML] + names

    def _get_extract_options(self, element: Tag) -> ExtractFieldOptions:
        value = get_marker(element, Markers.OPTIONS)
        try:
            return parse_flags(ExtractFieldOptions, value, ExtractFieldOptions.DEFAULT)
        except ValueError as e:
            logger.warning(f"Using default options for field '{get_marker(element, Markers.NAME)}': {e}")
            return ExtractFieldOptions.DEFAULT
