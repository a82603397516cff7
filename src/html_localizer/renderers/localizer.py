"""Rendering of localized documents."""

from typing import TYPE_CHECKING, Optional

from bs4 import Tag

from html_localizer.core.constants import Markers, PseudoAttributes
from html_localizer.core.models import DirectField
from html_localizer.parsers.html_parser import (
    clone_document, get_marker, is_void_element, iter_breadth_first,
    remove_localization_attributes, serialize, set_inner_html, set_inner_text,
)
from html_localizer.utils.logger import get_logger

if TYPE_CHECKING:
    from html_localizer.document import HtmlDocument

logger = get_logger(__name__)


class DocumentLocalizer:
    """Applies the translations of one culture to a copy of a document's tree."""

    def __init__(self, document: 'HtmlDocument'):
        self.document = document

    def render(self, culture: str) -> Optional[str]:
        """
        Render the document for ``culture``.

        Args:
            culture: Culture tag to look translations up for

        Returns:
            Serialized HTML, or None when the document is reference-only
        """
        if culture is None:
            raise ValueError("Culture is required")
        if not self.document.can_localize():
            return None
        if self.document.tree is None:
            logger.warning(f"No markup loaded for {self.document.path}; nothing to render")
            return None

        log = logger.for_document(self.document.path, culture)
        clone = clone_document(self.document.tree)

        applied = 0
        for node in iter_breadth_first(list(clone.contents)):
            if not isinstance(node, Tag):
                continue
            applied += self.localize_element(node, culture)
            remove_localization_attributes(node)

        log.debug(f"Applied {applied} translated values")
        return serialize(clone)

    def localize_element(self, element: Tag, culture: str) -> int:
        """Write the translations of the element's field into ``element``; returns the count applied."""
        name = get_marker(element, Markers.NAME)
        if name is None:
            return 0

        field = self.document.fields.find(name)
        if field is None:
            return 0

        if field.is_reference:
            target = self.document.resolve_reference(field)
            if target is None:
                logger.debug(f"Unresolved reference '{field.name}' in {self.document.path}")
                return 0
            field = target

        if not isinstance(field, DirectField):
            logger.debug(f"Reference '{name}' points at another reference; left untranslated")
            return 0

        applied = 0
        for attribute_name in list(field.values):
            if not self.can_localize_attribute(element, attribute_name):
                continue

            value = field.get_value(culture, attribute_name)
            if value is None:
                continue

            if attribute_name == PseudoAttributes.INNER_HTML:
                set_inner_html(element, value)
            elif attribute_name == PseudoAttributes.INNER_TEXT:
                set_inner_text(element, value)
            else:
                element[attribute_name] = value
            applied += 1

        return applied

    @staticmethod
    def can_localize_attribute(element: Tag, attribute_name: str) -> bool:
        if attribute_name in PseudoAttributes.CONTENT:
            return not is_void_element(element)
        return element.has_attr(attribute_name)
