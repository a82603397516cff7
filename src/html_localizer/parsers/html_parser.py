"""HTML parsing, traversal and serialization helpers built on BeautifulSoup."""

import copy
from collections import deque
from pathlib import Path
from typing import Iterable, Iterator, Optional

from bs4 import BeautifulSoup, PageElement, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from html_localizer.core.constants import Encodings, HTMLElements, HTMLFiles, Markers
from html_localizer.core.exceptions import MissingFileError, ParsingError
from html_localizer.utils.logger import get_logger

logger = get_logger(__name__)

class SourceFormatter(HTMLFormatter):
    """Writes markup the way it was parsed: attributes in source order, void elements without ``/>``."""

    def __init__(self):
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml,
                         void_element_close_prefix=None)

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


OUTPUT_FORMATTER = SourceFormatter()


def parse_html(markup: str) -> BeautifulSoup:
    """
    Parse an HTML document or fragment.

    ``html.parser`` keeps the source structure as written (no synthesized
    ``html``/``head``/``body``), so the top-level nodes of the result are
    exactly the top-level nodes of ``markup``. Attribute values are kept as
    plain strings, including ``class``.

    Args:
        markup: HTML text

    Returns:
        BeautifulSoup object
    """
    if markup is None:
        raise ValueError("Markup is required")

    return BeautifulSoup(markup, HTMLFiles.PARSER, multi_valued_attributes=None)


def read_html_file(file_path: Path) -> str:
    """
    Read an HTML file as text.

    Args:
        file_path: Path to HTML file

    Returns:
        File content

    Raises:
        MissingFileError: If file doesn't exist
        ParsingError: If the file cannot be read
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise MissingFileError(file_path, "Required for parsing")

    for encoding in Encodings.PREFERRED_ORDER:
        try:
            return file_path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            logger.debug(f"Could not decode {file_path} as {encoding}")
            continue
        except OSError as e:
            raise ParsingError(f"Failed to read HTML file: {e}", file_path) from e

    logger.warning(f"Falling back to {Encodings.FALLBACK} for {file_path}")
    return file_path.read_text(encoding=Encodings.FALLBACK)


def clone_document(soup: BeautifulSoup) -> BeautifulSoup:
    """Deep copy of every top-level node into a fresh, detached document."""
    clone = parse_html("")
    for node in soup.contents:
        clone.append(copy.copy(node))
    return clone


def clone_element(element: Tag) -> Tag:
    return copy.copy(element)


def serialize(node: PageElement) -> str:
    if isinstance(node, Tag):
        return node.decode(formatter=OUTPUT_FORMATTER)
    return node.output_ready(formatter=OUTPUT_FORMATTER)


def iter_breadth_first(nodes: Iterable[PageElement]) -> Iterator[PageElement]:
    """
    Walk nodes breadth-first.

    Children are read after the parent has been yielded, so changes made to
    a node by the consumer are reflected in what gets visited next.
    """
    queue = deque(nodes)
    while queue:
        node = queue.popleft()
        yield node
        if isinstance(node, Tag):
            queue.extend(list(node.contents))


def is_void_element(element: Tag) -> bool:
    return element.name.lower() in HTMLElements.VOID


def has_child_elements(element: Tag) -> bool:
    return any(isinstance(child, Tag) for child in element.children)


def get_inner_html(element: Tag) -> str:
    return element.decode_contents(formatter=OUTPUT_FORMATTER)


def get_inner_text(element: Tag) -> str:
    return element.get_text()


def set_inner_html(element: Tag, markup: str) -> None:
    fragment = parse_html(markup)
    element.clear()
    for child in list(fragment.contents):
        element.append(child.extract())


def set_inner_text(element: Tag, text: str) -> None:
    element.string = text


def get_marker(element: Tag, marker: str) -> Optional[str]:
    """Value of a ``loc:`` marker attribute, matched case-insensitively."""
    value = element.attrs.get(marker)
    if value is not None:
        return value

    for name, attribute_value in element.attrs.items():
        if name.lower() == marker:
            return attribute_value
    return None


def remove_localization_attributes(element: Tag) -> None:
    for name in list(element.attrs):
        if name.lower().startswith(Markers.PREFIX):
            del element[name]


def get_source_html(element: Tag) -> str:
    """Serialized copy of ``element`` without its localization markers."""
    clone = clone_element(element)
    remove_localization_attributes(clone)
    return serialize(clone)
