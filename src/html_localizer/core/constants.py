"""Constants module - centralized string literals and configuration values."""


class Markers:
    """Localization marker attributes recognized on HTML elements.

    ``html.parser`` lower-cases attribute names, so every marker is stored
    and compared in lower case.
    """
    PREFIX = "loc:"
    NAME = "loc:name"
    ATTRIBUTES = "loc:attributes"
    OPTIONS = "loc:options"
    FILE_OPTIONS = "loc:fileoptions"


class PseudoAttributes:
    """Reserved attribute names that target element content."""
    INNER_TEXT = "innerText"
    INNER_HTML = "innerHtml"
    INNER_TEXT_OR_INNER_HTML = "innerTextOrInnerHtml"

    CONTENT = frozenset({INNER_TEXT, INNER_HTML})


class HTMLElements:
    """HTML element names with special handling."""
    # https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    VOID = frozenset({
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "keygen", "link", "meta", "param", "source", "track", "wbr",
    })


class Defaults:
    """Default project values."""
    # https://developer.mozilla.org/en-US/docs/Web/HTML/Attributes
    LOCALIZABLE_ATTRIBUTES = ("title", "alt", "src", "srcset", "href", "placeholder")
    LOCALIZABLE_ATTRIBUTES_BY_TAG = (("meta", ("content",)),)

    INVARIANT_CULTURE = ""
    NO_SORT_ORDER = -1
    REFERENCE_SEPARATOR = "#"
    LIST_SEPARATOR = ","


class HTMLFiles:
    """File name patterns used while scanning a project directory."""
    EXTENSION = ".html"
    PARSER = "html.parser"


class RecordKeys:
    """Key names of the persisted project record."""
    OPTIONS = "Options"
    FILES = "Files"
    LOCALIZABLE_ATTRIBUTES = "LocalizableAttributes"
    LOCALIZABLE_ATTRIBUTES_BY_TAG = "LocalizableAttributesByTag"
    PATH = "Path"
    FIELDS = "Fields"
    NAME = "Name"
    SORT_ORDER = "SortOrder"
    SOURCE_HTML = "SourceHtml"
    VALUES = "Values"
    EXISTS = "Exists"


class Encodings:
    """Character encodings to try when reading HTML files."""
    PREFERRED_ORDER = ['utf-8-sig', 'cp1252']
    FALLBACK = 'latin-1'
    OUTPUT = 'utf-8'


class LogLevels:
    """Logging level constants."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    ALL = (DEBUG, INFO, WARNING, ERROR, CRITICAL)
