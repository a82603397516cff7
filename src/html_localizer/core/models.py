"""Data model classes for field extraction and localization."""

from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from html_localizer.core.constants import Defaults, PseudoAttributes
from html_localizer.core.exceptions import ConfigurationError


class FileOptions(Flag):
    """Document-level options set through the ``loc:fileOptions`` marker."""
    NONE = 0
    REFERENCES_ONLY = 1


class ExtractFieldOptions(Flag):
    """Per-element extraction options set through the ``loc:options`` marker."""
    NONE = 0
    TRIM_INNER_HTML = 1
    DEFAULT = TRIM_INNER_HTML


class FileLayout(Enum):
    """Strategy for deriving a localized document's output path."""
    SUBDIRECTORY = "SubDirectory"
    EXTENSIONS = "Extensions"

    @classmethod
    def parse(cls, value: Union[str, 'FileLayout']) -> 'FileLayout':
        """
        Parse a layout selector (case-insensitive).

        Raises:
            ConfigurationError: If the value names no known layout
        """
        if isinstance(value, FileLayout):
            return value

        for layout in cls:
            if value is not None and layout.value.lower() == str(value).strip().lower():
                return layout

        available = ", ".join(layout.value for layout in cls)
        raise ConfigurationError(f"Unknown file layout '{value}'. Available layouts: {available}",
                                 "file_layout")


F = TypeVar('F', bound=Flag)

# Names as they appear in markup and in the project record
_FLAG_NAMES: Dict[type, Tuple[Tuple[str, Flag], ...]] = {
    FileOptions: (
        ("None", FileOptions.NONE),
        ("ReferencesOnly", FileOptions.REFERENCES_ONLY),
    ),
    ExtractFieldOptions: (
        ("None", ExtractFieldOptions.NONE),
        ("TrimInnerHtml", ExtractFieldOptions.TRIM_INNER_HTML),
        ("Default", ExtractFieldOptions.DEFAULT),
    ),
}


def parse_flags(flag_type: Type[F], value: Optional[str], default: F) -> F:
    """
    Parse a comma-separated list of flag names.

    Names are matched case-insensitively. An empty or missing value yields
    ``default``.

    Raises:
        ValueError: If a token names no member of ``flag_type``
    """
    if value is None:
        return default

    names = {name.lower(): flag for name, flag in _FLAG_NAMES[flag_type]}
    result = None
    for token in value.split(Defaults.LIST_SEPARATOR):
        token = token.strip()
        if not token:
            continue
        flag = names.get(token.lower())
        if flag is None:
            raise ValueError(f"Unknown {flag_type.__name__} value: '{token}'")
        result = flag if result is None else result | flag

    return default if result is None else result


def format_flags(flags: Flag) -> Optional[str]:
    """Format flags the way the project record stores them; ``None`` when empty."""
    if not flags:
        return None

    names = []
    covered = type(flags).NONE
    for name, flag in _FLAG_NAMES[type(flags)]:
        if flag and flag in flags and flag not in covered:
            names.append(name)
            covered |= flag
    return ", ".join(names)


def normalize_attribute_name(name: str) -> str:
    """Canonical spelling of an attribute name: pseudo attributes keep their case."""
    lowered = name.strip().lower()
    for pseudo in (PseudoAttributes.INNER_TEXT, PseudoAttributes.INNER_HTML,
                   PseudoAttributes.INNER_TEXT_OR_INNER_HTML):
        if lowered == pseudo.lower():
            return pseudo
    return lowered


@dataclass
class Field:
    """A translatable unit extracted from one element."""
    name: str
    sort_order: int = Defaults.NO_SORT_ORDER
    source_html: Optional[str] = None
    exists: bool = True
    document_path: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Field name is required")

    @property
    def is_reference(self) -> bool:
        return False

    @staticmethod
    def create(name: str, **kwargs) -> 'Field':
        """Build a ``ReferenceField`` when ``name`` encodes a reference, else a ``DirectField``."""
        if not name:
            raise ValueError("Field name is required")
        if Defaults.REFERENCE_SEPARATOR in name:
            kwargs.pop('values', None)
            return ReferenceField(name, **kwargs)
        return DirectField(name, **kwargs)


@dataclass
class DirectField(Field):
    """Field carrying its own attribute -> culture -> text table."""
    values: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        if Defaults.REFERENCE_SEPARATOR in self.name:
            raise ValueError(f"Field name '{self.name}' is a reference; use ReferenceField")

    def set_value(self, culture: str, attribute: str, value: str) -> None:
        if culture is None:
            raise ValueError("Culture is required")
        if not attribute:
            raise ValueError("Attribute name is required")

        self.values.setdefault(normalize_attribute_name(attribute), {})[culture] = value

    def get_value(self, culture: str, attribute: str) -> Optional[str]:
        """Return the stored text for (attribute, culture), or ``None``."""
        if culture is None:
            raise ValueError("Culture is required")
        if not attribute:
            raise ValueError("Attribute name is required")

        localizations = self.values.get(normalize_attribute_name(attribute))
        if localizations is None:
            return None
        return localizations.get(culture)

    def merge_values(self, other: 'DirectField') -> None:
        """Overwrite every (attribute, culture) pair present in ``other``; keep the rest."""
        if other is None:
            raise ValueError("Field to merge is required")

        for attribute, localizations in other.values.items():
            for culture, text in localizations.items():
                self.set_value(culture, attribute, text)

    def cultures(self) -> List[str]:
        seen = []
        for localizations in self.values.values():
            for culture in localizations:
                if culture not in seen:
                    seen.append(culture)
        return seen


@dataclass
class ReferenceField(Field):
    """Field whose name points at ``target_path#target_name``."""
    target_path: str = field(init=False, default="")
    target_name: str = field(init=False, default="")

    def __post_init__(self):
        super().__post_init__()
        path, separator, target_name = self.name.partition(Defaults.REFERENCE_SEPARATOR)
        if not separator:
            raise ValueError(f"Field name '{self.name}' is not a reference")
        self.target_path = path
        self.target_name = target_name

    @property
    def is_reference(self) -> bool:
        return True


class FieldCollection:
    """Ordered, name-indexed list of the fields of one document."""

    def __init__(self, fields: Optional[List[Field]] = None):
        self._fields: List[Field] = []
        for item in fields or []:
            self.append(item)

    def find(self, name: str) -> Optional[Field]:
        if name is None:
            raise ValueError("Field name is required")

        return next((f for f in self._fields if f.name == name), None)

    def append(self, item: Field) -> None:
        if item is None:
            raise ValueError("Field is required")
        self._fields.append(item)

    def __getitem__(self, key: Union[int, str]) -> Optional[Field]:
        if isinstance(key, str):
            return self.find(key)
        return self._fields[key]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.find(item) is not None
        return item in self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldCollection({[f.name for f in self._fields]!r})"
