"""Project-wide localization options."""

from typing import Dict, Iterable, List, Optional

from html_localizer.core.constants import Defaults


class ProjectOptions:
    """Which attributes are translated by default, and per-tag overrides."""

    def __init__(self, localizable_attributes: Optional[Iterable[str]] = None,
                 localizable_attributes_by_tag: Optional[Dict[str, Iterable[str]]] = None):
        if localizable_attributes is None:
            localizable_attributes = Defaults.LOCALIZABLE_ATTRIBUTES
        if localizable_attributes_by_tag is None:
            localizable_attributes_by_tag = dict(Defaults.LOCALIZABLE_ATTRIBUTES_BY_TAG)

        self.localizable_attributes: List[str] = _unique(localizable_attributes)
        self.localizable_attributes_by_tag: Dict[str, List[str]] = {
            tag.lower(): _unique(names)
            for tag, names in localizable_attributes_by_tag.items()
        }

    def attributes_for_tag(self, tag_name: str) -> Optional[List[str]]:
        """Tag-specific override list, or ``None`` when the tag has none."""
        if not tag_name:
            return None
        return self.localizable_attributes_by_tag.get(tag_name.lower())

    def set_attributes_for_tag(self, tag_name: str, attribute_names: Iterable[str]) -> None:
        if not tag_name:
            raise ValueError("Tag name is required")
        self.localizable_attributes_by_tag[tag_name.lower()] = _unique(attribute_names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectOptions):
            return NotImplemented
        return (self.localizable_attributes == other.localizable_attributes
                and self.localizable_attributes_by_tag == other.localizable_attributes_by_tag)

    def __repr__(self) -> str:
        return (f"ProjectOptions(localizable_attributes={self.localizable_attributes!r}, "
                f"localizable_attributes_by_tag={self.localizable_attributes_by_tag!r})")


def _unique(names: Iterable[str]) -> List[str]:
    result = []
    for name in names:
        name = name.strip()
        if name and name not in result:
            result.append(name)
    return result
