"""
Style model classes for the Word style catalog.

These models are produced by StyleCatalog when it reads word/styles.xml and
are returned to callers by Document.styles_info().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StyleType(Enum):
    """Types of styles in Word documents.

    Attributes:
        PARAGRAPH: Applied to whole paragraphs
        CHARACTER: Applied to runs of text within paragraphs
        TABLE: Applied to tables
        NUMBERING: Applied to numbered/bulleted lists
    """

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


@dataclass(frozen=True)
class Style:
    """One record of the style catalog.

    Attributes:
        style_id: Internal style identifier used in document references
            (e.g., "Heading1")
        name: Display name shown in Word's UI (e.g., "heading 1")
        style_type: Type of style (paragraph, character, table, numbering)
        is_default: Whether this is the default style for its type
        based_on: style_id of parent style to inherit from

    Example:
        >>> Style("Heading1", "heading 1", StyleType.PARAGRAPH, based_on="Normal")
        <Style style_id='Heading1' name='heading 1' type=paragraph>
    """

    style_id: str
    name: str
    style_type: StyleType
    is_default: bool = False
    based_on: str | None = None

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "style_id": self.style_id,
            "style_name": self.name,
            "style_type": self.style_type.value,
            "is_default": self.is_default,
            "based_on": self.based_on,
        }

    def __repr__(self) -> str:
        """String representation of the style."""
        default = " default" if self.is_default else ""
        return (
            f"<Style style_id={self.style_id!r} name={self.name!r} "
            f"type={self.style_type.value}{default}>"
        )
