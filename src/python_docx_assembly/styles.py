"""
StyleCatalog class for reading word/styles.xml in OOXML packages.

The catalog is parsed once when a document is opened and is never written
back: the package keeps its styles part byte-for-byte.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree
from rapidfuzz import fuzz, process

from .constants import STYLES_PATH, w
from .models.style import Style, StyleType

logger = logging.getLogger(__name__)


class StyleCatalog:
    """Read-only table of the style definitions of a package.

    Example:
        >>> catalog = StyleCatalog.from_package_dir(package.temp_dir)
        >>> catalog.default_style_for(StyleType.PARAGRAPH).name
        'Normal'
        >>> catalog.lookup("heading 1", StyleType.PARAGRAPH).style_id
        'Heading1'
    """

    def __init__(self, styles: list[Style] | None = None) -> None:
        self._styles: list[Style] = []
        self._defaults: dict[StyleType, Style] = {}
        for style in styles or []:
            self._add(style)

    @classmethod
    def from_package_dir(cls, package_dir: Path) -> StyleCatalog:
        """Parse word/styles.xml from an unpacked package.

        A package without a styles part yields an empty catalog.
        """
        styles_path = Path(package_dir) / STYLES_PATH
        if not styles_path.exists():
            logger.debug(f"No styles part at {styles_path}, using an empty catalog")
            return cls()

        parser = etree.XMLParser(remove_blank_text=False)
        root = etree.parse(str(styles_path), parser).getroot()
        logger.debug(f"Loaded styles from {styles_path}")
        return cls.from_xml(root)

    @classmethod
    def from_xml(cls, root: etree._Element) -> StyleCatalog:
        """Build a catalog from a parsed w:styles element."""
        catalog = cls()
        for style_elem in root.findall(w("style")):
            style = cls._element_to_style(style_elem)
            if style is not None:
                catalog._add(style)
        return catalog

    @staticmethod
    def _element_to_style(element: etree._Element) -> Style | None:
        """Convert a w:style XML element to a Style record.

        Returns:
            A Style, or None if the element lacks a styleId
        """
        style_id = element.get(w("styleId"))
        if not style_id:
            logger.warning("Skipping style element without styleId attribute")
            return None

        style_type_str = element.get(w("type"), "paragraph")
        try:
            style_type = StyleType(style_type_str)
        except ValueError:
            logger.warning(f"Unknown style type '{style_type_str}' for {style_id}")
            style_type = StyleType.PARAGRAPH

        name_elem = element.find(w("name"))
        name = name_elem.get(w("val"), style_id) if name_elem is not None else style_id

        based_on_elem = element.find(w("basedOn"))
        based_on = based_on_elem.get(w("val")) if based_on_elem is not None else None

        # w:default is an ST_OnOff: "1", "true" and "on" all mean true
        is_default = element.get(w("default"), "0").lower() in ("1", "true", "on")

        return Style(
            style_id=style_id,
            name=name,
            style_type=style_type,
            is_default=is_default,
            based_on=based_on,
        )

    def _add(self, style: Style) -> None:
        if style.is_default:
            if style.style_type in self._defaults:
                logger.warning(
                    f"Second default {style.style_type.value} style {style.style_id!r} "
                    f"ignored, keeping {self._defaults[style.style_type].style_id!r}"
                )
                style = Style(
                    style_id=style.style_id,
                    name=style.name,
                    style_type=style.style_type,
                    is_default=False,
                    based_on=style.based_on,
                )
            else:
                self._defaults[style.style_type] = style
        self._styles.append(style)

    @property
    def styles(self) -> list[Style]:
        """All style records in file order."""
        return list(self._styles)

    def default_style_for(self, style_type: StyleType | str) -> Style | None:
        """Return the default style of a type, or None when there is none."""
        return self._defaults.get(StyleType(style_type))

    @property
    def default_styles(self) -> dict[str, str]:
        """Map each style type value to the name of its default style."""
        return {style_type.value: style.name for style_type, style in self._defaults.items()}

    def lookup(self, name: str, style_type: StyleType | str) -> Style | None:
        """Find a style by display name and type."""
        style_type = StyleType(style_type)
        for style in self._styles:
            if style.name == name and style.style_type == style_type:
                return style
        return None

    def get(self, style_id: str) -> Style | None:
        """Find a style by its identifier."""
        for style in self._styles:
            if style.style_id == style_id:
                return style
        return None

    def names(self, style_type: StyleType | str | None = None) -> list[str]:
        """Display names of all styles, optionally restricted to one type."""
        if style_type is None:
            return [style.name for style in self._styles]
        style_type = StyleType(style_type)
        return [style.name for style in self._styles if style.style_type == style_type]

    def __len__(self) -> int:
        return len(self._styles)

    def __iter__(self):
        return iter(self._styles)

    def similar_names(
        self, name: str, style_type: StyleType | str | None = None, limit: int = 3
    ) -> list[str]:
        """Existing style names close to a misspelled one.

        Uses rapidfuzz ratio scoring; names scoring below 60 are dropped.
        """
        matches = process.extract(
            name,
            self.names(style_type),
            scorer=fuzz.ratio,
            limit=limit,
            score_cutoff=60,
        )
        return [match[0] for match in matches]
