"""
Page geometry of a document section.

A section is a body region delimited by a w:sectPr element. Its page size
(w:pgSz) and margins (w:pgMar) are stored in twentieths of a point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

from lxml import etree

from python_docx_assembly.constants import TWIPS_PER_INCH, w

logger = logging.getLogger(__name__)


def _int_attr(element: etree._Element | None, name: str) -> int:
    if element is None:
        return 0
    value = element.get(w(name))
    if value is None:
        return 0
    try:
        return int(float(value))
    except ValueError:
        logger.warning(f"Malformed {etree.QName(element).localname}/@w:{name} value {value!r}, reading it as 0")
        return 0


@dataclass(frozen=True)
class SectionGeometry:
    """Page size, orientation and margins of one section.

    Lengths are in twentieths of a point as read from the document; use
    `to_inches()` to convert. A missing section or attribute reads as 0.

    Attributes:
        page_width: Page width (w:pgSz/@w:w)
        page_height: Page height (w:pgSz/@w:h)
        landscape: True when w:pgSz/@w:orient is "landscape"
        margin_top, margin_bottom, margin_left, margin_right: Page margins
        margin_header, margin_footer: Header and footer distances
    """

    page_width: float = 0
    page_height: float = 0
    landscape: bool = False
    margin_top: float = 0
    margin_bottom: float = 0
    margin_left: float = 0
    margin_right: float = 0
    margin_header: float = 0
    margin_footer: float = 0

    @classmethod
    def from_node(cls, sect_pr: etree._Element | None) -> SectionGeometry:
        """Read the geometry of a w:sectPr element.

        Args:
            sect_pr: The section properties element, or None

        Returns:
            The section geometry; all zeros when sect_pr is None
        """
        if sect_pr is None:
            return cls()

        pg_sz = sect_pr.find(w("pgSz"))
        pg_mar = sect_pr.find(w("pgMar"))
        orient = pg_sz.get(w("orient")) if pg_sz is not None else None

        return cls(
            page_width=_int_attr(pg_sz, "w"),
            page_height=_int_attr(pg_sz, "h"),
            landscape=orient == "landscape",
            margin_top=_int_attr(pg_mar, "top"),
            margin_bottom=_int_attr(pg_mar, "bottom"),
            margin_left=_int_attr(pg_mar, "left"),
            margin_right=_int_attr(pg_mar, "right"),
            margin_header=_int_attr(pg_mar, "header"),
            margin_footer=_int_attr(pg_mar, "footer"),
        )

    def to_inches(self) -> SectionGeometry:
        """Return a copy with every length divided by 1440."""
        lengths = {
            f.name: getattr(self, f.name) / TWIPS_PER_INCH
            for f in fields(self)
            if f.name != "landscape"
        }
        return replace(self, **lengths)

    @property
    def page(self) -> dict[str, float]:
        return {"width": self.page_width, "height": self.page_height}

    @property
    def margins(self) -> dict[str, float]:
        return {
            "top": self.margin_top,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
            "right": self.margin_right,
            "header": self.margin_header,
            "footer": self.margin_footer,
        }
