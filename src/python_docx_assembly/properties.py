"""
CoreProperties class for docProps/core.xml.

Core properties are a flat table of document metadata (title, creator,
timestamps...). Each property is a child element of cp:coreProperties whose
local name is the property name; the namespace depends on the property
(Dublin Core, DC terms or the OOXML core-properties namespace).
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from lxml import etree

from .constants import (
    CORE_PROPERTIES_NAMESPACE,
    CORE_PROPERTIES_PATH,
    DC_NAMESPACE,
    DCTERMS_NAMESPACE,
    NSMAP_CORE,
    TIMESTAMP_FORMAT,
    XSI_NAMESPACE,
)

logger = logging.getLogger(__name__)

# Namespace of each recognized property
PROPERTY_NAMESPACES = {
    "title": DC_NAMESPACE,
    "subject": DC_NAMESPACE,
    "creator": DC_NAMESPACE,
    "description": DC_NAMESPACE,
    "language": DC_NAMESPACE,
    "identifier": DC_NAMESPACE,
    "keywords": CORE_PROPERTIES_NAMESPACE,
    "category": CORE_PROPERTIES_NAMESPACE,
    "contentStatus": CORE_PROPERTIES_NAMESPACE,
    "lastModifiedBy": CORE_PROPERTIES_NAMESPACE,
    "lastPrinted": CORE_PROPERTIES_NAMESPACE,
    "revision": CORE_PROPERTIES_NAMESPACE,
    "version": CORE_PROPERTIES_NAMESPACE,
    "created": DCTERMS_NAMESPACE,
    "modified": DCTERMS_NAMESPACE,
}

# Properties typed as W3C date-times
W3CDTF_PROPERTIES = frozenset({"created", "modified"})


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a UTC core-properties timestamp.

    Naive datetimes are taken to be UTC already.

    Example:
        >>> format_timestamp(datetime(2024, 1, 2, 3, 4, 5))
        '2024-01-02T03:04:05Z'
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


class CoreProperties:
    """Name -> value table over docProps/core.xml.

    Example:
        >>> props = CoreProperties(package.temp_dir)
        >>> props.set("title", "Quarterly report")
        >>> props.get("title")
        'Quarterly report'
        >>> props.save()
    """

    def __init__(self, package_dir: Path) -> None:
        """Load docProps/core.xml from an unpacked package.

        Args:
            package_dir: Working directory of the unpacked package
        """
        self._path = Path(package_dir) / CORE_PROPERTIES_PATH
        self._modified = False

        if self._path.exists():
            parser = etree.XMLParser(remove_blank_text=False)
            self._tree = etree.parse(str(self._path), parser)
            self._root = self._tree.getroot()
            logger.debug(f"Loaded core properties from {self._path}")
        else:
            self._root = etree.Element(
                f"{{{CORE_PROPERTIES_NAMESPACE}}}coreProperties", nsmap=NSMAP_CORE
            )
            self._tree = etree.ElementTree(self._root)
            self._modified = True
            logger.debug("Created empty core properties")

    @property
    def path(self) -> Path:
        return self._path

    def _find(self, name: str) -> etree._Element | None:
        for child in self._root:
            if isinstance(child.tag, str) and etree.QName(child).localname == name:
                return child
        return None

    def get(self, name: str) -> str | None:
        """Get the value of a property, or None when it is not set."""
        element = self._find(name)
        if element is None:
            return None
        return element.text or ""

    def set(self, name: str, value: str) -> None:
        """Set a property, creating its element when absent.

        Args:
            name: Property name (e.g., "title", "lastModifiedBy")
            value: Text value; W3C date-time properties are typed accordingly

        Raises:
            KeyError: If the property name is not a core property
        """
        element = self._find(name)
        if element is None:
            if name not in PROPERTY_NAMESPACES:
                raise KeyError(f"Unknown core property: {name}")
            element = etree.SubElement(self._root, f"{{{PROPERTY_NAMESPACES[name]}}}{name}")
            if name in W3CDTF_PROPERTIES:
                element.set(f"{{{XSI_NAMESPACE}}}type", "dcterms:W3CDTF")

        element.text = value
        self._modified = True
        logger.debug(f"Set core property {name}={value!r}")

    def to_dict(self) -> dict[str, str]:
        """All properties as name -> value, in file order."""
        return {
            etree.QName(child).localname: child.text or ""
            for child in self._root
            if isinstance(child.tag, str)
        }

    def save(self) -> None:
        """Write docProps/core.xml when it was modified."""
        if not self._modified:
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._tree.write(
            str(self._path),
            encoding="utf-8",
            xml_declaration=True,
            standalone=True,
        )
        self._modified = False
        logger.debug(f"Saved core properties: {self._path}")

    @property
    def is_modified(self) -> bool:
        return self._modified
