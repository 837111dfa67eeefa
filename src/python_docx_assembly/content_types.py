"""
ContentTypeManager class for managing [Content_Types].xml in OOXML packages.

Content types define the media type of each part in the package. Parts are
matched either by extension (Default entries) or by exact part name
(Override entries); this module manages the Override entries needed when
a part such as word/footnotes.xml is installed into a package.
"""

import logging

from lxml import etree

from .constants import CONTENT_TYPES_NAMESPACE, CONTENT_TYPES_PATH
from .package import OOXMLPackage

logger = logging.getLogger(__name__)


class ContentTypeManager:
    """Manages [Content_Types].xml in OOXML packages.

    This class handles the low-level operations of:
    - Reading the content types file
    - Resolving the media type of a part (Override first, then Default)
    - Adding new Override entries for package parts
    - Persisting changes back to the package

    Example:
        >>> ct_mgr = ContentTypeManager(package)
        >>> ct_mgr.add_override("/word/footnotes.xml", ContentTypes.FOOTNOTES)
        >>> ct_mgr.save()
    """

    def __init__(self, package: OOXMLPackage) -> None:
        """Initialize a ContentTypeManager for a package.

        Args:
            package: The OOXMLPackage containing the [Content_Types].xml file
        """
        self._package = package
        self._content_types_path = package.get_part_path(CONTENT_TYPES_PATH)
        self._root: etree._Element | None = None
        self._tree: etree._ElementTree | None = None
        self._modified = False

    def _ensure_loaded(self) -> None:
        """Ensure the content types XML is loaded into memory."""
        if self._root is not None:
            return

        if self._content_types_path.exists():
            parser = etree.XMLParser(remove_blank_text=False)
            self._tree = etree.parse(str(self._content_types_path), parser)
            self._root = self._tree.getroot()
        else:
            # Shouldn't happen for a valid docx
            self._root = etree.Element(
                f"{{{CONTENT_TYPES_NAMESPACE}}}Types",
                nsmap={None: CONTENT_TYPES_NAMESPACE},
            )
            self._tree = etree.ElementTree(self._root)
            self._modified = True

    def _entries(self, kind: str) -> list[etree._Element]:
        self._ensure_loaded()
        assert self._root is not None
        return [child for child in self._root if child.tag == f"{{{CONTENT_TYPES_NAMESPACE}}}{kind}"]

    @property
    def overrides(self) -> dict[str, str]:
        """Map every overridden part name to its content type."""
        return {
            override.get("PartName", ""): override.get("ContentType", "")
            for override in self._entries("Override")
        }

    @property
    def defaults(self) -> dict[str, str]:
        """Map every default extension to its content type."""
        return {
            default.get("Extension", "").lower(): default.get("ContentType", "")
            for default in self._entries("Default")
        }

    def get_content_type(self, part_name: str) -> str | None:
        """Get the declared content type for a specific part.

        Override entries win over extension defaults.

        Args:
            part_name: The part name to look up (e.g., "/word/footnotes.xml")

        Returns:
            The content type string if declared, None otherwise
        """
        override = self.overrides.get(part_name)
        if override is not None:
            return override

        extension = part_name.rsplit(".", 1)[-1].lower() if "." in part_name else ""
        return self.defaults.get(extension)

    def has_override(self, part_name: str) -> bool:
        """Check if an override exists for the given part name.

        Args:
            part_name: The part name to check (e.g., "/word/footnotes.xml")

        Returns:
            True if an override exists for this part
        """
        return part_name in self.overrides

    def add_override(self, part_name: str, content_type: str) -> bool:
        """Add a content type override for a part.

        If an override already exists for the part, this is a no-op.

        Args:
            part_name: The part name (e.g., "/word/footnotes.xml")
            content_type: The content type (e.g., "application/...footnotes+xml")

        Returns:
            True if a new override was added, False if it already existed
        """
        self._ensure_loaded()
        assert self._root is not None

        if self.has_override(part_name):
            logger.debug(f"Content type override already exists for {part_name}")
            return False

        override = etree.SubElement(self._root, f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
        override.set("PartName", part_name)
        override.set("ContentType", content_type)

        self._modified = True
        logger.debug(f"Added content type override: {part_name} -> {content_type}")

        return True

    def save(self) -> None:
        """Persist changes to the [Content_Types].xml file.

        Only writes if modifications were made.
        """
        if not self._modified or self._tree is None:
            return

        self._tree.write(
            str(self._content_types_path),
            encoding="utf-8",
            xml_declaration=True,
            standalone=True,
        )

        self._modified = False
        logger.debug(f"Saved content types file: {self._content_types_path}")

    @property
    def is_modified(self) -> bool:
        """Check if there are unsaved modifications."""
        return self._modified


class ContentTypes:
    """Common OOXML content type strings."""

    DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
    STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"
    FOOTNOTES = "application/vnd.openxmlformats-officedocument.wordprocessingml.footnotes+xml"
    HEADER = "application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"
    FOOTER = "application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml"
    CORE_PROPERTIES = "application/vnd.openxmlformats-package.core-properties+xml"
