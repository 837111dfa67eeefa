"""
RelationshipManager class for managing .rels files in OOXML packages.

A relationship links one part to another using a unique ID (rId), a
relationship type URI and a target path, such as the link between
word/document.xml and word/footnotes.xml.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from lxml import etree

from .constants import PACKAGE_RELATIONSHIPS_NAMESPACE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relationship:
    """One entry of a .rels file.

    Attributes:
        rel_id: Relationship ID (e.g., "rId3")
        rel_type: Relationship type URI
        target: Target path, relative to the source part's directory
        target_mode: "External" for hyperlinks and other external targets
    """

    rel_id: str
    rel_type: str
    target: str
    target_mode: str | None = None

    @property
    def is_external(self) -> bool:
        return self.target_mode == "External"


class RelationshipManager:
    """Manages the .rels file of one package part.

    This class handles the low-level operations of:
    - Reading relationship files (.rels)
    - Looking relationships up by type or ID
    - Adding new relationships with auto-generated IDs
    - Persisting changes back to the working directory

    Example:
        >>> rel_mgr = RelationshipManager(package_dir, "word/document.xml")
        >>> rel_id = rel_mgr.add_relationship(RelationshipTypes.FOOTNOTES, "footnotes.xml")
        >>> rel_mgr.save()

    Attributes:
        part_name: The part this relationship file is for (e.g., "word/document.xml")
    """

    def __init__(self, package_dir: Path, part_name: str) -> None:
        """Initialize a RelationshipManager for a specific part.

        Args:
            package_dir: Working directory of the unpacked package
            part_name: The part this relationship file is for.
                      For example, "word/document.xml" -> "word/_rels/document.xml.rels"
        """
        self._package_dir = Path(package_dir)
        self.part_name = part_name
        self._rels_path = self._compute_rels_path(part_name)
        self._root: etree._Element | None = None
        self._tree: etree._ElementTree | None = None
        self._modified = False

    def _compute_rels_path(self, part_name: str) -> Path:
        """Compute the .rels file path for a given part.

        For example:
        - "word/document.xml" -> "word/_rels/document.xml.rels"
        - "word/header1.xml" -> "word/_rels/header1.xml.rels"
        """
        part_path = Path(part_name)
        return self._package_dir / part_path.parent / "_rels" / f"{part_path.name}.rels"

    @property
    def rels_path(self) -> Path:
        return self._rels_path

    def _ensure_loaded(self) -> None:
        """Ensure the relationship XML is loaded into memory."""
        if self._root is not None:
            return

        if self._rels_path.exists():
            parser = etree.XMLParser(remove_blank_text=False)
            self._tree = etree.parse(str(self._rels_path), parser)
            self._root = self._tree.getroot()
        else:
            self._root = etree.Element(
                f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationships",
                nsmap={None: PACKAGE_RELATIONSHIPS_NAMESPACE},
            )
            self._tree = etree.ElementTree(self._root)

    @property
    def relationships(self) -> list[Relationship]:
        """All relationships of the part, in file order."""
        self._ensure_loaded()
        assert self._root is not None

        return [
            Relationship(
                rel_id=rel.get("Id", ""),
                rel_type=rel.get("Type", ""),
                target=rel.get("Target", ""),
                target_mode=rel.get("TargetMode"),
            )
            for rel in self._root
            if rel.tag == f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship"
        ]

    def get_relationship(self, rel_type: str) -> str | None:
        """Get the relationship ID for a given type.

        Args:
            rel_type: The relationship type URI to search for

        Returns:
            The relationship ID (e.g., "rId3") if found, None otherwise
        """
        for rel in self.relationships:
            if rel.rel_type == rel_type:
                return rel.rel_id
        return None

    def get_relationship_target(self, rel_type: str) -> str | None:
        """Get the target path for a relationship type."""
        for rel in self.relationships:
            if rel.rel_type == rel_type:
                return rel.target
        return None

    def get_target(self, rel_id: str) -> str | None:
        """Get the target path of a relationship by ID."""
        for rel in self.relationships:
            if rel.rel_id == rel_id:
                return rel.target
        return None

    def has_relationship(self, rel_type: str) -> bool:
        """Check if a relationship of the given type exists."""
        return self.get_relationship(rel_type) is not None

    def add_relationship(self, rel_type: str, target: str) -> str:
        """Add a new relationship or return existing one.

        If a relationship of the given type already exists, returns its ID.
        Otherwise, creates a new relationship with an auto-generated ID.

        Args:
            rel_type: The relationship type URI
            target: The target path (relative to the part's directory)

        Returns:
            The relationship ID (e.g., "rId3")
        """
        existing_id = self.get_relationship(rel_type)
        if existing_id is not None:
            logger.debug(f"Relationship {rel_type} already exists: {existing_id}")
            return existing_id

        assert self._root is not None
        rel_id = f"rId{self._next_available_id()}"

        rel_elem = etree.SubElement(self._root, f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship")
        rel_elem.set("Id", rel_id)
        rel_elem.set("Type", rel_type)
        rel_elem.set("Target", target)

        self._modified = True
        logger.debug(f"Added relationship {rel_id}: {rel_type} -> {target}")

        return rel_id

    def _next_available_id(self) -> int:
        """Find the next available relationship ID number.

        Returns:
            The next available ID number (e.g., if rId1, rId2 exist, returns 3)
        """
        existing_ids: set[int] = set()
        for rel in self.relationships:
            if rel.rel_id.startswith("rId") and rel.rel_id[3:].isdigit():
                existing_ids.add(int(rel.rel_id[3:]))

        next_id = 1
        while next_id in existing_ids:
            next_id += 1

        return next_id

    def save(self) -> None:
        """Persist changes to the .rels file.

        Only writes if modifications were made. Creates the _rels
        directory if it doesn't exist.
        """
        if not self._modified or self._tree is None:
            return

        self._rels_path.parent.mkdir(parents=True, exist_ok=True)
        self._tree.write(
            str(self._rels_path),
            encoding="utf-8",
            xml_declaration=True,
            standalone=True,
        )

        self._modified = False
        logger.debug(f"Saved relationship file: {self._rels_path}")

    @property
    def is_modified(self) -> bool:
        """Check if there are unsaved modifications."""
        return self._modified


class RelationshipTypes:
    """Common OOXML relationship type URIs."""

    OFFICE_DOCUMENT = (
        "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument"
    )
    FOOTNOTES = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/footnotes"
    STYLES = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles"
    HEADER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/header"
    FOOTER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/footer"
    CORE_PROPERTIES = (
        "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
    )
