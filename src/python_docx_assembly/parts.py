"""
DocumentPart: one structured-markup part of a Word package.

A part is an XML file under word/ (the main document, a header, a footer or
the footnotes collection) loaded into an lxml tree, together with a cursor:
an XPath expression naming the part's current node, the anchor for
insertions.

Cursor validation is lazy. set_cursor() only stores the expression, which
may name a node that does not exist yet; node_at_cursor() is the single
point where it is resolved and rejected when it matches nothing.

Elements returned by queries alias the part's tree. Library operations that
restructure a tree call mark_mutated(), which invalidates every NodeHandle
issued before the mutation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from lxml import etree

from .constants import DOCUMENT_FILE, FOOTNOTES_FILE, NSMAP, WORD_DIR
from .errors import CursorUnresolvedError, PartNotFoundError, StaleNodeError
from .relationships import RelationshipManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartLayout:
    """Where a part's content lives and where its cursor starts."""

    root_xpath: str
    default_cursor: str


class PartKind(Enum):
    """The closed set of part variants a document is made of."""

    BODY = PartLayout("/w:document/w:body", "/w:document/w:body/*[1]")
    HEADER = PartLayout("/w:hdr", "/w:hdr/*[1]")
    FOOTER = PartLayout("/w:ftr", "/w:ftr/*[1]")
    FOOTNOTES = PartLayout("/w:footnotes", "/w:footnotes/*[last()]")

    @property
    def root_xpath(self) -> str:
        return self.value.root_xpath

    @property
    def default_cursor(self) -> str:
        return self.value.default_cursor


class NodeHandle:
    """Non-owning reference to an element of a part.

    The handle stays valid until the owning part is mutated through the
    library; after that, reading `element` raises StaleNodeError.
    """

    def __init__(self, part: DocumentPart, element: etree._Element) -> None:
        self._part = part
        self._element = element
        self._generation = part.generation

    @property
    def is_valid(self) -> bool:
        return self._generation == self._part.generation

    @property
    def element(self) -> etree._Element:
        if not self.is_valid:
            raise StaleNodeError(self._part.part_name)
        return self._element

    def __repr__(self) -> str:
        state = "valid" if self.is_valid else "stale"
        return f"<NodeHandle {self._part.part_name} {self._element.tag} {state}>"


class DocumentPart:
    """An XML part of the package plus its cursor.

    Example:
        >>> body = DocumentPart.body(package.temp_dir)
        >>> body.cursor_end()
        >>> body.node_at_cursor().tag
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}sectPr'
        >>> body.save()

    Attributes:
        kind: The part variant (body, header, footer, footnotes)
        main_file: File name under word/ (e.g., "header1.xml")
    """

    def __init__(
        self,
        package_dir: Path,
        main_file: str,
        kind: PartKind,
        cursor: str | None = None,
    ) -> None:
        """Parse a part from an unpacked package.

        Args:
            package_dir: Working directory of the unpacked package
            main_file: File name of the part under word/
            kind: The part variant, which supplies root path and default cursor
            cursor: Initial cursor; defaults to the kind's default cursor

        Raises:
            PartNotFoundError: If the part file does not exist
        """
        self._package_dir = Path(package_dir)
        self.main_file = main_file
        self.kind = kind
        self._path = self._package_dir / WORD_DIR / main_file

        if not self._path.exists():
            raise PartNotFoundError(self.part_name)

        parser = etree.XMLParser(remove_blank_text=False)
        self._tree = etree.parse(str(self._path), parser)
        self._cursor: str | None = cursor if cursor is not None else kind.default_cursor
        self._relationships: RelationshipManager | None = None
        self._generation = 0
        logger.debug(f"Loaded {kind.name.lower()} part {self.part_name}")

    @classmethod
    def body(cls, package_dir: Path) -> DocumentPart:
        return cls(package_dir, DOCUMENT_FILE, PartKind.BODY)

    @classmethod
    def header(cls, package_dir: Path, main_file: str) -> DocumentPart:
        return cls(package_dir, main_file, PartKind.HEADER)

    @classmethod
    def footer(cls, package_dir: Path, main_file: str) -> DocumentPart:
        return cls(package_dir, main_file, PartKind.FOOTER)

    @classmethod
    def footnotes(cls, package_dir: Path) -> DocumentPart:
        return cls(package_dir, FOOTNOTES_FILE, PartKind.FOOTNOTES)

    @property
    def part_name(self) -> str:
        """Package-relative path of the part (e.g., "word/document.xml")."""
        return f"{WORD_DIR}/{self.main_file}"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tree(self) -> etree._ElementTree:
        """The live element tree; edits to it are edits to the part."""
        return self._tree

    @property
    def root(self) -> etree._Element:
        return self._tree.getroot()

    @property
    def body_xpath(self) -> str:
        return self.kind.root_xpath

    @property
    def content_root(self) -> etree._Element | None:
        """The element the part's content hangs from (w:body, w:hdr, ...)."""
        found = self.xpath(self.body_xpath)
        return found[0] if found else None

    @property
    def cursor(self) -> str | None:
        return self._cursor

    @property
    def generation(self) -> int:
        """Counter bumped by every library mutation of the tree."""
        return self._generation

    @property
    def relationships(self) -> RelationshipManager:
        """The part's relationships (word/_rels/<main_file>.rels)."""
        if self._relationships is None:
            self._relationships = RelationshipManager(self._package_dir, self.part_name)
        return self._relationships

    def xpath(self, expression: str, **variables: str) -> list:
        """Evaluate an XPath expression against the part with the w: prefix bound.

        Keyword arguments are bound as XPath variables ($name), which keeps
        user-supplied values out of the expression text.
        """
        return self._tree.xpath(expression, namespaces=NSMAP, **variables)

    def set_cursor(self, xpath: str | None) -> None:
        """Replace the cursor without resolving it."""
        self._cursor = xpath

    def node_at_cursor(self) -> etree._Element:
        """Resolve the cursor.

        Returns:
            The first element the cursor expression matches

        Raises:
            CursorUnresolvedError: If the cursor is unset or matches nothing
        """
        if self._cursor is None:
            raise CursorUnresolvedError(self.part_name, None)

        found = self.xpath(self._cursor)
        # Non node-set expressions (count(), string()...) never resolve
        nodes = [node for node in found if isinstance(node, etree._Element)] if isinstance(found, list) else []
        if not nodes:
            raise CursorUnresolvedError(self.part_name, self._cursor)
        return nodes[0]

    def handle_at_cursor(self) -> NodeHandle:
        """Resolve the cursor into a handle invalidated by the next mutation."""
        return NodeHandle(self, self.node_at_cursor())

    def cursor_to(self, element: etree._Element) -> None:
        """Point the cursor at an element of this part.

        The path is made of positional `*[n]` steps so it does not depend
        on the namespace prefixes the part itself declares.
        """
        steps = []
        node = element
        while node.getparent() is not None:
            position = 1 + sum(
                1 for sibling in node.itersiblings(preceding=True) if isinstance(sibling.tag, str)
            )
            steps.append(f"*[{position}]")
            node = node.getparent()
        self._cursor = "/" + "/".join(["*", *reversed(steps)])

    def cursor_begin(self) -> None:
        """Point the cursor at the first direct child of the content root."""
        self._cursor = f"{self.body_xpath}/*[1]"

    def cursor_end(self) -> None:
        """Point the cursor at the last direct child of the content root.

        The path is computed from the current tree, so later appends do not
        silently move it.
        """
        last = self.xpath(f"{self.body_xpath}/*[last()]")
        if last:
            self.cursor_to(last[0])
        else:
            self._cursor = f"{self.body_xpath}/*[last()]"

    def mark_mutated(self) -> None:
        """Record a structural mutation, invalidating issued node handles."""
        self._generation += 1

    def save(self) -> None:
        """Serialize the tree back to its file, then its relationships."""
        self._tree.write(
            str(self._path),
            encoding="utf-8",
            xml_declaration=True,
            standalone=True,
        )
        if self._relationships is not None:
            self._relationships.save()
        logger.debug(f"Saved part {self.part_name}")

    def __repr__(self) -> str:
        return f"<DocumentPart {self.part_name} kind={self.kind.name.lower()} cursor={self._cursor!r}>"
