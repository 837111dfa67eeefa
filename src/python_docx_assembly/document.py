"""
Document class for building and rewriting Word documents.

This module provides the main Document class, which unpacks a .docx file
(or the bundled template) into a working directory, exposes its parts as
editable lxml trees with cursors, and assembles them back into a .docx
archive on save.
"""

import logging
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

from lxml import etree

from .assembly import AssemblyPipeline
from .constants import (
    CORE_PROPERTIES_PATH,
    FOOTER_FILE_PATTERN,
    FOOTNOTES_FILE,
    GO_BACK_BOOKMARK,
    HEADER_FILE_PATTERN,
    NSMAP,
    WORD_DIR,
    XML_SPACE,
    w,
)
from .content_types import ContentTypeManager, ContentTypes
from .errors import BookmarkNotFoundError, DocumentNotFoundError, UnknownStyleNameError
from .models.section import SectionGeometry
from .models.style import Style, StyleType
from .package import OOXMLPackage
from .parts import DocumentPart
from .properties import CoreProperties, format_timestamp
from .relationships import RelationshipManager, RelationshipTypes
from .styles import StyleCatalog

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = TEMPLATES_DIR / "template.docx"
FOOTNOTES_TEMPLATE = TEMPLATES_DIR / FOOTNOTES_FILE

# Following section breaks relative to the cursor; the cursor node itself
# counts when it is a section break
_SECTION_AT_CURSOR_XPATH = (
    "self::w:sectPr"
    " | w:pPr/w:sectPr"
    " | following-sibling::w:sectPr"
    " | following-sibling::w:p/w:pPr/w:sectPr"
)


class Document:
    """A Word document opened for editing.

    The document owns a private working directory for its whole lifetime.
    Call close() (or use it as a context manager) to release it; dropping
    the object only cleans up on a best-effort basis.

    Example:
        >>> doc = Document.open()
        >>> doc.add_paragraph("A title", style="heading 1")
        >>> doc.set_doc_properties(title="Report", creator="Me")
        >>> doc.save("report.docx")

    Attributes:
        path: Path of the source file (None when created from the template)
        author: Identity stamped as lastModifiedBy on save (default: $USER)
        body: The main document part
        headers: Header parts keyed by file name, in discovery order
        footers: Footer parts keyed by file name, in discovery order
        footnotes: The footnotes part
        styles: The style catalog read at open
        default_styles: Style type -> name of its default style
        section_geometry: Geometry of the last body section at open, in twips
    """

    def __init__(
        self,
        path: str | Path | None = None,
        author: str | None = None,
        template: str | Path | None = None,
    ) -> None:
        """Open a .docx file, or a new document from a template.

        Args:
            path: Path to the .docx file to edit. None creates a new document
                  from the template.
            author: Identity stamped as lastModifiedBy on save
            template: Template used when path is None; a .docx file or an
                      unpacked package directory (default: bundled template)

        Raises:
            DocumentNotFoundError: If path is given and does not exist
        """
        if path is not None and not Path(path).exists():
            raise DocumentNotFoundError(str(path))

        self.path = Path(path) if path is not None else None
        self.author = author

        if self.path is None:
            self._package = OOXMLPackage.from_template(template or DEFAULT_TEMPLATE)
        else:
            self._package = OOXMLPackage.open(self.path)

        self._load_document()

    @classmethod
    def open(
        cls,
        path: str | Path | None = None,
        author: str | None = None,
        template: str | Path | None = None,
    ) -> "Document":
        """Open a document; see __init__."""
        return cls(path, author=author, template=template)

    def _load_document(self) -> None:
        """Build properties, content types, styles and parts from the working directory."""
        package_dir = self._package.temp_dir

        self.content_types = ContentTypeManager(self._package)

        self.core_properties = CoreProperties(package_dir)
        if self.core_properties.is_modified:
            self._register_core_properties()

        self.body = DocumentPart.body(package_dir)
        self.styles = StyleCatalog.from_package_dir(package_dir)

        self.headers = {
            name: DocumentPart.header(package_dir, name)
            for name in self._discover_parts(HEADER_FILE_PATTERN)
        }
        self.footers = {
            name: DocumentPart.footer(package_dir, name)
            for name in self._discover_parts(FOOTER_FILE_PATTERN)
        }

        if not self._package.part_exists(f"{WORD_DIR}/{FOOTNOTES_FILE}"):
            self._install_footnotes()
        self.footnotes = DocumentPart.footnotes(package_dir)

        self.default_styles = self.styles.default_styles

        last_sect = self.body.xpath("/w:document/w:body/w:sectPr[last()]")
        self.section_geometry = SectionGeometry.from_node(last_sect[0] if last_sect else None)

        self.body.cursor_end()
        logger.debug(
            f"Opened {self.path or 'template'}: {len(self.headers)} header(s), "
            f"{len(self.footers)} footer(s), {len(self.styles)} style(s)"
        )

    def _discover_parts(self, pattern: str) -> list[str]:
        word_dir = self._package.get_part_path(WORD_DIR)
        if not word_dir.is_dir():
            return []
        return sorted(
            entry.name for entry in word_dir.iterdir() if entry.is_file() and re.match(pattern, entry.name)
        )

    def _install_footnotes(self) -> None:
        """Copy the footnotes template into the package and declare it."""
        target = self._package.get_part_path(f"{WORD_DIR}/{FOOTNOTES_FILE}")
        shutil.copyfile(FOOTNOTES_TEMPLATE, target)
        self.content_types.add_override(f"/{WORD_DIR}/{FOOTNOTES_FILE}", ContentTypes.FOOTNOTES)
        self.body.relationships.add_relationship(RelationshipTypes.FOOTNOTES, FOOTNOTES_FILE)
        logger.debug("Installed default footnotes part")

    def _register_core_properties(self) -> None:
        """Declare a docProps/core.xml created because the package had none."""
        self.content_types.add_override(f"/{CORE_PROPERTIES_PATH}", ContentTypes.CORE_PROPERTIES)
        package_rels = RelationshipManager(self._package.temp_dir, "")
        package_rels.add_relationship(RelationshipTypes.CORE_PROPERTIES, CORE_PROPERTIES_PATH)
        package_rels.save()

    @property
    def package(self) -> OOXMLPackage:
        return self._package

    # ========================================================================
    # READ ACCESSORS
    # ========================================================================

    def __len__(self) -> int:
        return self.element_count()

    def element_count(self) -> int:
        """Number of direct children of w:body."""
        body = self.body.content_root
        if body is None:
            return 0
        return sum(1 for child in body if isinstance(child.tag, str))

    def styles_info(self) -> list[Style]:
        """All style records of the document, in styles.xml order."""
        return self.styles.styles

    def doc_properties(self) -> dict[str, str]:
        """Core document properties as name -> value.

        Example:
            >>> Document.open().doc_properties()["title"]
            ''
        """
        return self.core_properties.to_dict()

    def set_doc_properties(
        self,
        title: str | None = None,
        subject: str | None = None,
        creator: str | None = None,
        description: str | None = None,
        created: datetime | None = None,
    ) -> "Document":
        """Set document metadata.

        The "modified" and "lastModifiedBy" properties are not settable here;
        they are stamped when the document is saved.

        Args:
            title, subject, creator, description: Text fields; None leaves
                the current value untouched
            created: Creation timestamp

        Returns:
            The document, for chaining
        """
        values = {
            "title": title,
            "subject": subject,
            "creator": creator,
            "description": description,
        }
        for name, value in values.items():
            if value is not None:
                self.core_properties.set(name, value)
        if created is not None:
            self.core_properties.set("created", format_timestamp(created))
        return self

    def page_geometry_at_cursor(self) -> SectionGeometry:
        """Page size and margins, in inches, of the section holding the cursor.

        The section is the nearest section break at or after the cursor:
        a body-level w:sectPr or one carried by a following paragraph.
        """
        cursor_elt = self.body.node_at_cursor()
        found = cursor_elt.xpath(_SECTION_AT_CURSOR_XPATH, namespaces=NSMAP)
        next_section = found[0] if found else None
        return SectionGeometry.from_node(next_section).to_inches()

    def bookmark_names(self) -> list[str]:
        """Distinct bookmark names in the body, without Word's _GoBack marker."""
        names: list[str] = []
        for start in self.body.xpath("//w:bookmarkStart[@w:name]"):
            name = start.get(w("name"))
            if name != GO_BACK_BOOKMARK and name not in names:
                names.append(name)
        return names

    def body_xml(self) -> etree._Element:
        """The live root element of word/document.xml.

        Intended for integrations that manipulate the XML directly.
        """
        return self.body.root

    def body_relationships(self) -> RelationshipManager:
        """Relationships of word/document.xml."""
        return self.body.relationships

    def text_at_cursor(self) -> str:
        """Concatenated w:t text of the node at the body cursor."""
        node = self.body.node_at_cursor()
        return "".join(t.text or "" for t in node.iter(w("t")))

    def describe(self) -> str:
        """Human-readable summary: size, styles and the content at the cursor."""
        lines = [f"docx document with {len(self)} element(s)", "", "* styles:"]
        for style in self.styles:
            lines.append(f"  {style.name}: {style.style_type.value}")

        node = self.body.node_at_cursor()
        lines += [
            "",
            "* Content at cursor location:",
            f"  {etree.QName(node).localname}: {self.text_at_cursor()!r}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        source = str(self.path) if self.path else "template"
        return f"<Document {source} elements={len(self)}>"

    # ========================================================================
    # CURSOR
    # ========================================================================

    def cursor_begin(self) -> "Document":
        """Move the body cursor to the first element of the body."""
        self.body.cursor_begin()
        return self

    def cursor_end(self) -> "Document":
        """Move the body cursor to the last element of the body."""
        self.body.cursor_end()
        return self

    def cursor_bookmark(self, name: str) -> "Document":
        """Move the body cursor to the body element containing a bookmark.

        Raises:
            BookmarkNotFoundError: If no bookmark has that name
        """
        found = self.body.xpath(
            "/w:document/w:body/*[.//w:bookmarkStart[@w:name = $name] or "
            "self::w:bookmarkStart[@w:name = $name]]",
            name=name,
        )
        if not found:
            raise BookmarkNotFoundError(name, self.bookmark_names())
        self.body.cursor_to(found[0])
        return self

    # ========================================================================
    # EDITING
    # ========================================================================

    def add_paragraph(self, text: str = "", style: str | None = None) -> "Document":
        """Insert a paragraph after the cursor and move the cursor onto it.

        When the cursor sits on the final body-level w:sectPr, the paragraph
        goes before it so the section properties stay last.

        Args:
            text: Paragraph text
            style: Paragraph style name; defaults to the default paragraph style

        Raises:
            UnknownStyleNameError: If the style is not a paragraph style
        """
        style_name = style or self.default_styles.get(StyleType.PARAGRAPH.value)

        paragraph = etree.Element(w("p"))
        if style_name:
            record = self.styles.lookup(style_name, StyleType.PARAGRAPH)
            if record is None:
                raise self._unknown_styles([style_name])
            p_pr = etree.SubElement(paragraph, w("pPr"))
            etree.SubElement(p_pr, w("pStyle")).set(w("val"), record.style_id)
        if text:
            run = etree.SubElement(paragraph, w("r"))
            text_elem = etree.SubElement(run, w("t"))
            text_elem.text = text
            text_elem.set(XML_SPACE, "preserve")

        cursor_elt = self.body.node_at_cursor()
        if cursor_elt.tag == w("sectPr") and cursor_elt.getparent() is self.body.content_root:
            cursor_elt.addprevious(paragraph)
        else:
            cursor_elt.addnext(paragraph)

        self.body.mark_mutated()
        self.body.cursor_to(paragraph)
        return self

    def change_styles(self, mapstyles: dict[str, str | list[str]] | None) -> "Document":
        """Replace paragraph styles with others.

        Args:
            mapstyles: Destination style name -> source style name(s). Every
                paragraph whose style is a source gets the destination style.

        Returns:
            The document, for chaining

        Raises:
            UnknownStyleNameError: If source or destination names are not
                paragraph styles. All missing sources are reported together,
                then all missing destinations; nothing is modified.

        Example:
            >>> doc.change_styles({"heading 3": ["heading 1", "heading 2"]})
        """
        if not mapstyles:
            return self

        mapping = {
            to: [sources] if isinstance(sources, str) else list(sources)
            for to, sources in mapstyles.items()
        }
        from_styles = list(dict.fromkeys(name for sources in mapping.values() for name in sources))
        to_styles = list(dict.fromkeys(mapping))

        paragraph_names = set(self.styles.names(StyleType.PARAGRAPH))
        for requested in (from_styles, to_styles):
            missing = [name for name in requested if name not in paragraph_names]
            if missing:
                raise self._unknown_styles(missing)

        id_map: dict[str, str] = {}
        for to, sources in mapping.items():
            to_id = self.styles.lookup(to, StyleType.PARAGRAPH).style_id
            for source in sources:
                id_map.setdefault(self.styles.lookup(source, StyleType.PARAGRAPH).style_id, to_id)

        rewritten = 0
        for p_style in self.body.xpath("//w:pStyle"):
            target_id = id_map.get(p_style.get(w("val")))
            if target_id is not None:
                p_style.set(w("val"), target_id)
                rewritten += 1

        if rewritten:
            self.body.mark_mutated()
        logger.debug(f"Restyled {rewritten} paragraph(s)")
        return self

    def _unknown_styles(self, missing: list[str]) -> UnknownStyleNameError:
        suggestions = {name: self.styles.similar_names(name, StyleType.PARAGRAPH) for name in missing}
        return UnknownStyleNameError(missing, suggestions)

    # ========================================================================
    # SAVE / LIFECYCLE
    # ========================================================================

    def save(self, target: str | Path) -> Path:
        """Assemble the document and write it to a .docx file.

        Saving renumbers drawing-object ids across all parts, makes the last
        section type explicit and stamps modified/lastModifiedBy. A document
        must not be saved from two threads at once.

        Args:
            target: Path of the .docx file to write

        Returns:
            The target path

        Raises:
            InvalidTargetExtensionError: If target does not end in .docx
        """
        return AssemblyPipeline(self).run(target)

    def close(self) -> None:
        """Release the working directory."""
        self._package.close()

    def __del__(self) -> None:
        """Clean up package resources on object destruction."""
        package = getattr(self, "_package", None)
        if package is not None:
            package.close()

    def __enter__(self) -> "Document":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()


def open_document(
    path: str | Path | None = None,
    author: str | None = None,
    template: str | Path | None = None,
) -> Document:
    """Open a .docx file, or a new document from the bundled template.

    Raises:
        DocumentNotFoundError: If path is given and does not exist
    """
    return Document.open(path, author=author, template=template)
