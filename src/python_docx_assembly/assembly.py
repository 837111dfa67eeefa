"""
Save pipeline for documents.

AssemblyPipeline turns the in-memory state of a Document into a .docx
archive. The sequence is:

1. renumber every element carrying an un-prefixed ``id`` attribute with one
   counter shared by all parts, scanning body, footnotes, headers, footers
   and then footnotes again;
2. give the last section of the body an explicit ``w:type`` when it has none;
3. write headers, footers, body and footnotes back to the working directory;
4. stamp ``modified`` and ``lastModifiedBy``, then write core properties and
   content types;
5. pack the working directory into the target archive.

A pipeline is built for one save call. Saving the same Document from two
threads at once is not supported.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from .constants import DEFAULT_SECTION_TYPE, DOCX_EXTENSION, w
from .errors import InvalidTargetExtensionError
from .parts import DocumentPart
from .properties import format_timestamp

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

# w:sectPr children that must follow w:type (CT_SectPr sequence)
_SECTPR_AFTER_TYPE = (
    "pgSz",
    "pgMar",
    "paperSrc",
    "pgBorders",
    "lnNumType",
    "pgNumType",
    "cols",
    "formProt",
    "vAlign",
    "noEndnote",
    "titlePg",
    "textDirection",
    "bidi",
    "rtlGutter",
    "docGrid",
    "printerSettings",
    "sectPrChange",
)


class IdCounter:
    """Monotonic identifier source shared by every part of one save."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def next_value(self) -> int:
        return self._next

    def take(self) -> int:
        value = self._next
        self._next += 1
        return value


def validate_target(target: str | Path) -> Path:
    """Check that a save target names a .docx file.

    Raises:
        InvalidTargetExtensionError: If the suffix is not .docx (any case)
    """
    target_path = Path(target)
    if not str(target_path).lower().endswith(DOCX_EXTENSION):
        raise InvalidTargetExtensionError(str(target), DOCX_EXTENSION)
    return target_path


def uniquify_ids(part: DocumentPart, counter: IdCounter) -> int:
    """Overwrite every un-prefixed ``id`` attribute of a part.

    Args:
        part: The part to renumber
        counter: The save's shared counter; advanced once per element

    Returns:
        Number of elements renumbered
    """
    elements = part.xpath("//*[@id]")
    for element in elements:
        element.set("id", str(counter.take()))
    if elements:
        part.mark_mutated()
    logger.debug(f"Renumbered {len(elements)} ids in {part.part_name}")
    return len(elements)


def ensure_last_section_type(body: DocumentPart, section_type: str = DEFAULT_SECTION_TYPE) -> bool:
    """Give the last w:sectPr of the body a w:type child when it has none.

    The new element is placed where the schema expects it: before the first
    page-setup child (w:pgSz, w:pgMar, ...), after header/footer references
    and note properties.

    Returns:
        True if a w:type element was inserted
    """
    sections = body.xpath("//w:sectPr")
    if not sections:
        return False

    last_sect = sections[-1]
    if last_sect.find(w("type")) is not None:
        return False

    type_elem = etree.Element(w("type"))
    type_elem.set(w("val"), section_type)

    followers = {w(name) for name in _SECTPR_AFTER_TYPE}
    for index, child in enumerate(last_sect):
        if child.tag in followers:
            last_sect.insert(index, type_elem)
            break
    else:
        last_sect.append(type_elem)

    body.mark_mutated()
    logger.debug(f"Added section type '{section_type}' to the last section")
    return True


def current_user() -> str:
    """Identity stamped as lastModifiedBy when the document has no author."""
    return os.environ.get("USER", "")


class AssemblyPipeline:
    """Runs the save sequence for one Document.

    Example:
        >>> AssemblyPipeline(doc).run("out.docx")
    """

    def __init__(self, document: Document, now: datetime | None = None) -> None:
        self._document = document
        self._now = now

    def id_scan_order(self) -> Iterable[DocumentPart]:
        """Parts in renumbering order; footnotes are visited twice."""
        doc = self._document
        yield doc.body
        yield doc.footnotes
        yield from doc.headers.values()
        yield from doc.footers.values()
        yield doc.footnotes

    def uniquify(self) -> IdCounter:
        counter = IdCounter()
        for part in self.id_scan_order():
            uniquify_ids(part, counter)
        return counter

    def persist_parts(self) -> None:
        doc = self._document
        for header in doc.headers.values():
            header.save()
        for footer in doc.footers.values():
            footer.save()
        doc.body.save()
        doc.footnotes.save()

    def stamp_properties(self) -> None:
        doc = self._document
        now = self._now or datetime.now(timezone.utc)
        doc.core_properties.set("modified", format_timestamp(now))
        doc.core_properties.set("lastModifiedBy", doc.author or current_user())

    def run(self, target: str | Path) -> Path:
        """Normalize, persist and pack the document.

        Args:
            target: Path of the .docx file to write

        Returns:
            The target path

        Raises:
            InvalidTargetExtensionError: If target does not end in .docx
        """
        target_path = validate_target(target)
        doc = self._document

        counter = self.uniquify()
        logger.debug(f"Assigned ids 1..{counter.next_value - 1}")

        ensure_last_section_type(doc.body)
        self.persist_parts()

        self.stamp_properties()
        doc.core_properties.save()
        doc.content_types.save()

        doc.package.pack(target_path)
        logger.debug(f"Saved document to {target_path}")
        return target_path
