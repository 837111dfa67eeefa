"""
python_docx_assembly - Open, inspect, restyle and re-assemble Word documents.

This package unpacks a .docx file (or a bundled blank template) into a
working directory, gives access to its parts, styles, section geometry and
metadata, and packs everything back into a valid .docx on save.

Example:
    >>> from python_docx_assembly import Document
    >>> doc = Document("report.docx")
    >>> doc.change_styles({"heading 2": ["heading 1"]})
    >>> doc.set_doc_properties(title="Quarterly report")
    >>> doc.save("report_restyled.docx")
"""

__version__ = "0.1.0"
__all__ = [
    "Document",
    "open_document",
    "load_style_map",
    "OOXMLPackage",
    "ContentTypeManager",
    "ContentTypes",
    "RelationshipManager",
    "RelationshipTypes",
    "CoreProperties",
    "StyleCatalog",
    "Style",
    "StyleType",
    "SectionGeometry",
    "DocumentPart",
    "PartKind",
    "NodeHandle",
    "AssemblyPipeline",
    "IdCounter",
    "DocxAssemblyError",
    "DocumentNotFoundError",
    "InvalidTargetExtensionError",
    "UnknownStyleNameError",
    "CursorUnresolvedError",
    "PartNotFoundError",
    "BookmarkNotFoundError",
    "StaleNodeError",
    "StyleMapError",
]

from .assembly import AssemblyPipeline, IdCounter
from .content_types import ContentTypeManager, ContentTypes
from .document import Document, open_document
from .errors import (
    BookmarkNotFoundError,
    CursorUnresolvedError,
    DocumentNotFoundError,
    DocxAssemblyError,
    InvalidTargetExtensionError,
    PartNotFoundError,
    StaleNodeError,
    StyleMapError,
    UnknownStyleNameError,
)
from .models import SectionGeometry, Style, StyleType
from .package import OOXMLPackage
from .parts import DocumentPart, NodeHandle, PartKind
from .properties import CoreProperties
from .relationships import RelationshipManager, RelationshipTypes
from .style_map import load_style_map
from .styles import StyleCatalog
