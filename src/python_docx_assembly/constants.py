"""
Centralized constants for OOXML namespaces and other magic values.

This module consolidates namespace URLs, namespace maps, package part paths
and other constants used across the package. Import from here to ensure
consistency and make updates easier.
"""

# =============================================================================
# Word Processing Namespaces
# =============================================================================

# Main WordprocessingML namespace (Word 2007+)
WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


# =============================================================================
# Package and Relationship Namespaces
# =============================================================================

# Open Packaging Convention namespaces
PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"

# Office Document relationships
OFFICE_RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)


# =============================================================================
# Core Properties Namespaces (docProps/core.xml)
# =============================================================================

CORE_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
)
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"
DCMITYPE_NAMESPACE = "http://purl.org/dc/dcmitype/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# xml:space attribute, set to "preserve" on w:t elements
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


# =============================================================================
# Namespace Maps
# =============================================================================

# Basic namespace map with just the main Word namespace
NSMAP = {"w": WORD_NAMESPACE}

# Namespace map for docProps/core.xml
NSMAP_CORE = {
    "cp": CORE_PROPERTIES_NAMESPACE,
    "dc": DC_NAMESPACE,
    "dcterms": DCTERMS_NAMESPACE,
    "dcmitype": DCMITYPE_NAMESPACE,
    "xsi": XSI_NAMESPACE,
}


# =============================================================================
# Package Part Paths
# =============================================================================

WORD_DIR = "word"
DOCUMENT_FILE = "document.xml"
FOOTNOTES_FILE = "footnotes.xml"
STYLES_PATH = "word/styles.xml"
CORE_PROPERTIES_PATH = "docProps/core.xml"
CONTENT_TYPES_PATH = "[Content_Types].xml"

# Header and footer parts are discovered, never assumed
HEADER_FILE_PATTERN = r"^header[0-9]*\.xml$"
FOOTER_FILE_PATTERN = r"^footer[0-9]*\.xml$"


# =============================================================================
# Default/Magic Values
# =============================================================================

# Accepted container suffix for save targets (compared case-insensitively)
DOCX_EXTENSION = ".docx"

# Bookmark Word maintains for the last edit position
GO_BACK_BOOKMARK = "_GoBack"

# Section lengths are stored in twentieths of a point: 20 * 72 per inch
TWIPS_PER_INCH = 20 * 72

# Timestamp format used for core properties
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Section type injected into the last section when it has none
DEFAULT_SECTION_TYPE = "continuous"


# =============================================================================
# Helper Functions
# =============================================================================


def w(tag: str) -> str:
    """Create a fully qualified Word namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "p", "r", "t")

    Returns:
        Fully qualified tag (e.g., "{http://...wordprocessingml/2006/main}p")

    Example:
        >>> w("p")
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}p'
    """
    return f"{{{WORD_NAMESPACE}}}{tag}"


def r(tag: str) -> str:
    """Create a fully qualified Office Relationships namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "id")

    Returns:
        Fully qualified tag with relationship namespace
    """
    return f"{{{OFFICE_RELATIONSHIPS_NAMESPACE}}}{tag}"
