"""
Custom exception classes for python_docx_assembly package.

These exceptions carry the offending values as attributes and format a
helpful message from them, so callers can either display the error or
inspect it programmatically.
"""


class DocxAssemblyError(Exception):
    """Base exception for all python_docx_assembly errors."""

    pass


class DocumentNotFoundError(DocxAssemblyError, FileNotFoundError):
    """Raised when an explicit document path does not exist.

    Attributes:
        path: The path that was requested
    """

    def __init__(self, path: str) -> None:
        self.path = str(path)
        super().__init__(f"Could not find file '{self.path}'")


class InvalidTargetExtensionError(DocxAssemblyError, ValueError):
    """Raised when a save target does not carry the .docx suffix.

    Attributes:
        target: The rejected target path
        expected: The expected suffix
    """

    def __init__(self, target: str, expected: str = ".docx") -> None:
        self.target = str(target)
        self.expected = expected
        super().__init__(f"{self.target} should have '{self.expected}' extension.")


class UnknownStyleNameError(DocxAssemblyError, ValueError):
    """Raised when a style remapping references styles absent from the catalog.

    All missing names are reported at once, never only the first offender.

    Attributes:
        missing: Style names that could not be found, in request order
        suggestions: Mapping of missing name to close existing style names
    """

    def __init__(
        self,
        missing: list[str],
        suggestions: dict[str, list[str]] | None = None,
    ) -> None:
        self.missing = list(missing)
        self.suggestions = suggestions or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message listing every missing style."""
        quoted = ", ".join(f"'{name}'" for name in self.missing)
        msg = f"Could not find style {quoted}."

        hints = {name: close for name, close in self.suggestions.items() if close}
        if hints:
            msg += "\n\nDid you mean:\n"
            for name, close in hints.items():
                msg += f"  • '{name}': {', '.join(close)}\n"

        return msg


class CursorUnresolvedError(DocxAssemblyError):
    """Raised when a part's cursor resolves to no node.

    Attributes:
        part_name: The part whose cursor was read (e.g., "word/document.xml")
        cursor: The XPath expression that resolved to nothing
    """

    def __init__(self, part_name: str, cursor: str | None) -> None:
        self.part_name = part_name
        self.cursor = cursor
        super().__init__(f"Cursor '{cursor}' does not resolve to a node in {part_name}")


class PartNotFoundError(DocxAssemblyError, FileNotFoundError):
    """Raised when a package part file is absent from the working directory.

    Attributes:
        part_name: Relative path of the missing part
    """

    def __init__(self, part_name: str) -> None:
        self.part_name = part_name
        super().__init__(f"Part not found in package: {part_name}")


class BookmarkNotFoundError(DocxAssemblyError):
    """Raised when the cursor is moved to a bookmark that does not exist.

    Attributes:
        name: The bookmark name that was searched for
        available: Bookmark names present in the document
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message with available bookmarks."""
        msg = f"Bookmark '{self.name}' not found"
        if self.available:
            msg += f"\n\nAvailable bookmarks: {', '.join(self.available)}"
        else:
            msg += "\n\nNo bookmarks exist in the document"
        return msg


class StaleNodeError(DocxAssemblyError):
    """Raised when a node handle is used after its part was mutated.

    Attributes:
        part_name: The part the handle was issued from
    """

    def __init__(self, part_name: str) -> None:
        self.part_name = part_name
        super().__init__(
            f"Node handle for {part_name} is stale: the part was modified after "
            "the handle was obtained. Query the part again."
        )


class StyleMapError(DocxAssemblyError):
    """Raised when a style mapping file or option cannot be parsed.

    Attributes:
        source: The file or option text the mapping came from
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)
