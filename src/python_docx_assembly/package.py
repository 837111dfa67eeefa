"""
OOXMLPackage class for managing the Word document ZIP structure.

This module owns the working directory of a document: it unpacks a .docx
archive (or copies the bundled template) into a private temporary
directory, resolves part paths inside it, and packs the directory back into
a .docx archive. Archive errors raised by zipfile propagate unchanged.
"""

import logging
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import Any

from .constants import CONTENT_TYPES_PATH
from .errors import DocumentNotFoundError

logger = logging.getLogger(__name__)


class OOXMLPackage:
    """Manages the OOXML ZIP package structure.

    This class handles the low-level operations of:
    - Extracting .docx ZIP archives to temporary directories
    - Copying an unpacked template directory into a working directory
    - Resolving package part paths
    - Packing the working directory back to ZIP format
    - Cleaning up temporary resources

    A package exclusively owns its working directory; two packages never
    share one.

    Example:
        >>> with OOXMLPackage.open("document.docx") as pkg:
        ...     doc_path = pkg.get_part_path("word/document.xml")
        ...     # Modify the part on disk...
        ...     pkg.pack("modified.docx")
    """

    def __init__(self, temp_dir: Path, source_path: Path | None = None) -> None:
        """Initialize package with an already-populated directory.

        Use the class methods `open()` or `from_template()` instead of
        calling this constructor directly.

        Args:
            temp_dir: Path to the extracted package contents
            source_path: Original source file or template path
        """
        self._temp_dir = temp_dir
        self._source_path = source_path
        self._closed = False

    @staticmethod
    def _make_working_dir() -> Path:
        return Path(tempfile.mkdtemp(prefix="python_docx_assembly_"))

    @classmethod
    def open(cls, source: str | Path) -> "OOXMLPackage":
        """Unpack a .docx archive into a new working directory.

        Args:
            source: Path to the .docx file

        Returns:
            OOXMLPackage instance with extracted contents

        Raises:
            DocumentNotFoundError: If the source path does not exist
            zipfile.BadZipFile: If the source is not a ZIP archive
        """
        source_path = Path(source)
        if not source_path.exists():
            raise DocumentNotFoundError(str(source_path))

        temp_dir = cls._make_working_dir()
        try:
            with zipfile.ZipFile(source_path, "r") as zip_ref:
                zip_ref.extractall(temp_dir)
        except BaseException:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise

        logger.debug(f"Unpacked {source_path} into {temp_dir}")
        return cls(temp_dir, source_path)

    @classmethod
    def from_template(cls, template: str | Path) -> "OOXMLPackage":
        """Create a working directory from a template.

        Args:
            template: Either an unpacked package directory or a .docx file

        Returns:
            OOXMLPackage instance holding a private copy of the template
        """
        template_path = Path(template)
        if not template_path.is_dir():
            return cls.open(template_path)

        temp_dir = cls._make_working_dir()
        shutil.copytree(template_path, temp_dir, dirs_exist_ok=True)
        logger.debug(f"Copied template {template_path} into {temp_dir}")
        return cls(temp_dir, template_path)

    @property
    def temp_dir(self) -> Path:
        """Get the temporary directory containing extracted package contents."""
        return self._temp_dir

    @property
    def source_path(self) -> Path | None:
        """Get the original source file path, if available."""
        return self._source_path

    @property
    def closed(self) -> bool:
        return self._closed

    def get_part_path(self, part_name: str) -> Path:
        """Get the filesystem path to a package part.

        Args:
            part_name: Relative path within the package (e.g., "word/document.xml")

        Returns:
            Path to the part in the temp directory
        """
        return self._temp_dir / part_name

    def part_exists(self, part_name: str) -> bool:
        """Check if a package part exists.

        Args:
            part_name: Relative path within the package

        Returns:
            True if the part exists
        """
        return self.get_part_path(part_name).exists()

    def list_parts(self) -> list[str]:
        """List every file in the package as a POSIX relative path."""
        return sorted(
            file.relative_to(self._temp_dir).as_posix()
            for file in self._temp_dir.rglob("*")
            if file.is_file()
        )

    def pack(self, output_path: str | Path) -> None:
        """Pack the working directory into a .docx file.

        [Content_Types].xml is written first; the remaining parts follow in
        sorted order so repeated saves produce identical archives.

        Args:
            output_path: Path to save the .docx file
        """
        output_path = Path(output_path)

        parts = self.list_parts()
        if CONTENT_TYPES_PATH in parts:
            parts.remove(CONTENT_TYPES_PATH)
            parts.insert(0, CONTENT_TYPES_PATH)

        with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as zip_ref:
            for arcname in parts:
                zip_ref.write(self._temp_dir / arcname, arcname)

        logger.debug(f"Packed {len(parts)} parts into {output_path}")

    def close(self) -> None:
        """Clean up temporary directory."""
        if not self._closed and self._temp_dir and self._temp_dir.exists():
            shutil.rmtree(self._temp_dir, ignore_errors=True)
            logger.debug(f"Removed working directory {self._temp_dir}")
        self._closed = True

    def __enter__(self) -> "OOXMLPackage":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()

    def __del__(self) -> None:
        """Best-effort cleanup of the temporary directory on garbage collection."""
        if getattr(self, "_temp_dir", None) is not None:
            self.close()
