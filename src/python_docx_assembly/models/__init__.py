"""
Data models for python_docx_assembly.

These are plain value objects produced by the catalog and geometry readers.
"""

from python_docx_assembly.models.section import SectionGeometry
from python_docx_assembly.models.style import Style, StyleType

__all__ = [
    "SectionGeometry",
    "Style",
    "StyleType",
]
