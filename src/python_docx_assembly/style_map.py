"""
Loading style remapping tables for Document.change_styles().

A style map associates each destination style name with the source style
names it replaces. Maps come from YAML files or from command-line options
of the form "to=from1,from2".

Example YAML file:
    ```yaml
    styles:
      heading 2:
        - heading 1
        - Title
      Normal: centered
    ```
"""

import logging
from pathlib import Path

import yaml

from .errors import StyleMapError

logger = logging.getLogger(__name__)

StyleMap = dict[str, list[str]]


def _normalize(data: object, source: str) -> StyleMap:
    if not isinstance(data, dict):
        raise StyleMapError("Style map must be a mapping of destination -> sources", source)

    mapping: StyleMap = {}
    for to, sources in data.items():
        if isinstance(sources, str):
            sources = [sources]
        if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
            raise StyleMapError(f"Sources of '{to}' must be a style name or a list of names", source)
        mapping[str(to)] = list(sources)
    return mapping


def load_style_map(path: str | Path) -> StyleMap:
    """Load a style map from a YAML file.

    The file is either the mapping itself or a mapping under a top-level
    "styles" key.

    Args:
        path: Path to the YAML file

    Returns:
        Destination style name -> list of source style names

    Raises:
        FileNotFoundError: If the file does not exist
        StyleMapError: If the file cannot be parsed or has an invalid shape
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Style map file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StyleMapError(f"Failed to parse YAML file: {e}", str(path)) from e

    if isinstance(data, dict) and "styles" in data:
        data = data["styles"]

    mapping = _normalize(data, str(path))
    logger.debug(f"Loaded {len(mapping)} style mapping(s) from {path}")
    return mapping


def parse_map_option(option: str) -> StyleMap:
    """Parse a "to=from1,from2" option into a one-entry style map.

    Raises:
        StyleMapError: If the option has no "=" or names no source
    """
    to, sep, sources = option.partition("=")
    names = [name.strip() for name in sources.split(",") if name.strip()]
    if not sep or not to.strip() or not names:
        raise StyleMapError(f"Invalid style mapping '{option}', expected 'to=from1,from2'", option)
    return {to.strip(): names}


def merge_style_maps(*maps: StyleMap) -> StyleMap:
    """Merge style maps, concatenating sources of a repeated destination."""
    merged: StyleMap = {}
    for style_map in maps:
        for to, sources in style_map.items():
            bucket = merged.setdefault(to, [])
            bucket.extend(name for name in sources if name not in bucket)
    return merged
