"""Load the library catalog from a local JSON file."""

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from apkstack.exceptions import CatalogError
from apkstack.models.library import Library

_LIBRARIES_ADAPTER = TypeAdapter(list[Library])


def parse_catalog(data: object) -> list[Library]:
    """Validate decoded catalog data.

    Accepts either a list of library rows or an object with a `libraries` list.

    Raises:
        CatalogError: If the data does not describe a list of libraries.
    """
    if isinstance(data, dict):
        data = data.get("libraries")

    if not isinstance(data, list):
        raise CatalogError("Catalog must be a list of libraries")

    try:
        return _LIBRARIES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog entry: {e}") from e


def load_catalog(catalog_path: Path) -> list[Library]:
    """Load libraries from a JSON catalog file, keeping file order.

    Args:
        catalog_path: Path to the JSON catalog.

    Returns:
        Libraries in catalog order.

    Raises:
        CatalogError: If the file is missing, unreadable or invalid.
    """
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Failed to read catalog {catalog_path}: {e}") from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise CatalogError(f"Catalog is not valid JSON: {catalog_path}") from e

    return parse_catalog(data)
