# cvrf_writer/utilities/advisory_loader.py
"""
Builds a Document from a JSON advisory description.

Expected layout (every key optional; missing required fields are reported by
the renderer, not here):

    {
      "encoding": "UTF-8",
      "language": "en",
      "document": {"title": "...", "type": "...", "publisher": "vendor"},
      "tracking": {
        "id": "ACME-2024-001",
        "status": "final",
        "initial_release_date": "2024-01-10T00:00:00Z",
        "current_release_date": "2024-02-01T00:00:00Z",
        "revisions": [{"version": "1.0", "date": "...", "description": "..."}]
      },
      "notes": [{"title": "...", "audience": "...", "type": "...", "text": "..."}],
      "products": [{"name": "...", "id": "...", "branches": [...]} or {"name": "...", "purl": "pkg:..."}],
      "vulnerabilities": [{"title": "...", "notes": [...]}]
    }
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional

from ..document import Document
from ..exceptions import ValidationError, FileSystemError
from .sbom_products import branches_from_purl

logger = logging.getLogger("cvrf-writer")

KNOWN_KEYS = {"encoding", "language", "document", "tracking", "notes", "products", "vulnerabilities"}

# (section key, source key, Document setter)
_SCALAR_FIELDS = [
    (None, "encoding", "set_encoding"),
    (None, "language", "set_language"),
    ("document", "title", "set_document_title"),
    ("document", "type", "set_document_type"),
    ("document", "publisher", "set_document_publisher"),
    ("tracking", "id", "set_identification"),
    ("tracking", "status", "set_status"),
    ("tracking", "initial_release_date", "set_initial_release_date"),
    ("tracking", "current_release_date", "set_current_release_date"),
]


def _section(data: Dict[str, Any], key: Optional[str]) -> Dict[str, Any]:
    if key is None:
        return data
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValidationError(f"Advisory section '{key}' must be an object")
    return section


def _expand_purl(product: Dict[str, Any]) -> Dict[str, Any]:
    """Fills in branches from 'purl' when the product has no explicit branch list."""
    if not isinstance(product, dict) or "purl" not in product or product.get("branches"):
        return product
    expanded = {k: v for k, v in product.items() if k != "purl"}
    expanded["branches"] = branches_from_purl(product["purl"])
    return expanded


def document_from_mapping(data: Dict[str, Any], extra_products: Optional[List[Dict[str, Any]]] = None) -> Document:
    """
    Populates a new Document from a parsed advisory mapping.

    All values go through the Document's public setters, so the model's
    validation rules apply unchanged.

    Args:
        data: Parsed advisory mapping
        extra_products: Additional product entries appended after the advisory's own (e.g. from an SBOM)

    Returns:
        Document: The populated document

    Raises:
        ValidationError: If a section has the wrong JSON type
        InvalidArgumentError: If a field value is rejected by the document model
    """
    if not isinstance(data, dict):
        raise ValidationError("Advisory must be a JSON object")

    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown advisory key(s): {', '.join(unknown)}")

    document = Document()
    for section_key, key, setter in _SCALAR_FIELDS:
        section = _section(data, section_key)
        if key in section:
            getattr(document, setter)(section[key])

    tracking = _section(data, "tracking")
    if "revisions" in tracking:
        document.set_revision_history(tracking["revisions"])
    if "notes" in data:
        document.set_document_notes(data["notes"])

    products = [_expand_purl(product) for product in data.get("products") or []]
    products.extend(extra_products or [])
    if products:
        document.set_products(products)

    if "vulnerabilities" in data:
        document.set_vulnerabilities(data["vulnerabilities"])

    logger.debug(f"Loaded advisory: {document.to_dict()}")
    return document


def load_advisory(file_path: str, extra_products: Optional[List[Dict[str, Any]]] = None) -> Document:
    """
    Reads a JSON advisory file into a Document.

    Raises:
        FileSystemError: If the file doesn't exist or can't be read
        ValidationError: If the file is not valid JSON or not an advisory object
    """
    if not os.path.isfile(file_path):
        raise FileSystemError(f"Advisory file does not exist: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON format in advisory file '{file_path}': {e}") from e
    except OSError as e:
        raise FileSystemError(f"Failed to read advisory file '{file_path}': {e}") from e

    logger.debug(f"Read advisory file: {file_path}")
    return document_from_mapping(data, extra_products=extra_products)
