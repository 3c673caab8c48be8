# cvrf_writer/utilities/sbom_products.py
"""
Product list helpers built on package URLs and CycloneDX SBOMs.

Products in an advisory can be described by a purl instead of an explicit
branch list, and a whole product list can be taken from the components of a
CycloneDX JSON BOM.
"""

import os
import json
import logging
from typing import Any, Dict, List

from cyclonedx.schema import SchemaVersion
from cyclonedx.validation.json import JsonStrictValidator
from packageurl import PackageURL

from ..exceptions import ValidationError, FileSystemError

logger = logging.getLogger("cvrf-writer")

SUPPORTED_CYCLONEDX_VERSIONS = ["1.4", "1.5", "1.6"]


def branches_from_purl(purl: str) -> List[Dict[str, str]]:
    """
    Derives a CVRF branch path from a package URL.

    'pkg:maven/org.apache.logging.log4j/log4j-core@2.14.1' becomes
    Vendor=org.apache.logging.log4j, Product Name=log4j-core,
    Product Version=2.14.1. Without a namespace the purl type is used as vendor.

    Raises:
        ValidationError: If the purl cannot be parsed
    """
    try:
        parsed = PackageURL.from_string(purl)
    except ValueError as e:
        raise ValidationError(f"Invalid package URL '{purl}': {e}") from e

    branches = [
        {"type": "Vendor", "name": parsed.namespace or parsed.type},
        {"type": "Product Name", "name": parsed.name},
    ]
    if parsed.version:
        branches.append({"type": "Product Version", "name": parsed.version})
    return branches


def _component_to_product(component: Dict[str, Any]) -> Dict[str, Any]:
    name = component.get("name")
    if not name:
        raise ValidationError("CycloneDX component is missing its name")
    version = component.get("version")
    full_name = f"{name} {version}" if version else name

    if component.get("purl"):
        branches = branches_from_purl(component["purl"])
    else:
        vendor = component.get("group") or component.get("publisher")
        branches = []
        if vendor:
            branches.append({"type": "Vendor", "name": vendor})
        branches.append({"type": "Product Name", "name": name})
        if version:
            branches.append({"type": "Product Version", "name": version})

    return {"name": full_name, "branches": branches}


def products_from_bom_data(bom_data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Converts the components of a parsed CycloneDX BOM into product entries.

    Nested components are flattened depth-first so that every package shipped
    in the BOM becomes one product.
    """
    products = []
    pending = list(bom_data.get("components", []))
    while pending:
        component = pending.pop(0)
        products.append(_component_to_product(component))
        pending[0:0] = component.get("components", [])
    logger.debug(f"Built {len(products)} product(s) from CycloneDX components")
    return products


def load_sbom_products(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads a CycloneDX JSON BOM and returns its components as product entries.

    Args:
        file_path: Path to the CycloneDX JSON file

    Returns:
        List of product mappings accepted by Document.add_product

    Raises:
        FileSystemError: If the file doesn't exist or can't be read
        ValidationError: If the file is not a valid CycloneDX BOM of a supported version
    """
    if not os.path.isfile(file_path):
        raise FileSystemError(f"SBOM file does not exist: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
        bom_data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON format in SBOM file '{file_path}': {e}") from e
    except OSError as e:
        raise FileSystemError(f"Failed to read SBOM file '{file_path}': {e}") from e

    if not isinstance(bom_data, dict) or bom_data.get("bomFormat") != "CycloneDX":
        raise ValidationError("File does not appear to be a CycloneDX BOM (missing or incorrect bomFormat)")

    spec_version = bom_data.get("specVersion", "")
    if not spec_version:
        raise ValidationError("CycloneDX BOM is missing specVersion field")
    if spec_version not in SUPPORTED_CYCLONEDX_VERSIONS:
        raise ValidationError(
            f"CycloneDX {spec_version} is not supported. "
            f"Supported versions: {', '.join(SUPPORTED_CYCLONEDX_VERSIONS)}"
        )

    schema_version = SchemaVersion.from_version(spec_version)
    validation_error = JsonStrictValidator(schema_version).validate_str(content)
    if validation_error:
        raise ValidationError(f"CycloneDX validation failed: {validation_error}")

    logger.debug(f"Validated CycloneDX {spec_version} SBOM: {file_path}")
    return products_from_bom_data(bom_data)
