# cvrf_writer/handlers/render.py

import os
import logging
import argparse

from ..document import Document
from ..renderer import Renderer, RenderResult
from ..utilities.error_handling import handler_error_wrapper
from ..utilities.advisory_loader import load_advisory
from ..utilities.sbom_products import load_sbom_products
from ..exceptions import FileSystemError

logger = logging.getLogger("cvrf-writer")


def load_document(params: argparse.Namespace) -> Document:
    """Loads the advisory named by --input, appending products from --sbom when given."""
    extra_products = None
    if getattr(params, 'sbom', None):
        print(f"\nReading products from SBOM '{params.sbom}'...")
        extra_products = load_sbom_products(params.sbom)
        print(f"   • {len(extra_products)} product(s) found")

    print(f"\nLoading advisory '{params.input}'...")
    return load_advisory(params.input, extra_products=extra_products)


def print_violations(result: RenderResult) -> None:
    print(f"\n⚠️  {len(result.violations)} required field(s) missing:")
    for violation in result.violations:
        print(f"   • {violation.field}: {violation.message}")


def save_xml_to_file(filepath: str, xml: str, encoding: str) -> None:
    """
    Writes rendered XML to a file, creating the parent directory if needed.

    Raises:
        FileSystemError: If the directory cannot be created or the file cannot be written
    """
    output_dir = os.path.dirname(filepath) or "."
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(filepath, 'w', encoding=encoding) as f:
            f.write(xml)
    except (IOError, OSError) as e:
        raise FileSystemError(f"Failed to write CVRF document to '{filepath}': {e}") from e
    logger.info(f"CVRF document saved to {filepath}")


@handler_error_wrapper
def handle_render(params: argparse.Namespace) -> bool:
    """
    Handler for the 'render' command. Renders an advisory file to CVRF XML.

    Args:
        params: Command line parameters

    Returns:
        bool: True if the operation was successful
    """
    print(f"\n--- Running {params.command.upper()} Command ---")

    document = load_document(params)

    renderer = Renderer(document)
    if params.encoding:
        renderer.set_encoding(params.encoding)
    renderer.ignore_exceptions(params.ignore_exceptions)

    result = renderer.render()
    if result.violations:
        logger.warning(f"Rendered an incomplete document ({len(result.violations)} violation(s))")
        print_violations(result)

    xml = result.to_xml()
    if params.output:
        save_xml_to_file(params.output, xml, result.encoding)
        print(f"\n   • CVRF document saved to: {params.output}")
    else:
        print()
        print(xml)

    return True
