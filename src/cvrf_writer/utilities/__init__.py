"""
Utilities package for the cvrf-writer CLI.

This package contains the advisory loader, SBOM product import and error
handling helpers used by the command handlers.
"""

from .error_handling import format_and_print_error, handler_error_wrapper
from .advisory_loader import load_advisory, document_from_mapping
from .sbom_products import branches_from_purl, products_from_bom_data, load_sbom_products

__all__ = [
    # Error handling
    'format_and_print_error',
    'handler_error_wrapper',
    # Advisory loading
    'load_advisory',
    'document_from_mapping',
    # SBOM products
    'branches_from_purl',
    'products_from_bom_data',
    'load_sbom_products',
]
