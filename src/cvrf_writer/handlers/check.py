# cvrf_writer/handlers/check.py

import logging
import argparse

from ..renderer import Renderer
from ..utilities.error_handling import handler_error_wrapper
from .render import load_document, print_violations

logger = logging.getLogger("cvrf-writer")


@handler_error_wrapper
def handle_check(params: argparse.Namespace) -> bool:
    """
    Handler for the 'check' command. Reports every required field the advisory is missing.

    Args:
        params: Command line parameters

    Returns:
        bool: True if the advisory renders without violations, False otherwise
    """
    print(f"\n--- Running {params.command.upper()} Command ---")

    document = load_document(params)
    result = Renderer(document).ignore_exceptions(True).render()

    if result.is_complete:
        print("\n✅ Advisory is complete: all required CVRF fields are present")
        return True

    print_violations(result)
    return False
