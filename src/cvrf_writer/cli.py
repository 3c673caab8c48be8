# cvrf_writer/cli.py

import argparse
import os
import logging
from argparse import RawTextHelpFormatter

from .exceptions import ValidationError, ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# --- Helper functions for common arguments ---
def add_common_input_options(subparser):
    input_args = subparser.add_argument_group("Input Options")
    input_args.add_argument("--input", help="Path to the JSON advisory description.", required=True, metavar="PATH")
    input_args.add_argument("--sbom", help="CycloneDX JSON SBOM whose components are appended to the product list.", metavar="PATH")

# --- Main Parsing Function ---
def parse_cmdline_args():
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments

    Raises:
        ValidationError: If required arguments are missing or invalid
        ConfigurationError: If CVRF_WRITER_LOG holds an unknown level
    """
    parser = argparse.ArgumentParser(
        description="cvrf-writer - Render security advisories as CVRF 1.1 XML documents.",
        formatter_class=RawTextHelpFormatter,
        epilog="""
Environment Variables:
  CVRF_WRITER_LOG       : Default log level (DEBUG, INFO, WARNING, ERROR)
  CVRF_WRITER_ENCODING  : Default output encoding for the render command

Example Usage:
  # Render an advisory to a file
  cvrf-writer render --input advisory.json --output advisory.xml

  # Render with the product list taken from an SBOM
  cvrf-writer render --input advisory.json --sbom bom.json --output advisory.xml

  # Render whatever is present and list missing fields
  cvrf-writer render --input draft.json --ignore-exceptions

  # Check an advisory for missing required fields
  cvrf-writer check --input advisory.json
"""
    )

    # --- Global Arguments (apply to all subcommands) ---
    global_args = parser.add_argument_group("Global Arguments")
    global_args.add_argument(
        "--log",
        help="Logging level (Default: INFO). Overrides CVRF_WRITER_LOG env var.",
        choices=LOG_LEVELS,
        default=(os.getenv("CVRF_WRITER_LOG") or "INFO").upper(),
    )
    global_args.add_argument("--verbose", help="Show detailed error information.", action="store_true", default=False)

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # --- 'render' Subcommand ---
    render_parser = subparsers.add_parser(
        "render",
        help="Render an advisory as a CVRF XML document.",
        description="Render an advisory as a CVRF XML document.",
        formatter_class=RawTextHelpFormatter,
    )
    add_common_input_options(render_parser)
    output_args = render_parser.add_argument_group("Output Options")
    output_args.add_argument("--output", help="File to write the XML to (Default: print to stdout).", metavar="PATH")
    output_args.add_argument(
        "--encoding",
        help="Encoding declared in the XML output. Overrides the advisory's own encoding and CVRF_WRITER_ENCODING.",
        default=os.getenv("CVRF_WRITER_ENCODING"),
        metavar="ENCODING",
    )
    output_args.add_argument(
        "--ignore-exceptions",
        help="Render a partial document and list missing required fields instead of stopping at the first one.",
        action="store_true",
        default=False,
    )

    # --- 'check' Subcommand ---
    check_parser = subparsers.add_parser(
        "check",
        help="Report every required CVRF field missing from an advisory.",
        description="Report every required CVRF field missing from an advisory. Exits with 1 if any are missing.",
        formatter_class=RawTextHelpFormatter,
    )
    add_common_input_options(check_parser)

    args = parser.parse_args()

    if args.log not in LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level '{args.log}'. Choose one of: {', '.join(LOG_LEVELS)}")

    # Validate command-specific parameters
    if not os.path.exists(args.input):
        raise ValidationError(f"Input path does not exist: {args.input}")
    if args.sbom and not os.path.exists(args.sbom):
        raise ValidationError(f"SBOM path does not exist: {args.sbom}")

    if args.command == 'render':
        if args.encoding is not None and not args.encoding.strip():
            raise ValidationError("Encoding must not be empty")
        if args.output and os.path.isdir(args.output):
            raise ValidationError(f"Output path is a directory: {args.output}")

    return args
