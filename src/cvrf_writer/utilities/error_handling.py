"""
Error handling utilities for the cvrf-writer CLI.

This module contains functions for standardized error handling and formatting
across all CLI handlers.
"""

import logging
import argparse
import functools
from typing import Callable

from ..exceptions import (
    CvrfWriterError,
    InvalidArgumentError,
    RenderViolationError,
    ValidationError,
    FileSystemError,
    ConfigurationError,
)

logger = logging.getLogger("cvrf-writer")

def format_and_print_error(error: Exception, handler_name: str, params: argparse.Namespace):
    """
    Formats and prints a standardized error message for CLI users.

    Args:
        error: The exception that occurred
        handler_name: Name of the handler where the error occurred
        params: Command line parameters
    """
    command = getattr(params, 'command', 'unknown')

    # Get error details if available (for our custom errors)
    error_message = getattr(error, 'message', str(error))
    error_code = getattr(error, 'code', None)
    error_details = getattr(error, 'details', {})

    if isinstance(error, RenderViolationError):
        print(f"\n❌ The advisory is incomplete")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • The field '{error.field}' is set in {getattr(params, 'input', 'the input file')}")
        print(f"   • Use --ignore-exceptions to render a partial document and list every missing field")

    elif isinstance(error, InvalidArgumentError):
        print(f"\n❌ Invalid advisory field")
        print(f"   {error_message}")
        print(f"\n💡 Please check the values in {getattr(params, 'input', 'the input file')}")

    elif isinstance(error, FileSystemError):
        print(f"\n❌ File system error")
        print(f"   {error_message}")
        print(f"\n💡 Please check:")
        print(f"   • File permissions are correct")
        print(f"   • All specified paths exist")
        if getattr(params, 'input', None):
            print(f"   • Input specified: {params.input}")

    elif isinstance(error, ValidationError):
        print(f"\n❌ Invalid input or configuration")
        print(f"   {error_message}")
        print(f"\n💡 Please check your command-line arguments and input files")

    elif isinstance(error, ConfigurationError):
        print(f"\n❌ Configuration error")
        print(f"   {error_message}")
        print(f"\n💡 Please check your command-line arguments and environment variables")

    else:
        # Generic error formatting for unexpected errors
        print(f"\n❌ Error executing '{command}' command: {error_message}")

    if error_code:
        print(f"\nError code: {error_code}")

    # Show details in verbose mode
    if getattr(params, 'verbose', False) and error_details:
        print("\nDetailed error information:")
        for key, value in error_details.items():
            print(f"  • {key}: {value}")

    print(f"\nFor more details, run with --log DEBUG for verbose output")

def handler_error_wrapper(handler_func: Callable) -> Callable:
    """
    A decorator that wraps handler functions with standardized error handling.

    Expected errors are logged, formatted for the user and re-raised so main()
    can choose the exit code. Anything else is wrapped in a CvrfWriterError.

    Args:
        handler_func: The handler function to wrap

    Returns:
        The wrapped handler function with error handling

    Example:
        @handler_error_wrapper
        def handle_render(params):
            ...
    """
    @functools.wraps(handler_func)
    def wrapper(params):
        try:
            handler_name = handler_func.__name__
            command_name = params.command if hasattr(params, 'command') else 'unknown'
            logger.debug(f"Starting {handler_name} for command '{command_name}'")

            return handler_func(params)

        except (InvalidArgumentError, RenderViolationError, ValidationError,
                FileSystemError, ConfigurationError) as e:
            logger.debug(f"Expected error in {handler_func.__name__}: {type(e).__name__}: {getattr(e, 'message', str(e))}")
            format_and_print_error(e, handler_func.__name__, params)
            raise

        except Exception as e:
            logger.error(f"Unexpected error in {handler_func.__name__}: {e}", exc_info=True)

            cli_error = CvrfWriterError(
                f"Failed to execute {params.command if hasattr(params, 'command') else 'command'}: {str(e)}",
                details={"error": str(e), "handler": handler_func.__name__}
            )

            format_and_print_error(cli_error, handler_func.__name__, params)
            raise cli_error from e

    return wrapper
