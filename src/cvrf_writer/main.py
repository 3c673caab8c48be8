# cvrf_writer/main.py

import sys
import time
import logging

from .cli import parse_cmdline_args
from .utils import format_duration
from .exceptions import (
    CvrfWriterError,
    InvalidArgumentError,
    RenderViolationError,
    ValidationError,
    ConfigurationError,
    FileSystemError,
)
from .handlers import (
    handle_render,
    handle_check,
)


def main() -> int:
    """
    Main function to parse arguments, set up logging and dispatch to the
    appropriate command handler.
    Returns an exit code (0 for success, non-zero for failure).
    """
    start_time = time.monotonic()
    exit_code = 1 # Default to failure
    logger = None

    try:
        params = parse_cmdline_args()

        # Setup logging
        log_level = getattr(logging, params.log.upper(), logging.INFO)
        logging.basicConfig(level=log_level,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                            handlers=[logging.FileHandler("cvrf-writer-log.txt", mode='w')],
                            force=True)

        # Console handler added separately so it gets the simpler format
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        console_handler.setLevel(log_level)
        logging.getLogger().addHandler(console_handler)

        logger = logging.getLogger("cvrf-writer")
        logger.debug("Parsed parameters: %s", params)

        # --- Command Dispatch ---
        COMMAND_HANDLERS = {
            "render": handle_render,
            "check": handle_check,
        }

        handler = COMMAND_HANDLERS.get(params.command)

        if handler:
            result = handler(params) # Handlers raise exceptions on failure

            if params.command == 'check':
                # check returns True when the advisory is complete
                exit_code = 0 if result else 1
                if exit_code == 0:
                    print("\ncvrf-writer finished successfully (Advisory complete).")
                else:
                    print("\ncvrf-writer finished (Advisory INCOMPLETE).")
            else:
                exit_code = 0
                print("\ncvrf-writer finished successfully.")
        else:
            # argparse should already have rejected this
            print(f"Error: Unknown command '{params.command}'.")
            logger.error(f"Unknown command '{params.command}' encountered in main dispatch.")
            exit_code = 1

    # --- Unified Exception Handling ---
    except (ValidationError, ConfigurationError, InvalidArgumentError, RenderViolationError) as e:
        # Problems with the user's input, no traceback needed
        print(f"\nDetailed Error Information:")
        print(f"Runtime Error: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return 1
    except FileSystemError as e:
        print(f"\nDetailed Error Information:")
        print(f"Runtime Error: {e.message}")
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=True)
        return 1
    except CvrfWriterError as e:
        print(f"\nDetailed Error Information:")
        print(f"cvrf-writer Error: {e.message}")
        if logger: logger.error("Unhandled CvrfWriterError: %s", e.message, exc_info=True)
        return 1
    except Exception as e:
        print(f"\nDetailed Error Information:")
        print(f"Unexpected Error: {e}")
        if logger: logger.critical("Unexpected error occurred", exc_info=True)
        return 1
    finally:
        duration_str = format_duration(time.monotonic() - start_time)
        if logger: logger.info("Total execution time: %s", duration_str)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
