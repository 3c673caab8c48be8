# cvrf_writer/handlers/__init__.py

import logging

# Common logger for all handlers
logger = logging.getLogger("cvrf-writer")

# Import handlers
from .render import handle_render
from .check import handle_check

__all__ = [
    'handle_render',
    'handle_check',
]
