# cvrf_writer/__init__.py
"""
cvrf-writer: build CVRF 1.1 security advisories and render them as XML.
"""

from .document import Document, PublisherType
from .renderer import Renderer, RenderResult, CvrfNamespace
from .exceptions import CvrfWriterError, InvalidArgumentError, RenderViolationError

__all__ = [
    'Document',
    'PublisherType',
    'Renderer',
    'RenderResult',
    'CvrfNamespace',
    'CvrfWriterError',
    'InvalidArgumentError',
    'RenderViolationError',
]
