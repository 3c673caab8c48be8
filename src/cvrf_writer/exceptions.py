# cvrf_writer/exceptions.py

from typing import Any, Dict, Optional


class CvrfWriterError(Exception):
    """
    Base exception for all cvrf-writer errors.

    Attributes:
        message: Human readable description of the error
        code: Optional machine readable error code
        details: Optional dictionary with extra context
    """

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class InvalidArgumentError(CvrfWriterError, ValueError):
    """Raised by document setters when a value violates its shape contract."""


class RenderViolationError(CvrfWriterError):
    """
    Raised when a field required for output is absent at render time.

    In tolerant mode the renderer collects these instead of raising them.
    """

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"Required field '{field}' is missing",
            code="missing_required_field",
            details={"field": field},
        )
        self.field = field


class ValidationError(CvrfWriterError):
    """Raised for invalid command-line arguments or malformed input files."""


class FileSystemError(CvrfWriterError):
    """Raised when an input file cannot be read or an output file cannot be written."""


class ConfigurationError(CvrfWriterError):
    """Raised for invalid runtime configuration."""
