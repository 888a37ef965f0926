"""
Core utilities and cross-cutting concerns for the Archi to SKOS Ontology Converter.

This module provides shared infrastructure used by the transformation engine
and the CLI:

- Error types (ConverterError and its subclasses)
- Input validation (InputValidator, URLValidator)

Usage:
    from core import InputValidator, TransformationFailed
    from core.services import ConverterEngine
"""

from .errors import (
    ConverterError,
    InputValidationError,
    FileParsingError,
    DatatypeDetectionFailure,
    NamespaceResolutionFailure,
    TransformationFailed,
    SerializationFailed,
)
from .validators import InputValidator, URLValidator

__all__ = [
    # Errors
    "ConverterError",
    "InputValidationError",
    "FileParsingError",
    "DatatypeDetectionFailure",
    "NamespaceResolutionFailure",
    "TransformationFailed",
    "SerializationFailed",
    # Validators
    "InputValidator",
    "URLValidator",
]
