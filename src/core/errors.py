"""
Error types for the Archi to SKOS Ontology Converter.

Fatal conditions (TransformationFailed, SerializationFailed, FileParsingError,
InputValidationError) are raised. DatatypeDetectionFailure and
NamespaceResolutionFailure describe recoverable conditions: they are logged and
a default is used instead.
"""

from typing import Optional


class ConverterError(Exception):
    """Base class for all converter errors."""


class InputValidationError(ConverterError, ValueError):
    """Raised when input is rejected before conversion starts."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        self.message = message
        super().__init__(message)


class FileParsingError(ConverterError):
    """Raised when the source document cannot be read as an RDF graph."""


class DatatypeDetectionFailure(ConverterError):
    """A lexical value does not parse under the datatype chosen for it."""

    def __init__(self, value: str, datatype: str, reason: str):
        self.value = value
        self.datatype = datatype
        self.reason = reason
        super().__init__(f"Value '{value}' is not a valid {datatype}: {reason}")


class NamespaceResolutionFailure(ConverterError):
    """The model does not name a usable local data catalog address."""

    def __init__(self, value: Optional[str], reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot use '{value}' as namespace: {reason}")


class TransformationFailed(ConverterError):
    """A transformation pass failed; no partial graph is returned."""

    def __init__(self, pass_id: str, cause: BaseException):
        self.pass_id = pass_id
        self.cause = cause
        super().__init__(f"Transformation pass '{pass_id}' failed: {cause}")


class SerializationFailed(ConverterError):
    """The finished graph could not be serialized."""

    def __init__(self, output_format: str, cause: BaseException):
        self.output_format = output_format
        self.cause = cause
        super().__init__(f"Serialization to '{output_format}' failed: {cause}")
