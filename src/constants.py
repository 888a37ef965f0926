"""
Centralized configuration constants for the Archi to SKOS Ontology Converter.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 5
    PERMISSION_DENIED = 6


# ============================================================================
# Input Limits
# ============================================================================

class FileLimits:
    """Input file constraints checked before conversion starts."""

    MAX_INPUT_FILE_MB: Final[int] = 10
    """Largest accepted source document (MB)."""

    RDF_EXTENSIONS: Final[tuple] = ('.ttl', '.turtle', '.n3', '.nt', '.rdf', '.owl', '.xml', '.jsonld', '.trig')
    """Accepted source graph file extensions."""

    PROPERTIES_EXTENSIONS: Final[tuple] = ('.json',)
    """Accepted model-properties file extensions."""


# ============================================================================
# Output Formats
# ============================================================================

class OutputFormat:
    """Supported serialization targets."""

    TURTLE: Final[str] = "ttl"
    """Pretty-printed Turtle."""

    JSON: Final[str] = "json"
    """JSON-LD document."""

    SUPPORTED: Final[tuple[str, ...]] = ("ttl", "json")
    """Accepted values for --output-format."""

    FILE_SUFFIXES: Final[dict] = {"ttl": ".ttl", "json": ".jsonld"}
    """Default output file suffix per format."""


# ============================================================================
# Namespace Defaults
# ============================================================================

class NamespaceConfig:
    """Namespace and model-property defaults."""

    DEFAULT_NAMESPACE: Final[str] = "https://slovník.gov.cz/"
    """Base namespace used when the model names no local data catalog."""

    DEFAULT_PREFIX: Final[str] = "domain"
    """Prefix used when none can be derived from the namespace."""

    DEFAULT_LANGUAGE: Final[str] = "cs"
    """Language tag assigned to labels and definitions that carry none."""

    CATALOG_ADDRESS_LABEL: Final[str] = "adresa lokálního katalogu dat"
    """Model property label holding the local data catalog address."""

    DESCRIPTION_KEY: Final[str] = "popis"
    """Model property key holding the concept scheme description."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
