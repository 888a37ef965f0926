"""
Input validation utilities for the Archi to SKOS Ontology Converter.

This module provides centralized input validation with consistent error messages for:
- Source graph content validation
- File path validation with security checks and size limits
- Model properties and output format checking

All checks run before the transformation engine is invoked, so a rejected
input never reaches the core.

Usage:
    from core.validators.input import InputValidator

    validated_path = InputValidator.validate_input_rdf_path(path)
    output_format = InputValidator.validate_output_format(args.output_format)
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from constants import FileLimits, OutputFormat
from core.errors import InputValidationError

logger = logging.getLogger(__name__)


class InputValidator:
    """
    Centralized input validation for the conversion entry points.

    Security features:
    - Path traversal detection (../ sequences)
    - Symlink rejection
    - Extension validation
    - File size limit
    """

    @staticmethod
    def validate_source_content(content: Any) -> str:
        """
        Validate source graph content.

        Args:
            content: Content to validate (should be non-empty string)

        Returns:
            Validated content string

        Raises:
            InputValidationError: If content is None, not a string, or empty
        """
        if content is None:
            raise InputValidationError("Source content cannot be None", field="content")

        if not isinstance(content, str):
            raise InputValidationError(
                f"Source content must be string, got {type(content).__name__}",
                field="content",
            )

        if not content.strip():
            raise InputValidationError(
                "Source content cannot be empty or whitespace-only", field="content"
            )

        return content

    @staticmethod
    def _check_path_traversal(path_str: str) -> None:
        """
        Check for path traversal attempts.

        Raises:
            InputValidationError: If path traversal detected
        """
        normalized = path_str.replace('\\', '/')
        if any(part == '..' for part in normalized.split('/')):
            raise InputValidationError(
                f"Path traversal detected in path: {path_str}. "
                f"Paths containing '..' are not allowed for security reasons.",
                field="path",
            )

    @staticmethod
    def _check_symlink(path_obj: Path) -> None:
        """Reject symlinked input files."""
        try:
            is_symlink = path_obj.is_symlink()
        except OSError as exc:
            raise PermissionError(f"Cannot verify symlink status for: {path_obj}") from exc

        if is_symlink:
            raise PermissionError(
                f"Symlink detected: {path_obj}. "
                f"Please use the actual file path instead."
            )

    @classmethod
    def validate_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[Iterable[str]] = None,
        max_size_mb: Optional[float] = None,
    ) -> Path:
        """
        Validate an input file path.

        Args:
            path: Path to validate
            allowed_extensions: Allowed suffixes (e.g. ['.ttl', '.rdf'])
            max_size_mb: Largest accepted file size in MB

        Returns:
            Validated Path object (not resolved through symlinks)

        Raises:
            InputValidationError: If the path is empty, has a wrong extension,
                contains traversal or the file is too large
            FileNotFoundError: If the file does not exist
            PermissionError: If the file is a symlink or not readable
        """
        if not isinstance(path, (str, Path)):
            raise InputValidationError(
                f"File path must be string, got {type(path).__name__}", field="path"
            )

        path_str = str(path).strip()
        if not path_str:
            raise InputValidationError("File path cannot be empty", field="path")

        cls._check_path_traversal(path_str)

        path_obj = Path(path_str).absolute()
        cls._check_symlink(path_obj)

        if not path_obj.exists():
            raise FileNotFoundError(f"File not found: {path_obj}")

        if not path_obj.is_file():
            raise InputValidationError(f"Path is not a file: {path_obj}", field="path")

        if allowed_extensions:
            normalized_extensions = [
                ext.lower() if ext.startswith('.') else f'.{ext.lower()}'
                for ext in allowed_extensions
            ]
            if path_obj.suffix.lower() not in normalized_extensions:
                raise InputValidationError(
                    f"Invalid file extension: '{path_obj.suffix}'. "
                    f"Expected one of: {', '.join(normalized_extensions)}",
                    field="path",
                )

        if not os.access(path_obj, os.R_OK):
            raise PermissionError(f"File is not readable: {path_obj}")

        if max_size_mb is not None:
            size_mb = path_obj.stat().st_size / (1024 * 1024)
            if size_mb > max_size_mb:
                raise InputValidationError(
                    f"File too large: {size_mb:.1f} MB exceeds the {max_size_mb} MB limit",
                    field="path",
                )

        return path_obj

    @classmethod
    def validate_input_rdf_path(cls, path: Any) -> Path:
        """Validate a source graph file: RDF extension and size limit."""
        return cls.validate_file_path(
            path,
            allowed_extensions=FileLimits.RDF_EXTENSIONS,
            max_size_mb=FileLimits.MAX_INPUT_FILE_MB,
        )

    @classmethod
    def validate_properties_path(cls, path: Any) -> Path:
        """Validate a model-properties JSON file."""
        return cls.validate_file_path(
            path,
            allowed_extensions=FileLimits.PROPERTIES_EXTENSIONS,
            max_size_mb=FileLimits.MAX_INPUT_FILE_MB,
        )

    @staticmethod
    def validate_output_format(output_format: Any) -> str:
        """
        Validate the requested output format.

        Returns:
            Normalized (lowercase) format name

        Raises:
            InputValidationError: If the format is not supported
        """
        if not isinstance(output_format, str) or not output_format.strip():
            raise InputValidationError("Output format must be a non-empty string", field="output_format")

        normalized = output_format.strip().lower()
        if normalized not in OutputFormat.SUPPORTED:
            raise InputValidationError(
                f"Unsupported output format: '{output_format}'. "
                f"Expected one of: {', '.join(OutputFormat.SUPPORTED)}",
                field="output_format",
            )
        return normalized

    @staticmethod
    def validate_model_properties(properties: Any) -> Dict[str, str]:
        """
        Validate a model properties mapping (label -> value).

        Non-string values are converted with str(); None values are dropped.

        Raises:
            InputValidationError: If properties is not a mapping or has non-string keys
        """
        if properties is None:
            return {}

        if not isinstance(properties, dict):
            raise InputValidationError(
                f"Model properties must be a JSON object, got {type(properties).__name__}",
                field="model_properties",
            )

        validated: Dict[str, str] = {}
        for key, value in properties.items():
            if not isinstance(key, str):
                raise InputValidationError(
                    f"Model property keys must be strings, got {type(key).__name__}",
                    field="model_properties",
                )
            if value is None:
                logger.debug(f"Dropping model property '{key}' without value")
                continue
            validated[key] = value if isinstance(value, str) else str(value)
        return validated

    @staticmethod
    def validate_output_file_path(path: Any) -> Path:
        """
        Validate an output file path for writing.

        Raises:
            InputValidationError: If the path is empty or its directory is missing
            PermissionError: If the directory or file is not writable
        """
        if not isinstance(path, (str, Path)) or not str(path).strip():
            raise InputValidationError("Output path cannot be empty", field="output")

        path_obj = Path(str(path).strip()).absolute()
        parent_dir = path_obj.parent
        if not parent_dir.exists():
            raise InputValidationError(f"Parent directory does not exist: {parent_dir}", field="output")

        if not os.access(parent_dir, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent_dir}")

        if path_obj.exists() and not os.access(path_obj, os.W_OK):
            raise PermissionError(f"File exists but is not writable: {path_obj}")

        return path_obj
