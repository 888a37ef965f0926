"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Model properties loading
- Logging setup
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any, Iterable, Literal, List

from constants import LoggingConfig
from core.errors import InputValidationError
from core.validators.input import InputValidator

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - custom JSON body
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Include any extra fields supplied via extra=
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def get_default_config_path() -> str:
    """Path of config.json in the project root directory."""
    # src/app/cli/helpers.py -> src/app/cli -> src/app -> src -> project root
    project_root = Path(__file__).parent.parent.parent.parent
    return str(project_root / "config.json")


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _coerce_positive_int(value: Any, default: int) -> int:
    """Convert config-provided values to positive integers."""
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _create_file_handler(
    path: str,
    rotation_enabled: bool,
    max_bytes: int,
    backup_count: int
) -> Handler:
    """Create a file or rotating file handler."""
    if rotation_enabled and max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=max(backup_count, 1),
            encoding='utf-8'
        )
    return logging.FileHandler(path, encoding='utf-8')


def setup_logging(
    level: Optional[LogLevel] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    If the primary log file location fails (permission denied, disk full, etc.),
    attempts to write to fallback locations in order:
    1. Requested location
    2. System temp directory
    3. User home directory
    4. Console-only (final fallback)

    Args:
        level: Log level; overrides the 'level' entry of config.
        log_file: Log file path; overrides the 'file' entry of config.
        config: Optional logging configuration dictionary.
        include_console: If False, skip adding a console handler.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    config_dict = dict(config or {})

    resolved_level = str(level or config_dict.get('level') or LoggingConfig.DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt=config_dict.get('pattern') or LoggingConfig.LOG_FORMAT,
            datefmt=config_dict.get('date_format', LoggingConfig.DATE_FORMAT),
        )

    rotation_cfg = config_dict.get('rotation') if isinstance(config_dict.get('rotation'), dict) else {}
    rotation_enabled = rotation_cfg.get('enabled')
    if rotation_enabled is None:
        rotation_enabled = bool(file_path) and LoggingConfig.ROTATION_ENABLED
    max_mb = _coerce_positive_int(rotation_cfg.get('max_mb'), LoggingConfig.MAX_LOG_FILE_MB)
    backup_count = _coerce_positive_int(rotation_cfg.get('backup_count'), LoggingConfig.LOG_BACKUP_COUNT)

    handlers: List[Handler] = []
    actual_log_file = None

    if include_console:
        # Logs go to stderr so serialized output on stdout stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if file_path:
        log_filename = os.path.basename(file_path) or "archi_skos.log"
        fallback_locations = [
            file_path,
            os.path.join(tempfile.gettempdir(), log_filename),
            os.path.join(Path.home(), log_filename),
        ]
        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = _create_file_handler(
                    fallback_path,
                    rotation_enabled=bool(rotation_enabled),
                    max_bytes=max_mb * 1024 * 1024,
                    backup_count=backup_count,
                )
            except OSError as exc:
                print(f"  Could not create log at {fallback_path}: {exc}", file=sys.stderr)
                continue
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
            actual_log_file = fallback_path
            if fallback_path != file_path:
                print(f"Note: Using fallback log file: {fallback_path}", file=sys.stderr)
            break
        else:
            print("Warning: Could not write log file to any location", file=sys.stderr)
            print(f"  Requested: {file_path}", file=sys.stderr)
            print("  Logging to console only", file=sys.stderr)

    if not handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)

    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    logger = logging.getLogger(__name__)
    if actual_log_file:
        logger.info(f"Logging to: {actual_log_file}")

    return actual_log_file


def _load_json_object(path: Path, description: str) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputValidationError(
            f"Invalid JSON in {description} {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise InputValidationError(f"File encoding error in {path}: {e}") from e

    if not isinstance(data, dict):
        raise InputValidationError(
            f"{description.capitalize()} must contain a JSON object, got {type(data).__name__}"
        )
    return data


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Recognized sections:
        logging:    passed to setup_logging()
        conversion: defaults for model_name, output_format and model_properties

    Raises:
        InputValidationError: If the path is invalid or the file is not a JSON object.
        FileNotFoundError: If the configuration file doesn't exist.
        PermissionError: If the file cannot be read or is a symlink.
    """
    if not config_path:
        raise InputValidationError("config_path cannot be empty", field="config")

    try:
        validated_path = InputValidator.validate_file_path(config_path, allowed_extensions=['.json'])
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a config.json file or specify one with --config"
        )

    return _load_json_object(validated_path, "configuration file")


def parse_property_assignments(assignments: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Parse repeated KEY=VALUE arguments.

    Only the first '=' separates key from value, so values may contain '='.

    Raises:
        InputValidationError: If an assignment has no '=' or an empty key.
    """
    properties: Dict[str, str] = {}
    for assignment in assignments or []:
        key, sep, value = assignment.partition('=')
        if not sep or not key.strip():
            raise InputValidationError(
                f"Invalid property '{assignment}', expected KEY=VALUE", field="property"
            )
        properties[key.strip()] = value
    return properties


def load_model_properties(
    properties_path: Optional[str] = None,
    assignments: Optional[Iterable[str]] = None,
    defaults: Optional[Dict[str, Any]] = None,
) -> Dict[str, str]:
    """
    Merge model properties from config defaults, a JSON file and KEY=VALUE flags.

    Later sources win: defaults < file < assignments.
    """
    merged: Dict[str, Any] = dict(defaults or {})

    if properties_path:
        validated_path = InputValidator.validate_properties_path(properties_path)
        merged.update(_load_json_object(validated_path, "properties file"))

    merged.update(parse_property_assignments(assignments))
    return InputValidator.validate_model_properties(merged)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    print("=" * width + "\n")
