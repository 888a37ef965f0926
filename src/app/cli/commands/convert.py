"""
Convert command: Archi model graph to SKOS vocabulary file.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from rdflib.util import guess_format

from constants import ExitCode, OutputFormat
from core.errors import (
    ConverterError,
    FileParsingError,
    InputValidationError,
)
from core.validators.input import InputValidator
from .base import BaseCommand
from ..helpers import load_model_properties, print_footer, print_header


logger = logging.getLogger(__name__)

DEFAULT_INPUT_FORMAT = "turtle"


def default_output_path(input_path: Path, output_format: str) -> Path:
    """<input stem>_skos.<suffix> next to the input file."""
    suffix = OutputFormat.FILE_SUFFIXES[output_format]
    return input_path.with_name(f"{input_path.stem}_skos{suffix}")


class ConvertCommand(BaseCommand):
    """
    Transform a source graph file into a SKOS vocabulary file.

    Usage:
        convert <path> [--name NAME] [--properties FILE] [--property K=V]
                       [--output-format ttl|json] [--output FILE]
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            self.setup_logging_from_config(getattr(args, 'log_level', None))
        except (InputValidationError, FileNotFoundError, PermissionError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        try:
            return self._convert(args)
        except InputValidationError as e:
            print(f"✗ Invalid input: {e}")
            return ExitCode.VALIDATION_ERROR
        except FileParsingError as e:
            print(f"✗ Invalid RDF content: {e}")
            return ExitCode.VALIDATION_ERROR
        except FileNotFoundError as e:
            print(f"✗ File not found: {e}")
            return ExitCode.FILE_NOT_FOUND
        except PermissionError as e:
            print(f"✗ Permission denied: {e}")
            return ExitCode.PERMISSION_DENIED
        except ConverterError as e:
            logger.error(f"Conversion failed: {e}")
            print(f"✗ Conversion failed: {e}")
            return ExitCode.ERROR

    def _conversion_defaults(self) -> Dict[str, Any]:
        defaults = self.config.get('conversion', {})
        if not isinstance(defaults, dict):
            raise InputValidationError("Configuration section 'conversion' must be a JSON object", field="config")
        return defaults

    def _convert(self, args: argparse.Namespace) -> int:
        defaults = self._conversion_defaults()

        validated_path = InputValidator.validate_input_rdf_path(args.path)
        output_format = InputValidator.validate_output_format(
            args.output_format or defaults.get('output_format') or OutputFormat.TURTLE
        )

        default_properties = defaults.get('model_properties')
        if default_properties is not None and not isinstance(default_properties, dict):
            raise InputValidationError(
                "Configuration entry 'conversion.model_properties' must be a JSON object", field="config"
            )
        model_properties = load_model_properties(
            args.properties_file,
            args.properties,
            defaults=default_properties,
        )
        model_name = args.model_name or defaults.get('model_name') or ""

        output_path = Path(args.output) if args.output else default_output_path(validated_path, output_format)
        validated_output = InputValidator.validate_output_file_path(output_path)

        rdf_format = args.input_format or guess_format(str(validated_path)) or DEFAULT_INPUT_FORMAT

        print(f"✓ Converting model graph: {validated_path}")

        try:
            with open(validated_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise InputValidationError(f"File encoding error in {validated_path}: {e}", field="path") from e

        data, result = self.get_engine().convert(
            content,
            model_name=model_name,
            model_properties=model_properties,
            output_format=output_format,
            rdf_format=rdf_format,
        )

        with open(validated_output, 'w', encoding='utf-8') as f:
            f.write(data)

        print_header("CONVERSION SUMMARY")
        print(result.get_summary())
        print_footer()
        print(f"Saved to: {validated_output}")
        return ExitCode.SUCCESS
