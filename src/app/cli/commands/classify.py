"""
Classify command: show the datatype inferred for a single value.
"""

import argparse

from constants import ExitCode
from core.errors import InputValidationError
from formats.skos.datatype_converter import detect, materialize
from .base import BaseCommand


class ClassifyCommand(BaseCommand):
    """
    Print the detected datatype, the reason and the resulting literal.

    Usage:
        classify <value> [--property NAME]
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            self.setup_logging_from_config(getattr(args, 'log_level', None))
        except (InputValidationError, FileNotFoundError, PermissionError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        result = detect(args.value, args.property_name)
        literal = materialize(args.value, result.tag)

        print(f"Value:    {args.value}")
        print(f"Datatype: {result.tag.value}")
        print(f"Reason:   {result.message}")
        print(f"Literal:  {literal.n3()}")
        return ExitCode.SUCCESS
