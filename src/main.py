#!/usr/bin/env python3
"""
Archi model to SKOS/OWL Ontology Converter

This is the main entry point of the command line interface.

Usage:
    python main.py convert <model.ttl> [--name <model name>] [--properties <props.json>]
    python main.py convert <model.ttl> --output-format json --output vocabulary.jsonld
    python main.py classify <value> [--property <name>]
"""

import sys
from typing import List, Optional

from app.cli.commands import ClassifyCommand, ConvertCommand
from app.cli.parsers import create_argument_parser
from constants import ExitCode

COMMANDS = {
    'convert': ConvertCommand,
    'classify': ClassifyCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=getattr(args, 'config', None))
    return int(command.execute(args))


if __name__ == '__main__':
    sys.exit(main())
