"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - convert  <path>   Transform an Archi model graph into a SKOS vocabulary
    - classify <value>  Show the datatype inferred for a lexical value
"""

import argparse

from constants import LoggingConfig, OutputFormat


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging flags."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (JSON)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        help=f'Log level (default: {LoggingConfig.DEFAULT_LOG_LEVEL})'
    )


def add_model_flags(parser: argparse.ArgumentParser) -> None:
    """Add model name and model property flags."""
    parser.add_argument(
        '--name', '-n',
        dest='model_name',
        help='Display name of the model, used as the concept scheme label'
    )
    parser.add_argument(
        '--properties', '-p',
        dest='properties_file',
        help='JSON file with model properties (label -> value)'
    )
    parser.add_argument(
        '--property',
        dest='properties',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Model property; may be repeated and overrides --properties'
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add output-related flags."""
    parser.add_argument(
        '--output-format', '-f',
        type=str.lower,
        choices=list(OutputFormat.SUPPORTED),
        help='Output format: ttl (Turtle) or json (JSON-LD). Default: ttl'
    )
    parser.add_argument(
        '--output', '-o',
        help='Output file path (default: input path with .ttl/.jsonld suffix)'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='archi-skos',
        description="Archi model to SKOS/OWL Ontology Converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Convert a model graph to Turtle
    %(prog)s convert model.ttl --name "Registr osob" --properties model.json

    # Override the catalog address and write JSON-LD
    %(prog)s convert model.ttl --property "adresa lokálního katalogu dat=https://data.example.org/"
        --output-format json --output vocabulary.jsonld

    # Inspect datatype inference
    %(prog)s classify 2024-01-15
    %(prog)s classify 42 --property datum-vzniku
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_convert_parser(subparsers)
    _add_classify_parser(subparsers)

    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the convert command parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Transform an Archi model graph into a SKOS vocabulary'
    )
    parser.add_argument('path', help='Path to the source graph file (Turtle, RDF/XML, JSON-LD, ...)')
    parser.add_argument(
        '--input-format',
        help='rdflib parser name of the source file (default: guessed from the extension)'
    )
    add_model_flags(parser)
    add_output_flags(parser)
    add_config_flags(parser)


def _add_classify_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the classify command parser."""
    parser = subparsers.add_parser(
        'classify',
        help='Show the XSD datatype inferred for a value'
    )
    parser.add_argument('value', help='Lexical value to classify')
    parser.add_argument(
        '--property',
        dest='property_name',
        help='Property name used as a datatype hint'
    )
    add_config_flags(parser)
