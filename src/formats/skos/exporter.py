"""
Serialization of finished vocabulary graphs.

Supported targets:
- ttl:  Turtle, with the prefixes bound on the graph
- json: JSON-LD, compacted against a context built from the same prefixes
"""

import logging
from typing import Dict

from rdflib import Graph

from constants import OutputFormat
from core.errors import SerializationFailed
from core.validators.input import InputValidator

logger = logging.getLogger(__name__)

_RDFLIB_FORMATS = {
    OutputFormat.TURTLE: "turtle",
    OutputFormat.JSON: "json-ld",
}


def build_jsonld_context(graph: Graph) -> Dict[str, str]:
    """Map every bound, non-empty prefix of the graph to its namespace."""
    return {prefix: str(namespace) for prefix, namespace in graph.namespaces() if prefix}


def export_graph(graph: Graph, output_format: str = OutputFormat.TURTLE) -> str:
    """
    Serialize a graph to text.

    Args:
        graph: Graph to serialize
        output_format: 'ttl' or 'json'

    Returns:
        Serialized document

    Raises:
        InputValidationError: If the output format is not supported
        SerializationFailed: If the serializer fails
    """
    output_format = InputValidator.validate_output_format(output_format)
    rdflib_format = _RDFLIB_FORMATS[output_format]

    try:
        if output_format == OutputFormat.JSON:
            data = graph.serialize(
                format=rdflib_format,
                context=build_jsonld_context(graph),
                auto_compact=True,
                indent=2,
            )
        else:
            data = graph.serialize(format=rdflib_format)
    except Exception as e:
        logger.error(f"Failed to serialize graph as {output_format}: {e}")
        raise SerializationFailed(output_format, e) from e

    logger.debug(f"Serialized {len(graph)} triples as {output_format} ({len(data)} characters)")
    return data
