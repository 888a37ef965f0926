"""
Conversion service: parse, transform and export in one place.

ConverterEngine is the entry point used by the CLI. Each step logs a
start/completion line carrying a requestId correlation value and the step
duration; unexpected exceptions are wrapped in the step's own error type while
converter errors propagate unchanged.

Usage:
    engine = ConverterEngine()
    text, result = engine.convert(content, model_name="Registr osob",
                                  model_properties=props, output_format="ttl")
"""

import logging
import time
import uuid
from typing import Mapping, Optional, Tuple

from rdflib import Graph

from constants import OutputFormat
from core.errors import ConverterError, FileParsingError, TransformationFailed
from core.validators.input import InputValidator
from formats.skos.exporter import export_graph
from formats.skos.graph import TripleGraph, new_graph
from formats.skos.transformer import SKOSTransformer
from shared.models import TransformationResult

logger = logging.getLogger(__name__)

DEFAULT_RDF_FORMAT = "turtle"


def _new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class ConverterEngine:
    """Runs the parse → transform → export workflow."""

    def parse(
        self,
        content: str,
        rdf_format: Optional[str] = DEFAULT_RDF_FORMAT,
        request_id: Optional[str] = None,
    ) -> Graph:
        """
        Parse an RDF document into a source graph.

        Args:
            content: Serialized RDF document
            rdf_format: rdflib parser name (turtle, xml, json-ld, ...)
            request_id: Correlation id for log lines

        Returns:
            Parsed graph

        Raises:
            FileParsingError: If content is empty or cannot be parsed
        """
        request_id = request_id or _new_request_id()
        rdf_format = rdf_format or DEFAULT_RDF_FORMAT
        start = time.perf_counter()
        logger.info(f"Parsing source graph: requestId={request_id}, format={rdf_format}")

        try:
            content = InputValidator.validate_source_content(content)
        except ConverterError as e:
            raise FileParsingError(str(e)) from e

        graph = new_graph()
        try:
            graph.parse(data=content, format=rdf_format)
        except Exception as e:
            logger.error(f"Failed to parse source graph: requestId={request_id}, error={e}")
            raise FileParsingError(f"Invalid RDF ({rdf_format}) content: {e}") from e

        if len(graph) == 0:
            logger.warning(f"Parsed graph is empty - no triples found: requestId={request_id}")

        logger.info(
            f"Parsed source graph: requestId={request_id}, triples={len(graph)}, "
            f"durationMs={_elapsed_ms(start):.1f}"
        )
        return graph

    def transform(
        self,
        graph: TripleGraph,
        model_name: Optional[str] = "",
        model_properties: Optional[Mapping[str, str]] = None,
        request_id: Optional[str] = None,
    ) -> TransformationResult:
        """
        Transform a source graph into the vocabulary graph.

        Raises:
            TransformationFailed: If a pass fails
        """
        request_id = request_id or _new_request_id()
        start = time.perf_counter()
        logger.info(f"Starting conversion: requestId={request_id}, modelName={model_name!r}")

        try:
            transformer = SKOSTransformer(model_name, model_properties)
            result = transformer.transform_with_result(graph)
        except ConverterError:
            raise
        except Exception as e:
            logger.error(f"Conversion failed: requestId={request_id}, error={e}", exc_info=True)
            raise TransformationFailed("setup", e) from e

        logger.info(
            f"Conversion completed: requestId={request_id}, triples={result.output_triples}, "
            f"durationMs={_elapsed_ms(start):.1f}"
        )
        return result

    def export(
        self,
        graph: Graph,
        output_format: str = OutputFormat.TURTLE,
        request_id: Optional[str] = None,
    ) -> str:
        """
        Serialize the finished graph.

        Raises:
            InputValidationError: If the output format is not supported
            SerializationFailed: If serialization fails
        """
        request_id = request_id or _new_request_id()
        start = time.perf_counter()
        logger.info(f"Starting export: requestId={request_id}, format={output_format}")

        data = export_graph(graph, output_format)

        logger.info(
            f"Export completed: requestId={request_id}, characters={len(data)}, "
            f"durationMs={_elapsed_ms(start):.1f}"
        )
        return data

    def convert(
        self,
        content: str,
        model_name: Optional[str] = "",
        model_properties: Optional[Mapping[str, str]] = None,
        output_format: str = OutputFormat.TURTLE,
        rdf_format: Optional[str] = DEFAULT_RDF_FORMAT,
    ) -> Tuple[str, TransformationResult]:
        """
        Parse, transform and export one document.

        The output format is checked before any work is done.

        Returns:
            Tuple of (serialized output, transformation result)
        """
        output_format = InputValidator.validate_output_format(output_format)
        request_id = _new_request_id()

        source = self.parse(content, rdf_format, request_id=request_id)
        result = self.transform(source, model_name, model_properties, request_id=request_id)
        data = self.export(result.graph, output_format, request_id=request_id)
        return data, result
