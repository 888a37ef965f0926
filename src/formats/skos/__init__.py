"""
SKOS package - Archi model graph to SKOS/OWL vocabulary components.

Components:
- vocabulary: Domain, public-sector and standard vocabulary tables
- graph: Triple graph protocol and collect-then-apply helpers
- datatype_converter: Lexical datatype inference and typed literals
- namespace_resolver: Effective namespace and prefix of a model
- transformer: The ordered transformation passes
- exporter: Turtle and JSON-LD serialization
"""

from .vocabulary import (
    ARCHI_VOCABULARY,
    PUBLIC_SECTOR,
    STANDARD_PREFIXES,
    ArchiVocabulary,
    DomainTerms,
    PublicSectorVocabulary,
)
from .graph import TripleGraph, new_graph
from .datatype_converter import (
    ConversionOutcome,
    DatatypeTag,
    DetectionResult,
    add_typed_property,
    classify,
    convert,
    create_typed_literal,
    detect,
    materialize,
)
from .namespace_resolver import (
    ResolvedNamespace,
    determine_namespace,
    determine_prefix,
    resolve,
)
from .transformer import (
    SKOSTransformer,
    TransformationPass,
    transform,
    transform_with_result,
)
from .exporter import build_jsonld_context, export_graph

__all__ = [
    # Vocabulary
    'ARCHI_VOCABULARY',
    'PUBLIC_SECTOR',
    'STANDARD_PREFIXES',
    'ArchiVocabulary',
    'DomainTerms',
    'PublicSectorVocabulary',
    # Graph
    'TripleGraph',
    'new_graph',
    # Datatypes
    'ConversionOutcome',
    'DatatypeTag',
    'DetectionResult',
    'add_typed_property',
    'classify',
    'convert',
    'create_typed_literal',
    'detect',
    'materialize',
    # Namespace
    'ResolvedNamespace',
    'determine_namespace',
    'determine_prefix',
    'resolve',
    # Transformation
    'SKOSTransformer',
    'TransformationPass',
    'transform',
    'transform_with_result',
    # Export
    'build_jsonld_context',
    'export_graph',
]
