"""
Centralized test fixtures for the Archi to SKOS Ontology Converter test suite.

This package provides reusable fixtures for testing, including:
- Source model graphs (Turtle content and graph builders)
- Model properties maps
- Configuration fixtures

Usage:
    from fixtures import MODEL_TTL, MODEL_PROPERTIES, build_model_graph

Or use the pytest fixtures in conftest.py which import from here.
"""

from .model_fixtures import (
    DEFAULT_NS,
    CATALOG_NS,
    CATALOG_LABEL,
    MODEL_NAME,
    MODEL_PROPERTIES,
    CATALOG_PROPERTIES,
    INVALID_CATALOG_PROPERTIES,
    MODEL_TTL,
    EMPTY_MODEL_TTL,
    INVALID_TTL,
    term,
    build_concept_graph,
    build_model_graph,
    build_concepts,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    JSON_LOGGING_CONFIG,
)

__all__ = [
    # Model fixtures
    "DEFAULT_NS",
    "CATALOG_NS",
    "CATALOG_LABEL",
    "MODEL_NAME",
    "MODEL_PROPERTIES",
    "CATALOG_PROPERTIES",
    "INVALID_CATALOG_PROPERTIES",
    "MODEL_TTL",
    "EMPTY_MODEL_TTL",
    "INVALID_TTL",
    "term",
    "build_concept_graph",
    "build_model_graph",
    "build_concepts",

    # Config fixtures
    "SAMPLE_CONFIG",
    "JSON_LOGGING_CONFIG",
]
