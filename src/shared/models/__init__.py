"""
Shared data models for the Archi to SKOS Ontology Converter.

Usage:
    from shared.models import TransformationResult, PassStats
"""

from .conversion import (
    PassStats,
    TransformationResult,
)

__all__ = [
    "PassStats",
    "TransformationResult",
]
