"""
Transformation result models.

This module defines the data structures returned alongside a transformed
graph: per-pass statistics and the overall transformation result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from rdflib import Graph


@dataclass
class PassStats:
    """
    Statistics for one transformation pass.

    Attributes:
        name: Pass identifier (e.g. "labels")
        added: Number of triples added
        removed: Number of triples removed
        duration_ms: Wall-clock duration in milliseconds
    """
    name: str
    added: int = 0
    removed: int = 0
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "added": self.added,
            "removed": self.removed,
            "durationMs": round(self.duration_ms, 3),
        }


@dataclass
class TransformationResult:
    """
    Result of transforming a source graph into the SKOS vocabulary.

    Attributes:
        graph: The finished graph
        namespace: Effective namespace of the run
        prefix: Prefix bound to the effective namespace
        concept_scheme: IRI of the concept scheme resource
        source_triples: Number of triples in the source graph
        passes: Statistics for each executed pass, in order
    """
    graph: Graph
    namespace: str
    prefix: str
    concept_scheme: str = ""
    source_triples: int = 0
    passes: List[PassStats] = field(default_factory=list)

    @property
    def output_triples(self) -> int:
        return len(self.graph)

    @property
    def duration_ms(self) -> float:
        return sum(p.duration_ms for p in self.passes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "prefix": self.prefix,
            "conceptScheme": self.concept_scheme,
            "sourceTriples": self.source_triples,
            "outputTriples": self.output_triples,
            "passes": [p.to_dict() for p in self.passes],
        }

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Transformation Summary:",
            f"  Namespace: {self.namespace} (prefix '{self.prefix}')",
            f"  Concept scheme: {self.concept_scheme or '-'}",
            f"  Triples: {self.source_triples:,} in, {self.output_triples:,} out",
            f"  Passes: {len(self.passes)} ({self.duration_ms:.1f} ms)",
        ]
        for p in self.passes:
            lines.append(f"    {p.name}: +{p.added} / -{p.removed}")
        return "\n".join(lines)
