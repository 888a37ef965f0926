"""
Triple graph access for the SKOS transformation.

The transformation passes only need three operations from a graph: add a
triple, remove triples matching a pattern, and iterate triples matching a
pattern. TripleGraph captures that capability; rdflib.Graph satisfies it, and
is the store used for the private working graph.

Nodes are rdflib terms:
- Resource: URIRef (or BNode for anonymous subjects)
- PlainLiteral: Literal with an optional language tag
- TypedLiteral: Literal with a datatype IRI

Helpers in this module implement the collect-then-apply pattern used by every
pass: statements to add and remove are gathered while iterating, and applied
afterwards so the graph is never modified during iteration.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

logger = logging.getLogger(__name__)

Triple = Tuple[Node, Node, Node]
TriplePattern = Tuple[Optional[Node], Optional[Node], Optional[Node]]


@runtime_checkable
class TripleGraph(Protocol):
    """Capability required from a graph by the transformation passes."""

    def add(self, triple: Triple) -> object:
        """Add one triple."""
        ...

    def remove(self, triple: TriplePattern) -> object:
        """Remove all triples matching a pattern (None is a wildcard)."""
        ...

    def triples(self, triple: TriplePattern) -> Iterator[Triple]:
        """Iterate over triples matching a pattern (None is a wildcard)."""
        ...


def new_graph() -> Graph:
    """Create an empty in-memory graph with only the core prefixes bound."""
    return Graph(bind_namespaces="core")


def is_literal(node: Node) -> bool:
    return isinstance(node, Literal)


def is_resource(node: Node) -> bool:
    return isinstance(node, (URIRef, BNode))


def is_empty_literal(node: Node) -> bool:
    """True for a literal whose lexical value is empty or whitespace-only."""
    if not isinstance(node, Literal):
        return False
    return not str(node).strip()


def is_empty_literal_statement(triple: Triple) -> bool:
    return is_empty_literal(triple[2])


def match(graph: TripleGraph, subject=None, predicate=None, obj=None) -> List[Triple]:
    """
    Materialize the triples matching a pattern.

    Returning a list makes it safe to modify the graph while walking the
    result.
    """
    return list(graph.triples((subject, predicate, obj)))


def apply_changes(
    graph: TripleGraph,
    to_remove: Iterable[Triple] = (),
    to_add: Iterable[Triple] = (),
) -> Tuple[int, int]:
    """
    Apply collected removals first, then additions.

    Returns:
        Tuple of (removed count, added count)
    """
    removed = 0
    for triple in to_remove:
        graph.remove(triple)
        removed += 1

    added = 0
    for triple in to_add:
        graph.add(triple)
        added += 1

    return removed, added


def remove_all(graph: TripleGraph, subject=None, predicate=None, obj=None) -> int:
    """Remove every triple matching the pattern and return how many were removed."""
    matched = match(graph, subject, predicate, obj)
    for triple in matched:
        graph.remove(triple)
    return len(matched)


def remove_empty_literals(graph: TripleGraph, predicate: Optional[Node] = None) -> int:
    """
    Remove statements whose object is an empty literal.

    Args:
        graph: Graph to clean
        predicate: Restrict the sweep to one predicate; None sweeps the whole graph

    Returns:
        Number of removed statements
    """
    to_remove = [t for t in graph.triples((None, predicate, None)) if is_empty_literal_statement(t)]
    for triple in to_remove:
        logger.debug(f"Removing empty literal statement: {triple}")
    removed, _ = apply_changes(graph, to_remove=to_remove)
    return removed


def has_type(graph: TripleGraph, subject: Node, rdf_type: Node) -> bool:
    """True if (subject, rdf:type, rdf_type) is in the graph."""
    for _ in graph.triples((subject, RDF.type, rdf_type)):
        return True
    return False


def subjects_of_type(graph: TripleGraph, rdf_type: Node) -> List[Node]:
    """
    Distinct subjects typed with rdf_type, in sorted order.

    Sorting keeps every pass deterministic regardless of store iteration order.
    """
    subjects = {s for s, _, _ in graph.triples((None, RDF.type, rdf_type))}
    return sorted(subjects)


def first_subject_of_type(graph: TripleGraph, rdf_type: Node) -> Optional[Node]:
    subjects = subjects_of_type(graph, rdf_type)
    return subjects[0] if subjects else None


def copy_graph(source: TripleGraph, keep=None) -> Graph:
    """
    Copy a graph into a new in-memory graph.

    Args:
        source: Graph to copy (never modified)
        keep: Optional predicate deciding which triples are copied

    Returns:
        The new graph
    """
    target = new_graph()
    for triple in source.triples((None, None, None)):
        if keep is None or keep(triple):
            target.add(triple)
    return target


def triple_set(graph: TripleGraph) -> set:
    """All triples of a graph as a set, for comparisons."""
    return set(graph.triples((None, None, None)))
