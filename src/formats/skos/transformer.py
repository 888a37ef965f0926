"""
Archi model graph to SKOS/OWL vocabulary transformer.

This module rewrites the triple graph produced from an Archi model into a
graph over the target vocabulary: one skos:ConceptScheme, skos:Concept
members typed with OWL classes and properties, skos:prefLabel and
skos:definition in place of the domain label/definition predicates, and the
public-sector vocabularies in place of the remaining domain predicates.

The rewrite runs as ten ordered passes over a private copy of the source
graph:

    1. copy-filter       copy the source, dropping empty literals
    2. prefixes          bind standard prefixes and the domain prefix
    3. concept-scheme    find or mint the ontology and make it the scheme
    4. concept-typing    add SKOS/OWL/public-sector types to concepts
    5. labels            unify rdfs:label into skos:prefLabel
    6. definitions       move domain definitions to skos:definition
    7. domain-range      materialize rdfs:domain and rdfs:range
    8. property-mapping  remap domain predicates to standard ones
    9. in-scheme         attach every concept to the scheme
   10. cleanup           remove every remaining empty literal

Running the transformer on its own output changes nothing.

Usage:
    transformer = SKOSTransformer(model_name="Registr osob", model_properties=props)
    result = transformer.transform_with_result(source_graph)
    print(result.get_summary())
"""

import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, SKOS
from rdflib.term import Node
from tqdm import tqdm

from constants import NamespaceConfig
from core.errors import TransformationFailed
from core.validators.url import URLValidator
from shared.models import PassStats, TransformationResult
from .datatype_converter import DatatypeTag, materialize
from .graph import (
    Triple,
    TripleGraph,
    apply_changes,
    copy_graph,
    first_subject_of_type,
    has_type,
    is_empty_literal,
    is_empty_literal_statement,
    is_literal,
    is_resource,
    match,
    remove_all,
    remove_empty_literals,
    subjects_of_type,
)
from .namespace_resolver import ResolvedNamespace, resolve
from .vocabulary import (
    ARCHI_VOCABULARY,
    PUBLIC_SECTOR,
    STANDARD_PREFIXES,
    XSD_NAMESPACE,
    ArchiVocabulary,
    DomainTerms,
    PublicSectorVocabulary,
)

logger = logging.getLogger(__name__)

Changes = Tuple[int, int]


class TransformationPass(str, Enum):
    """Identifiers of the transformation passes, in execution order."""
    COPY_FILTER = "copy-filter"
    PREFIXES = "prefixes"
    CONCEPT_SCHEME = "concept-scheme"
    CONCEPT_TYPING = "concept-typing"
    LABELS = "labels"
    DEFINITIONS = "definitions"
    DOMAIN_RANGE = "domain-range"
    PROPERTY_MAPPING = "property-mapping"
    IN_SCHEME = "in-scheme"
    CLEANUP = "cleanup"


class SKOSTransformer:
    """
    Transforms an Archi model graph into a SKOS/OWL vocabulary graph.

    The transformer holds only immutable configuration; each call to
    transform() works on its own copy of the source graph, so one instance
    may be shared between threads.
    """

    def __init__(
        self,
        model_name: Optional[str] = "",
        model_properties: Optional[Mapping[str, str]] = None,
        vocabulary: ArchiVocabulary = ARCHI_VOCABULARY,
        public_sector: PublicSectorVocabulary = PUBLIC_SECTOR,
    ) -> None:
        """
        Initialize the transformer.

        Args:
            model_name: Display name of the model, used as the scheme label
            model_properties: Model metadata (label -> value)
            vocabulary: Local names of the domain vocabulary
            public_sector: Public-sector vocabulary IRIs
        """
        self.model_name: str = model_name or ""
        self.model_properties: Dict[str, str] = dict(model_properties or {})
        self.resolved: ResolvedNamespace = resolve(self.model_properties)
        self.terms: DomainTerms = DomainTerms.for_namespace(self.resolved.namespace, vocabulary)
        self.public_sector = public_sector
        self.language: str = NamespaceConfig.DEFAULT_LANGUAGE

    @property
    def namespace(self) -> str:
        return self.resolved.namespace

    @property
    def prefix(self) -> str:
        return self.resolved.prefix

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def transform(self, source: TripleGraph) -> Graph:
        """Transform source into a new graph. source is not modified."""
        return self.transform_with_result(source).graph

    def transform_with_result(self, source: TripleGraph) -> TransformationResult:
        """
        Transform source and report per-pass statistics.

        Raises:
            TransformationFailed: If any pass fails; no graph is returned
        """
        source_triples = sum(1 for _ in source.triples((None, None, None)))
        logger.info(
            f"Starting transformation: modelName={self.model_name!r}, "
            f"namespace={self.namespace}, sourceTriples={source_triples}"
        )

        stats: List[PassStats] = []
        graph = self._run_copy(source, stats)

        passes: List[Tuple[TransformationPass, Callable[[Graph], Changes]]] = [
            (TransformationPass.PREFIXES, self._register_prefixes),
            (TransformationPass.CONCEPT_SCHEME, self._create_concept_scheme),
            (TransformationPass.CONCEPT_TYPING, self._type_concepts),
            (TransformationPass.LABELS, self._unify_labels),
            (TransformationPass.DEFINITIONS, self._migrate_definitions),
            (TransformationPass.DOMAIN_RANGE, self._materialize_domain_range),
            (TransformationPass.PROPERTY_MAPPING, self._map_standard_properties),
            (TransformationPass.IN_SCHEME, self._add_scheme_membership),
            (TransformationPass.CLEANUP, self._cleanup),
        ]
        for pass_id, pass_func in passes:
            stats.append(self._run_pass(pass_id, pass_func, graph))

        scheme = first_subject_of_type(graph, SKOS.ConceptScheme)
        result = TransformationResult(
            graph=graph,
            namespace=self.namespace,
            prefix=self.prefix,
            concept_scheme=str(scheme) if scheme is not None else "",
            source_triples=source_triples,
            passes=stats,
        )
        logger.info(
            f"Transformation completed: outputTriples={result.output_triples}, "
            f"durationMs={result.duration_ms:.1f}"
        )
        return result

    def _run_copy(self, source: TripleGraph, stats: List[PassStats]) -> Graph:
        start = time.perf_counter()
        try:
            graph = copy_graph(source, keep=self._keep_statement)
        except Exception as e:
            logger.error(f"Transformation pass '{TransformationPass.COPY_FILTER.value}' failed: {e}", exc_info=True)
            raise TransformationFailed(TransformationPass.COPY_FILTER.value, e) from e

        stats.append(PassStats(
            name=TransformationPass.COPY_FILTER.value,
            added=len(graph),
            duration_ms=(time.perf_counter() - start) * 1000,
        ))
        return graph

    def _run_pass(
        self,
        pass_id: TransformationPass,
        pass_func: Callable[[Graph], Changes],
        graph: Graph,
    ) -> PassStats:
        start = time.perf_counter()
        try:
            removed, added = pass_func(graph)
        except Exception as e:
            logger.error(f"Transformation pass '{pass_id.value}' failed: {e}", exc_info=True)
            raise TransformationFailed(pass_id.value, e) from e

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"Pass {pass_id.value}: +{added} / -{removed} ({duration_ms:.1f} ms)")
        return PassStats(name=pass_id.value, added=added, removed=removed, duration_ms=duration_ms)

    # ------------------------------------------------------------------
    # Pass 1: copy & filter
    # ------------------------------------------------------------------

    @staticmethod
    def _keep_statement(triple: Triple) -> bool:
        if is_empty_literal_statement(triple):
            logger.debug(f"Filtering out empty literal statement: {triple}")
            return False
        return True

    # ------------------------------------------------------------------
    # Pass 2: prefixes
    # ------------------------------------------------------------------

    def _register_prefixes(self, graph: Graph) -> Changes:
        for prefix, namespace in STANDARD_PREFIXES.items():
            graph.bind(prefix, namespace, override=True, replace=True)
        graph.bind(self.prefix, self.namespace, override=True, replace=True)
        return 0, 0

    # ------------------------------------------------------------------
    # Pass 3: concept scheme
    # ------------------------------------------------------------------

    def _scheme_iri(self) -> URIRef:
        return URIRef(URLValidator.strip_namespace_delimiter(self.namespace))

    def _create_concept_scheme(self, graph: Graph) -> Changes:
        to_add: List[Triple] = []
        to_remove: List[Triple] = []

        scheme = first_subject_of_type(graph, OWL.Ontology)
        if scheme is None:
            scheme = self._scheme_iri()
            logger.debug(f"No ontology resource found, creating {scheme}")
            to_add.append((scheme, RDF.type, OWL.Ontology))

        to_add.append((scheme, RDF.type, SKOS.ConceptScheme))

        for other in subjects_of_type(graph, SKOS.ConceptScheme):
            if other != scheme:
                logger.warning(f"Removing concept scheme type from {other}; {scheme} is the concept scheme")
                to_remove.append((other, RDF.type, SKOS.ConceptScheme))

        if self.model_name.strip():
            to_remove.extend(match(graph, scheme, SKOS.prefLabel, None))
            to_add.append((scheme, SKOS.prefLabel, Literal(self.model_name, lang=self.language)))

        description = self.model_properties.get(NamespaceConfig.DESCRIPTION_KEY, "")
        if description and description.strip():
            to_remove.extend(match(graph, scheme, DCTERMS.description, None))
            to_add.append((scheme, DCTERMS.description, Literal(description, lang=self.language)))

        return apply_changes(graph, to_remove, to_add)

    # ------------------------------------------------------------------
    # Pass 4: concept typing
    # ------------------------------------------------------------------

    def _type_concepts(self, graph: Graph) -> Changes:
        to_add: List[Triple] = []
        concepts = subjects_of_type(graph, self.terms.concept)
        logger.info(f"Found {len(concepts)} concepts")

        for resource in tqdm(concepts, desc="Typing concepts", unit="concept", disable=len(concepts) < 10):
            to_add.append((resource, RDF.type, SKOS.Concept))
            for rdf_type in self._resource_types(graph, resource):
                to_add.append((resource, RDF.type, rdf_type))

        return apply_changes(graph, to_add=to_add)

    def _resource_types(self, graph: Graph, resource: Node) -> List[URIRef]:
        """Additional types for one concept, derived from its domain types."""
        types: List[URIRef] = []
        terms = self.terms

        if has_type(graph, resource, terms.class_type):
            types.append(OWL.Class)
            if has_type(graph, resource, terms.subject_type):
                types.append(self.public_sector.subject_of_law)
            elif has_type(graph, resource, terms.object_type):
                types.append(self.public_sector.object_of_law)
        elif has_type(graph, resource, terms.property_type):
            types.append(self._property_kind(graph, resource))
        elif has_type(graph, resource, terms.relationship_type):
            types.append(OWL.ObjectProperty)

        if has_type(graph, resource, terms.public_data):
            types.append(self.public_sector.public_data)
        if has_type(graph, resource, terms.non_public_data):
            types.append(self.public_sector.non_public_data)

        return types

    def _property_kind(self, graph: Graph, resource: Node) -> URIRef:
        """
        ObjectProperty when any resource range is a blank node or a non-XSD
        IRI; DatatypeProperty for XSD-only, literal-only or missing ranges.

        Ranges already materialized as rdfs:range by an earlier run count
        the same as the domain range predicate.
        """
        ranges = [
            obj
            for predicate in (self.terms.range, RDFS.range)
            for obj in graph.objects(resource, predicate)
            if is_resource(obj)
        ]
        for range_value in ranges:
            if isinstance(range_value, BNode) or not str(range_value).startswith(XSD_NAMESPACE):
                return OWL.ObjectProperty
        return OWL.DatatypeProperty

    # ------------------------------------------------------------------
    # Pass 5: labels
    # ------------------------------------------------------------------

    def _unify_labels(self, graph: Graph) -> Changes:
        # Sorted so "last observed" does not depend on store iteration order
        label_statements = sorted(match(graph, None, RDFS.label, None))
        labels: Dict[Node, Dict[str, str]] = {}

        for subject, _, obj in label_statements:
            if not is_literal(obj) or is_empty_literal(obj):
                continue
            lang = obj.language or self.language
            # Later statements overwrite earlier ones for the same language
            labels.setdefault(subject, {})[lang] = str(obj)

        to_remove: List[Triple] = list(label_statements)
        existing = self._existing_pref_labels(graph, to_remove)

        to_add: List[Triple] = []
        for subject, by_language in labels.items():
            for lang, text in by_language.items():
                if lang in existing.get(subject, ()):
                    logger.debug(f"Keeping existing prefLabel@{lang} of {subject}, dropping label '{text}'")
                    continue
                to_add.append((subject, SKOS.prefLabel, Literal(text, lang=lang)))

        return apply_changes(graph, to_remove, to_add)

    @staticmethod
    def _existing_pref_labels(graph: Graph, to_remove: List[Triple]) -> Dict[Node, Dict[Optional[str], Triple]]:
        """
        Collect literal prefLabels per subject and language.

        When a subject already carries several prefLabels in one language the
        last one in sorted order is kept and the others are queued in
        to_remove.
        """
        kept: Dict[Node, Dict[Optional[str], Triple]] = {}
        for statement in sorted(match(graph, None, SKOS.prefLabel, None)):
            subject, _, obj = statement
            if not is_literal(obj):
                continue
            by_language = kept.setdefault(subject, {})
            previous = by_language.get(obj.language)
            if previous is not None:
                logger.debug(f"Dropping duplicate prefLabel@{obj.language} of {subject}: '{previous[2]}'")
                to_remove.append(previous)
            by_language[obj.language] = statement
        return kept

    # ------------------------------------------------------------------
    # Pass 6: definitions
    # ------------------------------------------------------------------

    def _migrate_definitions(self, graph: Graph) -> Changes:
        to_add: List[Triple] = []
        to_remove: List[Triple] = []

        for statement in match(graph, None, self.terms.definition, None):
            subject, _, obj = statement
            to_remove.append(statement)
            if not is_literal(obj):
                logger.warning(f"Dropping non-literal definition of {subject}: {obj}")
                continue
            if is_empty_literal(obj):
                continue
            to_add.append((subject, SKOS.definition, Literal(str(obj), lang=obj.language or self.language)))

        return apply_changes(graph, to_remove, to_add)

    # ------------------------------------------------------------------
    # Pass 7: domain and range
    # ------------------------------------------------------------------

    def _materialize_domain_range(self, graph: Graph) -> Changes:
        removed_domain, added_domain = self._rewrite_resource_statements(graph, self.terms.domain, RDFS.domain)
        removed_range, added_range = self._rewrite_resource_statements(graph, self.terms.range, RDFS.range)
        return removed_domain + removed_range, added_domain + added_range

    @staticmethod
    def _rewrite_resource_statements(graph: Graph, source: URIRef, target: URIRef) -> Changes:
        """Re-emit resource-valued statements on source as target; literals stay."""
        to_add: List[Triple] = []
        to_remove: List[Triple] = []

        for statement in match(graph, None, source, None):
            subject, _, obj = statement
            if is_literal(obj):
                continue
            to_add.append((subject, target, obj))
            to_remove.append(statement)

        return apply_changes(graph, to_remove, to_add)

    # ------------------------------------------------------------------
    # Pass 8: standard property mapping
    # ------------------------------------------------------------------

    def _property_mappings(self) -> List[Tuple[URIRef, URIRef, bool]]:
        """(source, target, is_boolean) pairs, in application order."""
        terms = self.terms
        public_sector = self.public_sector
        return [
            (terms.source, DCTERMS.source, False),
            (terms.related_source, DCTERMS.references, False),
            (terms.shared_in_ppdf, public_sector.shared_in_ppdf, True),
            (terms.supersedes, public_sector.supersedes, False),
            (terms.broader_type, RDFS.subClassOf, False),
            (terms.information_system, public_sector.information_system, False),
            (terms.agenda, public_sector.agenda, False),
        ]

    def _map_standard_properties(self, graph: Graph) -> Changes:
        removed = added = 0
        for source, target, is_boolean in self._property_mappings():
            mapper = self._map_boolean_property if is_boolean else self._map_property
            pass_removed, pass_added = mapper(graph, source, target)
            removed += pass_removed
            added += pass_added

        empty_descriptions = [
            t for t in match(graph, None, self.terms.description, None) if is_empty_literal_statement(t)
        ]
        pass_removed, _ = apply_changes(graph, to_remove=empty_descriptions)
        return removed + pass_removed, added

    @staticmethod
    def _map_property(graph: Graph, source: URIRef, target: URIRef) -> Changes:
        to_add: List[Triple] = []
        to_remove: List[Triple] = []

        for statement in match(graph, None, source, None):
            subject, _, obj = statement
            to_remove.append(statement)
            if is_empty_literal(obj):
                continue
            to_add.append((subject, target, obj))

        return apply_changes(graph, to_remove, to_add)

    @staticmethod
    def _map_boolean_property(graph: Graph, source: URIRef, target: URIRef) -> Changes:
        to_add: List[Triple] = []
        to_remove: List[Triple] = []

        for statement in match(graph, None, source, None):
            subject, _, obj = statement
            to_remove.append(statement)
            if not is_literal(obj):
                logger.warning(f"Dropping non-literal value of boolean property on {subject}: {obj}")
                continue
            if is_empty_literal(obj):
                continue
            to_add.append((subject, target, materialize(str(obj), DatatypeTag.BOOLEAN)))

        return apply_changes(graph, to_remove, to_add)

    # ------------------------------------------------------------------
    # Pass 9: scheme membership
    # ------------------------------------------------------------------

    def _add_scheme_membership(self, graph: Graph) -> Changes:
        scheme = first_subject_of_type(graph, SKOS.ConceptScheme)
        if scheme is None:
            logger.warning("No concept scheme found; skipping scheme membership")
            return 0, 0

        removed = 0
        to_add: List[Triple] = []
        for concept in subjects_of_type(graph, SKOS.Concept):
            removed += remove_all(graph, concept, SKOS.inScheme)
            to_add.append((concept, SKOS.inScheme, scheme))

        _, added = apply_changes(graph, to_add=to_add)
        return removed, added

    # ------------------------------------------------------------------
    # Pass 10: cleanup
    # ------------------------------------------------------------------

    def _cleanup(self, graph: Graph) -> Changes:
        removed = remove_empty_literals(graph, SKOS.definition)
        removed += remove_empty_literals(graph, SKOS.prefLabel)
        for predicate in self.terms.label_bearing:
            removed += remove_empty_literals(graph, predicate)
        removed += remove_empty_literals(graph)
        return removed, 0


def transform(
    source: TripleGraph,
    model_name: Optional[str] = "",
    model_properties: Optional[Mapping[str, str]] = None,
) -> Graph:
    """
    Transform an Archi model graph into a SKOS vocabulary graph.

    Args:
        source: Source graph (not modified)
        model_name: Display name of the model
        model_properties: Model metadata (label -> value)

    Returns:
        A new graph

    Raises:
        TransformationFailed: If a pass fails
    """
    return SKOSTransformer(model_name, model_properties).transform(source)


def transform_with_result(
    source: TripleGraph,
    model_name: Optional[str] = "",
    model_properties: Optional[Mapping[str, str]] = None,
) -> TransformationResult:
    """Like transform(), also returning namespace and per-pass statistics."""
    return SKOSTransformer(model_name, model_properties).transform_with_result(source)
