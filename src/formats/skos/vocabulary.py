"""
Vocabulary tables for the Archi to SKOS transformation.

All domain predicates and types used by the transformation passes are the
effective namespace of the run followed by one of the local names below. The
public-sector vocabularies that the output links to always live under the
default namespace.

Reference:
    https://slovník.gov.cz/
"""

from dataclasses import dataclass
from typing import Dict, Final, Tuple

from rdflib import Namespace, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, SKOS, XSD

from constants import NamespaceConfig

# Standard prefixes registered on every output graph
STANDARD_PREFIXES: Final[Dict[str, Namespace]] = {
    "dct": DCTERMS,
    "owl": OWL,
    "rdf": RDF,
    "rdfs": RDFS,
    "skos": SKOS,
    "xsd": XSD,
}

XSD_NAMESPACE: Final[str] = str(XSD)


@dataclass(frozen=True)
class ArchiVocabulary:
    """
    Local names of the domain vocabulary produced from an Archi model.

    Attributes map one-to-one to the element types and properties the model
    parser writes into the source graph.
    """

    # Element types
    concept: str = "pojem"
    class_type: str = "třída"
    property_type: str = "vlastnost"
    relationship_type: str = "vztah"
    subject_type: str = "typ-subjektu"
    object_type: str = "typ-objektu"
    public_data: str = "veřejný-údaj"
    non_public_data: str = "neveřejný-údaj"

    # Properties
    label: str = "název"
    alternative_label: str = "alternativní-název"
    identifier: str = "identifikátor"
    definition: str = "definice"
    description: str = "popis"
    domain: str = "definiční-obor"
    range: str = "obor-hodnot"
    source: str = "zdroj"
    related_source: str = "související-zdroj"
    shared_in_ppdf: str = "je-pojem-sdílen-v-propojeném-datovém-fondu"
    supersedes: str = "nahrazuje"
    broader_type: str = "nadřazený-pojem"
    information_system: str = "agendový-informační-systém"
    agenda: str = "agenda"

    @property
    def label_bearing(self) -> Tuple[str, ...]:
        """Domain predicates whose empty literals are removed during cleanup."""
        return (
            self.label,
            self.alternative_label,
            self.identifier,
            self.definition,
            self.description,
            self.source,
            self.related_source,
        )


ARCHI_VOCABULARY: Final[ArchiVocabulary] = ArchiVocabulary()


@dataclass(frozen=True)
class PublicSectorVocabulary:
    """
    Long-form IRIs of the Czech public-sector vocabularies the output links to.

    Built from a base namespace, normally NamespaceConfig.DEFAULT_NAMESPACE.
    """

    base: str = NamespaceConfig.DEFAULT_NAMESPACE

    @property
    def public_sector(self) -> Namespace:
        return Namespace(self.base + "veřejný-sektor/pojem/")

    @property
    def legislative_111(self) -> Namespace:
        return Namespace(self.base + "legislativní/sbírka/111/2009/pojem/")

    @property
    def agenda_104(self) -> Namespace:
        return Namespace(self.base + "agendový/104/pojem/")

    @property
    def subject_of_law(self) -> URIRef:
        return self.public_sector["typ-subjektu-práva"]

    @property
    def object_of_law(self) -> URIRef:
        return self.public_sector["typ-objektu-práva"]

    @property
    def public_data(self) -> URIRef:
        return self.legislative_111["veřejný-údaj"]

    @property
    def non_public_data(self) -> URIRef:
        return self.legislative_111["neveřejný-údaj"]

    @property
    def shared_in_ppdf(self) -> URIRef:
        return self.agenda_104["je-sdílen-v-propojeném-datovém-fondu"]

    @property
    def supersedes(self) -> URIRef:
        return self.legislative_111["nahrazuje-údaj"]

    @property
    def information_system(self) -> URIRef:
        return self.agenda_104["údaje-jsou-v-agendovém-informačním-systému"]

    @property
    def agenda(self) -> URIRef:
        return self.agenda_104["sdružuje-údaje-vedené-nebo-vytvářené-v-rámci-agendy"]


PUBLIC_SECTOR: Final[PublicSectorVocabulary] = PublicSectorVocabulary()


@dataclass(frozen=True)
class DomainTerms:
    """
    Domain predicates and types resolved against one effective namespace.

    Created once per transformation run with DomainTerms.for_namespace().
    """

    namespace: str
    concept: URIRef
    class_type: URIRef
    property_type: URIRef
    relationship_type: URIRef
    subject_type: URIRef
    object_type: URIRef
    public_data: URIRef
    non_public_data: URIRef
    definition: URIRef
    description: URIRef
    domain: URIRef
    range: URIRef
    source: URIRef
    related_source: URIRef
    shared_in_ppdf: URIRef
    supersedes: URIRef
    broader_type: URIRef
    information_system: URIRef
    agenda: URIRef
    label_bearing: Tuple[URIRef, ...]

    @classmethod
    def for_namespace(
        cls,
        namespace: str,
        vocabulary: ArchiVocabulary = ARCHI_VOCABULARY,
    ) -> "DomainTerms":
        ns = Namespace(namespace)
        return cls(
            namespace=namespace,
            concept=ns[vocabulary.concept],
            class_type=ns[vocabulary.class_type],
            property_type=ns[vocabulary.property_type],
            relationship_type=ns[vocabulary.relationship_type],
            subject_type=ns[vocabulary.subject_type],
            object_type=ns[vocabulary.object_type],
            public_data=ns[vocabulary.public_data],
            non_public_data=ns[vocabulary.non_public_data],
            definition=ns[vocabulary.definition],
            description=ns[vocabulary.description],
            domain=ns[vocabulary.domain],
            range=ns[vocabulary.range],
            source=ns[vocabulary.source],
            related_source=ns[vocabulary.related_source],
            shared_in_ppdf=ns[vocabulary.shared_in_ppdf],
            supersedes=ns[vocabulary.supersedes],
            broader_type=ns[vocabulary.broader_type],
            information_system=ns[vocabulary.information_system],
            agenda=ns[vocabulary.agenda],
            label_bearing=tuple(ns[name] for name in vocabulary.label_bearing),
        )
