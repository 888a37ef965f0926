"""
Datatype detection and typed literal creation.

This module classifies raw string values from an architecture model into XSD
datatypes and builds correctly typed rdflib literals from them.

Detection order (first match wins):
    boolean, anyURI, date, time, dateTime, integer, double,
    property-name heuristic, string

Language-tagged values are never type-detected: they always become plain
language-tagged literals.

Usage:
    tag = classify("15.01.2024", "datum-vzniku")      # DatatypeTag.DATE
    literal = materialize("15.01.2024", tag)           # "2024-01-15"^^xsd:date
    add_typed_property(graph, subject, predicate, "ano")
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from rdflib import Literal, URIRef
from rdflib.namespace import XSD
from rdflib.term import Node

from core.errors import DatatypeDetectionFailure
from core.validators.url import URLValidator
from .graph import TripleGraph

logger = logging.getLogger(__name__)


class DatatypeTag(str, Enum):
    """Semantic datatype assigned to a raw value."""
    BOOLEAN = "xsd:boolean"
    ANY_URI = "xsd:anyURI"
    DATE = "xsd:date"
    TIME = "xsd:time"
    DATE_TIME = "xsd:dateTime"
    INTEGER = "xsd:integer"
    DOUBLE = "xsd:double"
    STRING = "xsd:string"

    @property
    def datatype(self) -> URIRef:
        """The XSD datatype IRI for this tag."""
        return _XSD_DATATYPES[self]


_XSD_DATATYPES: Dict[DatatypeTag, URIRef] = {
    DatatypeTag.BOOLEAN: XSD.boolean,
    DatatypeTag.ANY_URI: XSD.anyURI,
    DatatypeTag.DATE: XSD.date,
    DatatypeTag.TIME: XSD.time,
    DatatypeTag.DATE_TIME: XSD.dateTime,
    DatatypeTag.INTEGER: XSD.integer,
    DatatypeTag.DOUBLE: XSD.double,
    DatatypeTag.STRING: XSD.string,
}

BOOLEAN_VALUES = frozenset({"true", "false", "ano", "ne", "yes", "no"})
TRUTHY_VALUES = frozenset({"true", "ano", "yes"})

INTEGER_PATTERN = re.compile(r'-?\d+', re.ASCII)
DOUBLE_PATTERN = re.compile(r'-?\d+(\.\d+)?', re.ASCII)

# (pattern, strptime format) pairs; the pattern enforces the field widths
# strptime alone would accept loosely.
DATE_FORMATS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII), '%Y-%m-%d'),
    (re.compile(r'\d{2}\.\d{2}\.\d{4}', re.ASCII), '%d.%m.%Y'),
    (re.compile(r'\d{1,2}\.\d{1,2}\.\d{4}', re.ASCII), '%d.%m.%Y'),
)

TIME_FORMATS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r'\d{2}:\d{2}:\d{2}\.\d{1,6}', re.ASCII), '%H:%M:%S.%f'),
    (re.compile(r'\d{2}:\d{2}:\d{2}', re.ASCII), '%H:%M:%S'),
    (re.compile(r'\d{2}:\d{2}', re.ASCII), '%H:%M'),
)

DATETIME_FORMATS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{1,6}', re.ASCII), '%Y-%m-%dT%H:%M:%S.%f'),
    (re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}', re.ASCII), '%Y-%m-%dT%H:%M:%S'),
    (re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}', re.ASCII), '%Y-%m-%dT%H:%M'),
    (re.compile(r'\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}:\d{2}', re.ASCII), '%d.%m.%Y %H:%M:%S'),
)

# Checked in order; the first matching group decides the tag
PROPERTY_NAME_HINTS: Tuple[Tuple[Tuple[str, ...], DatatypeTag], ...] = (
    (("datum", "date"), DatatypeTag.DATE),
    (("cas", "time"), DatatypeTag.TIME),
    (("url", "uri", "odkaz", "link"), DatatypeTag.ANY_URI),
    (("boolean", "flag", "indicator", "is", "has"), DatatypeTag.BOOLEAN),
    (("count", "number", "integer", "quantity"), DatatypeTag.INTEGER),
)


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of datatype detection with a human-readable reason."""
    tag: DatatypeTag
    message: str


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Result of converting a lexical value under a datatype tag.

    Exactly one of literal and failure is set.
    """
    literal: Optional[Literal] = None
    failure: Optional[DatatypeDetectionFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _parse_with(value: str, formats: Tuple[Tuple[re.Pattern, str], ...]) -> Optional[datetime]:
    for pattern, fmt in formats:
        if not pattern.fullmatch(value):
            continue
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_date(value: str) -> Optional[date]:
    parsed = _parse_with(value, DATE_FORMATS)
    return parsed.date() if parsed else None


def parse_time(value: str) -> Optional[time]:
    parsed = _parse_with(value, TIME_FORMATS)
    return parsed.time() if parsed else None


def parse_datetime(value: str) -> Optional[datetime]:
    return _parse_with(value, DATETIME_FORMATS)


def is_boolean_value(value: str) -> bool:
    return value.lower() in BOOLEAN_VALUES


def is_uri(value: str) -> bool:
    return URLValidator.is_absolute_url(value)


def is_date(value: str) -> bool:
    return parse_date(value) is not None


def is_time(value: str) -> bool:
    return parse_time(value) is not None


def is_datetime(value: str) -> bool:
    return parse_datetime(value) is not None


def is_integer(value: str) -> bool:
    return INTEGER_PATTERN.fullmatch(value) is not None


def is_double(value: str) -> bool:
    return DOUBLE_PATTERN.fullmatch(value) is not None


def infer_type_from_property_name(property_name: Optional[str]) -> Optional[DatatypeTag]:
    """Guess a datatype from the predicate's local name, or None."""
    if not property_name:
        return None

    lower_name = property_name.lower()
    for hints, tag in PROPERTY_NAME_HINTS:
        if any(hint in lower_name for hint in hints):
            return tag
    return None


_VALUE_CHECKS: Tuple[Tuple[Callable[[str], bool], DatatypeTag, str], ...] = (
    (is_boolean_value, DatatypeTag.BOOLEAN, "Detected as boolean"),
    (is_uri, DatatypeTag.ANY_URI, "Detected as URI"),
    (is_date, DatatypeTag.DATE, "Detected as date"),
    (is_time, DatatypeTag.TIME, "Detected as time"),
    (is_datetime, DatatypeTag.DATE_TIME, "Detected as dateTime"),
    (is_integer, DatatypeTag.INTEGER, "Detected as integer"),
    (is_double, DatatypeTag.DOUBLE, "Detected as double"),
)


def detect(value: str, property_name: Optional[str] = None) -> DetectionResult:
    """
    Detect the datatype of a raw value.

    Args:
        value: Raw lexical value
        property_name: Local name of the predicate, used as a fallback hint

    Returns:
        DetectionResult with the chosen tag and the reason
    """
    for check, tag, message in _VALUE_CHECKS:
        if check(value):
            return DetectionResult(tag, message)

    inferred = infer_type_from_property_name(property_name)
    if inferred is not None:
        return DetectionResult(inferred, "Inferred from property name")

    return DetectionResult(DatatypeTag.STRING, "Default to string")


def classify(value: str, property_name: Optional[str] = None) -> DatatypeTag:
    """Classify a raw value into a DatatypeTag. Never fails."""
    return detect(value, property_name).tag


def _failure(value: str, tag: DatatypeTag, reason: str) -> ConversionOutcome:
    return ConversionOutcome(failure=DatatypeDetectionFailure(value, tag.value, reason))


def convert(value: str, tag: DatatypeTag) -> ConversionOutcome:
    """
    Build a typed literal for value under tag.

    Dates, times and date-times are emitted in ISO lexical form. Booleans
    accept any value: true/ano/yes map to true, everything else to false.

    Returns:
        ConversionOutcome holding either the literal or the failure
    """
    if tag is DatatypeTag.BOOLEAN:
        return ConversionOutcome(literal=Literal(value.strip().lower() in TRUTHY_VALUES))

    if tag is DatatypeTag.INTEGER:
        if not is_integer(value.strip()):
            return _failure(value, tag, "not an integer")
        return ConversionOutcome(literal=Literal(int(value), datatype=XSD.integer))

    if tag is DatatypeTag.DOUBLE:
        if not is_double(value.strip()):
            return _failure(value, tag, "not a decimal number")
        return ConversionOutcome(literal=Literal(float(value), datatype=XSD.double))

    if tag is DatatypeTag.DATE:
        parsed_date = parse_date(value.strip())
        if parsed_date is None:
            return _failure(value, tag, "unrecognized date format")
        return ConversionOutcome(literal=Literal(parsed_date.isoformat(), datatype=XSD.date))

    if tag is DatatypeTag.TIME:
        parsed_time = parse_time(value.strip())
        if parsed_time is None:
            return _failure(value, tag, "unrecognized time format")
        return ConversionOutcome(literal=Literal(parsed_time.isoformat(), datatype=XSD.time))

    if tag is DatatypeTag.DATE_TIME:
        parsed_datetime = parse_datetime(value.strip())
        if parsed_datetime is None:
            return _failure(value, tag, "unrecognized dateTime format")
        return ConversionOutcome(literal=Literal(parsed_datetime.isoformat(), datatype=XSD.dateTime))

    if tag is DatatypeTag.ANY_URI:
        return ConversionOutcome(literal=Literal(value, datatype=XSD.anyURI))

    return ConversionOutcome(literal=Literal(value, datatype=XSD.string))


def plain_literal(value: str, lang: Optional[str] = None) -> Literal:
    """An untyped literal, optionally language-tagged."""
    return Literal(value, lang=lang or None)


def materialize(value: str, tag: DatatypeTag) -> Literal:
    """
    Build a typed literal, falling back to a plain literal when the value
    does not parse under tag. The fallback is logged, never raised.
    """
    outcome = convert(value, tag)
    if outcome.ok:
        return outcome.literal

    logger.warning(f"Type detection failed: {outcome.failure}. Using plain literal instead.")
    return plain_literal(value)


def create_typed_literal(value: str, property_name: Optional[str] = None, lang: Optional[str] = None) -> Literal:
    """
    Create a literal for a raw model value.

    Args:
        value: Raw lexical value
        property_name: Local name of the predicate, used as a detection hint
        lang: Language tag; when present the value is not type-detected

    Returns:
        A language-tagged literal if lang is given, else a typed literal
    """
    if lang:
        return plain_literal(value, lang)

    result = detect(value, property_name)
    literal = materialize(value, result.tag)
    logger.debug(f"Value '{value}' of property '{property_name}': {result.message} ({result.tag.value})")
    return literal


def local_name(predicate: Node) -> str:
    """The part of an IRI after the last '#' or '/'."""
    text = str(predicate)
    for delimiter in ('#', '/'):
        if delimiter in text:
            text = text.rsplit(delimiter, 1)[1]
    return text


def add_typed_property(
    graph: TripleGraph,
    subject: Node,
    predicate: URIRef,
    value: Optional[str],
    lang: Optional[str] = None,
) -> Optional[Literal]:
    """
    Add a property with datatype detection.

    Empty values are skipped.

    Returns:
        The literal that was added, or None if the value was empty
    """
    if value is None or not value.strip():
        logger.debug(f"Skipping empty value for property '{local_name(predicate)}'")
        return None

    literal = create_typed_literal(value, local_name(predicate), lang)
    graph.add((subject, predicate, literal))
    return literal
