"""
Effective namespace resolution.

Every transformation run uses one base namespace for the domain vocabulary.
It comes from the model's "local data catalog address" property when that is
a valid absolute URL, otherwise from NamespaceConfig.DEFAULT_NAMESPACE.
"""

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import NamespaceConfig
from core.errors import NamespaceResolutionFailure
from core.validators.url import URLValidator
from .vocabulary import STANDARD_PREFIXES

logger = logging.getLogger(__name__)

_SEGMENT_SEPARATORS = re.compile(r'[./]')


@dataclass(frozen=True)
class ResolvedNamespace:
    """Effective namespace of a run and the prefix bound to it."""
    namespace: str
    prefix: str


def find_catalog_address(model_properties: Mapping[str, str]) -> Optional[str]:
    """
    Return the data catalog address from the model properties.

    Every property whose label names the data catalog is a candidate. The
    first candidate that is an absolute URL wins; when none is, the first
    candidate is returned so the caller can report why it was rejected.
    """
    candidates = [
        value for key, value in model_properties.items()
        if NamespaceConfig.CATALOG_ADDRESS_LABEL in key
    ]
    for value in candidates:
        if URLValidator.is_absolute_url(value):
            return value
    return candidates[0] if candidates else None


def determine_namespace(model_properties: Mapping[str, str]) -> str:
    """
    Pick the effective namespace for a model.

    An unusable catalog address is not an error: the default namespace is
    used and the reason is logged.
    """
    address = find_catalog_address(model_properties or {})

    if address is None:
        logger.debug("No local data catalog address in model properties; using default namespace")
        return NamespaceConfig.DEFAULT_NAMESPACE

    if not address.strip():
        failure = NamespaceResolutionFailure(address, "catalog address is empty")
    elif not URLValidator.is_absolute_url(address):
        failure = NamespaceResolutionFailure(address, "not an absolute URL")
    else:
        return URLValidator.ensure_namespace_delimiter(address)

    logger.warning(f"{failure}; falling back to {NamespaceConfig.DEFAULT_NAMESPACE}")
    return NamespaceConfig.DEFAULT_NAMESPACE


def determine_prefix(namespace: Optional[str]) -> str:
    """
    Derive a short prefix from a namespace.

    The scheme and a leading 'www.' are dropped and the first non-empty
    segment (split on '.' and '/') is lowercased. Prefixes that would shadow
    a standard prefix become the default prefix.
    """
    if not namespace:
        return NamespaceConfig.DEFAULT_PREFIX

    remainder = URLValidator.strip_scheme(namespace)
    if remainder.startswith('www.'):
        remainder = remainder[len('www.'):]

    for segment in _SEGMENT_SEPARATORS.split(remainder):
        if segment:
            prefix = segment.lower()
            if prefix in STANDARD_PREFIXES:
                logger.debug(f"Derived prefix '{prefix}' collides with a standard prefix")
                return NamespaceConfig.DEFAULT_PREFIX
            return prefix

    return NamespaceConfig.DEFAULT_PREFIX


def resolve(model_properties: Mapping[str, str]) -> ResolvedNamespace:
    """Resolve the effective namespace and its prefix. Never fails."""
    namespace = determine_namespace(model_properties)
    prefix = determine_prefix(namespace)
    logger.info(
        f"Effective namespace: {namespace} (prefix '{prefix}')"
    )
    return ResolvedNamespace(namespace=namespace, prefix=prefix)
