"""
URL validation for namespace handling in the Archi to SKOS Ontology Converter.

This module decides whether a catalog address from the model metadata can
serve as the base namespace of the generated vocabulary.

Usage:
    from core.validators.url import URLValidator

    if URLValidator.is_absolute_url(address):
        namespace = URLValidator.ensure_namespace_delimiter(address)
"""

import logging
import re
from typing import Any
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class URLValidator:
    """
    Syntactic URL checks used when resolving namespaces.

    An address is usable as a namespace when it is absolute: it has a scheme
    and a host, and contains no whitespace.
    """

    NAMESPACE_DELIMITERS = ('/', '#')

    _SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://')

    @classmethod
    def is_absolute_url(cls, value: Any) -> bool:
        """
        Check whether a value is an absolute URL with scheme and host.

        Args:
            value: Value to check

        Returns:
            True if the value parses with both a scheme and a hostname
        """
        if not isinstance(value, str):
            return False

        value = value.strip()
        if not value or any(ch.isspace() for ch in value):
            return False

        try:
            parsed = urlparse(value)
            hostname = parsed.hostname
        except ValueError:
            return False

        return bool(parsed.scheme) and bool(hostname)

    @classmethod
    def ensure_namespace_delimiter(cls, url: str) -> str:
        """
        Normalize a namespace so it ends with '/' or '#'.

        Args:
            url: Namespace URL

        Returns:
            The URL unchanged if it already ends with a delimiter, otherwise
            the URL with '/' appended
        """
        url = url.strip()
        if url.endswith(cls.NAMESPACE_DELIMITERS):
            return url
        return url + '/'

    @classmethod
    def strip_namespace_delimiter(cls, url: str) -> str:
        """Drop one trailing '/' or '#' from a namespace."""
        if url.endswith(cls.NAMESPACE_DELIMITERS):
            return url[:-1]
        return url

    @classmethod
    def strip_scheme(cls, url: str) -> str:
        """Remove the leading 'scheme://' part of a URL, if any."""
        return cls._SCHEME_PATTERN.sub('', url, count=1)

