"""
Centralized validation utilities for the Archi to SKOS Ontology Converter.

This package provides validators organized by concern:
- input.py: InputValidator - file path, content, output format and model
  properties validation
- url.py: URLValidator - absolute URL checks and namespace normalization

Usage:
    from core.validators import InputValidator, URLValidator
"""

from .input import InputValidator
from .url import URLValidator

__all__ = [
    'InputValidator',
    'URLValidator',
]
