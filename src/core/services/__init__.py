"""
Shared runtime services.

This package provides the conversion service used by the CLI:
- ConverterEngine: parse, transform and export a model graph
"""

from .conversion import ConverterEngine

__all__ = [
    "ConverterEngine",
]
