"""
CLI command implementations.

- base.py: BaseCommand with configuration and logging setup
- convert.py: ConvertCommand
- classify.py: ClassifyCommand
"""

from .base import BaseCommand
from .convert import ConvertCommand, default_output_path
from .classify import ClassifyCommand


__all__ = [
    'BaseCommand',
    'ConvertCommand',
    'ClassifyCommand',
    'default_output_path',
]
