"""
Base command class.

This module contains the base command class that all CLI commands inherit from.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from core.services import ConverterEngine
from ..helpers import (
    get_default_config_path,
    load_config,
    setup_logging,
)


logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        engine: Optional[ConverterEngine] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. When omitted, config.json in
                the project root is used if it exists.
            engine: Optional conversion engine (for dependency injection).
        """
        self._explicit_config = config_path is not None
        self.config_path = config_path or get_default_config_path()
        self._engine = engine
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; a missing default config file means no configuration."""
        if self._config is None:
            if not self._explicit_config and not Path(self.config_path).exists():
                self._config = {}
            else:
                self._config = load_config(self.config_path)
        return self._config

    def get_engine(self) -> ConverterEngine:
        """Get or create the conversion engine."""
        if self._engine is None:
            self._engine = ConverterEngine()
        return self._engine

    def setup_logging_from_config(self, level: Optional[str] = None) -> None:
        """Setup logging from the 'logging' section of the configuration."""
        log_config = self.config.get('logging', {})
        if not isinstance(log_config, dict):
            log_config = {}
        setup_logging(level=level, config=log_config)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
