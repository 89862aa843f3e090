"""Base collector abstract class for all inputs."""

from abc import ABC, abstractmethod
from typing import Any
import logging

from ..services.accumulator import Accumulator


class BaseCollector(ABC):
    """Abstract base class for all collectors."""

    def __init__(self, config: Any, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            config: Collector-specific configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    async def gather(self, acc: Accumulator) -> None:
        """
        Run one gather pass and push measurements into the accumulator.

        Args:
            acc: Sink receiving one measurement per successful target

        Raises:
            CollectionError: Any failure. Errors are not caught here; the
                caller decides whether the pass failure is fatal.
        """
        pass

    @abstractmethod
    def description(self) -> str:
        """One-line description shown in generated configuration."""
        pass

    @abstractmethod
    def sample_config(self) -> str:
        """Commented configuration snippet for this input."""
        pass
