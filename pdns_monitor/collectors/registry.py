"""Name-to-factory registry for collector inputs."""

import logging
from typing import Any, Callable, Dict, List

from .base import BaseCollector

CollectorFactory = Callable[[Any, logging.Logger], BaseCollector]


class InputRegistry:
    """
    Explicit registry of available inputs.

    Inputs are added by calling their module's ``register(registry)`` from
    the application's composition root; importing a collector module has no
    side effects on any registry.
    """

    def __init__(self):
        self._factories: Dict[str, CollectorFactory] = {}

    def add(self, name: str, factory: CollectorFactory) -> None:
        """
        Register a collector factory under ``name``.

        Raises:
            ValueError: If ``name`` is already registered
        """
        if name in self._factories:
            raise ValueError(f"Input already registered: {name}")
        self._factories[name] = factory

    def create(self, name: str, config: Any, logger: logging.Logger) -> BaseCollector:
        """
        Instantiate the input registered under ``name``.

        Raises:
            KeyError: If no input is registered under ``name``
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise KeyError(f"Unknown input: {name}") from None
        return factory(config, logger)

    def names(self) -> List[str]:
        """Registered input names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories
