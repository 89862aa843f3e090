"""Tests for BaseCollector class."""

import logging

import pytest

from pdns_monitor.collectors.base import BaseCollector


class MockCollector(BaseCollector):
    """Mock collector for testing BaseCollector functionality."""

    def __init__(self, config=None, logger=None):
        if logger is None:
            logger = logging.getLogger(__name__)
        super().__init__(config, logger)

    async def gather(self, acc):
        """Emit a single fixed measurement."""
        acc.add_fields("mock", {"value": 1}, {"server": "mock"})

    def description(self):
        return "Mock input"

    def sample_config(self):
        return "\n  # nothing to configure\n"


class TestBaseCollector:
    """Test suite for BaseCollector."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            BaseCollector(None, logging.getLogger(__name__))

    def test_subclass_missing_metadata_is_abstract(self):
        class NoMetadata(BaseCollector):
            async def gather(self, acc):
                pass

        with pytest.raises(TypeError):
            NoMetadata(None, logging.getLogger(__name__))

    def test_collector_initialization_with_config(self):
        config = {"unix_sockets": ["/run/pdns.sock"]}

        collector = MockCollector(config)

        assert collector.config == config
        assert collector.logger is not None

    def test_collector_logger_hierarchy(self):
        parent_logger = logging.getLogger("test_parent")
        collector = MockCollector(logger=parent_logger)

        assert collector.logger.parent == parent_logger
        assert collector.logger.name == "test_parent.MockCollector"

    @pytest.mark.asyncio
    async def test_gather_pushes_to_accumulator(self, accumulator):
        collector = MockCollector()

        await collector.gather(accumulator)

        assert len(accumulator.measurements) == 1
        assert accumulator.measurements[0].name == "mock"
