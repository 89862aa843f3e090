"""Tests for the input registry."""

import pytest

from pdns_monitor.collectors import powerdns_collector
from pdns_monitor.collectors.powerdns_collector import PowerDNSCollector
from pdns_monitor.collectors.registry import InputRegistry
from pdns_monitor.config.models import PowerDNSConfig
from pdns_monitor.main import build_registry


class TestInputRegistry:
    def test_new_registry_is_empty(self):
        assert InputRegistry().names() == []

    def test_importing_collector_registers_nothing(self):
        registry = InputRegistry()

        assert "powerdns" not in registry

    def test_register_adds_powerdns(self):
        registry = InputRegistry()
        powerdns_collector.register(registry)

        assert registry.names() == ["powerdns"]
        assert "powerdns" in registry

    def test_create_passes_config_and_logger(self, logger):
        registry = InputRegistry()
        powerdns_collector.register(registry)
        config = PowerDNSConfig(unix_sockets=["/run/pdns/one.sock"])

        collector = registry.create("powerdns", config, logger)

        assert isinstance(collector, PowerDNSCollector)
        assert collector.config is config
        assert collector.targets == ["/run/pdns/one.sock"]

    def test_duplicate_registration_rejected(self):
        registry = InputRegistry()
        powerdns_collector.register(registry)

        with pytest.raises(ValueError, match="already registered"):
            powerdns_collector.register(registry)

    def test_unknown_input(self, logger):
        with pytest.raises(KeyError, match="Unknown input"):
            InputRegistry().create("bind", None, logger)

    def test_build_registry(self):
        assert build_registry().names() == ["powerdns"]

    def test_build_registry_returns_fresh_instances(self):
        assert build_registry() is not build_registry()
