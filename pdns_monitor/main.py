"""Main application entry point for the PowerDNS stats collector."""

import argparse
import asyncio
import logging
import signal
import sys
import textwrap
import time
from typing import Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .collectors import powerdns_collector
from .collectors.base import BaseCollector
from .collectors.registry import InputRegistry
from .config.loader import ConfigLoader
from .config.models import MonitoringSystemConfig
from .config.settings import Settings
from .services.accumulator import Accumulator, LogAccumulator
from .utils.logger import setup_logger


def build_registry() -> InputRegistry:
    """Register every available input."""
    registry = InputRegistry()
    powerdns_collector.register(registry)
    return registry


class CollectorApp:
    """
    Main collector application.

    Builds the configured inputs and runs gather passes, either once or on
    the configured cron schedule.
    """

    def __init__(
        self,
        config: MonitoringSystemConfig,
        logger: Optional[logging.Logger] = None,
        registry: Optional[InputRegistry] = None,
        accumulator: Optional[Accumulator] = None
    ):
        """
        Initialize collector application.

        Args:
            config: Validated configuration
            logger: Optional logger instance
            registry: Input registry; defaults to ``build_registry()``
            accumulator: Measurement sink; defaults to JSON log output
        """
        self.config = config
        self.logger = logger or setup_logger("main")
        self.registry = registry or build_registry()
        self.accumulator = accumulator or LogAccumulator(self.logger)
        self.scheduler = None
        self._stop_event = None
        self.collectors = self._build_collectors()

    def _build_collectors(self) -> Dict[str, BaseCollector]:
        """Instantiate every input that has a configuration section."""
        collectors = {}
        for name, input_config in self.config.inputs:
            if input_config is None:
                continue
            collectors[name] = self.registry.create(name, input_config, self.logger)
            self.logger.info(f"Enabled input: {name}")

        if not collectors:
            self.logger.warning("No inputs configured")
        return collectors

    async def run_gather_cycle(self) -> None:
        """
        Run one gather pass over every enabled input.

        Raises:
            CollectionError: From the first failing input
        """
        self.logger.info("Starting gather cycle")
        start_time = time.time()

        for name, collector in self.collectors.items():
            try:
                await collector.gather(self.accumulator)
            except Exception as e:
                self.logger.error(
                    f"Gather cycle failed in input {name}",
                    exc_info=True,
                    extra={
                        "input": name,
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                        "target": getattr(e, "target", None)
                    }
                )
                raise

        duration = time.time() - start_time
        self.logger.info(f"Gather cycle completed in {duration:.2f}s")

    def _build_trigger(self) -> CronTrigger:
        schedule = self.config.monitoring.schedule
        minute, hour, day, month, day_of_week = schedule.split()
        return CronTrigger(
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=day_of_week
        )

    async def run_scheduler(self) -> None:
        """
        Run gather passes on the configured cron schedule.

        Runs until SIGINT/SIGTERM is received.
        """
        self._stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for signum in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(signum, self._request_stop, signum)

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.run_gather_cycle,
            trigger=self._build_trigger(),
            id='gather_cycle',
            name='PowerDNS Gather Cycle',
            max_instances=1,  # Prevent overlapping passes
            coalesce=True,
            misfire_grace_time=30
        )
        self.scheduler.start()
        self.logger.info(f"Scheduler started with cron: {self.config.monitoring.schedule}")

        try:
            await self._stop_event.wait()
        finally:
            self.scheduler.shutdown(wait=False)
            self.logger.info("Scheduler stopped")

    def _request_stop(self, signum: int) -> None:
        self.logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        self._stop_event.set()


def main(argv=None):
    """
    CLI entry point.

    Parses command-line arguments and starts the collector.
    """
    settings = Settings()
    parser = argparse.ArgumentParser(
        description='Collect PowerDNS statistics from local control sockets',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on the configured schedule
  pdns-monitor

  # Run one gather pass and exit
  pdns-monitor --run-once

  # Print a sample input configuration
  pdns-monitor --sample-config
        """
    )

    parser.add_argument(
        '--config',
        default=settings.CONFIG_PATH,
        help='Path to configuration file (default: config/config.yaml or PDNS_MONITOR_CONFIG)'
    )

    parser.add_argument(
        '--run-once',
        action='store_true',
        help='Run one gather pass and exit (no scheduler)'
    )

    parser.add_argument(
        '--sample-config',
        action='store_true',
        help='Print sample configuration for every input and exit'
    )

    parser.add_argument(
        '--log-level',
        default=settings.LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO or LOG_LEVEL env var)'
    )

    args = parser.parse_args(argv)
    logger = setup_logger("pdns_monitor", args.log_level)

    if args.sample_config:
        registry = build_registry()
        print("inputs:")
        for name in registry.names():
            collector = registry.create(name, None, logger)
            print(f"  # {collector.description()}")
            print(f"  {name}:")
            print(textwrap.indent(collector.sample_config().strip("\n"), "  "))
        return 0

    try:
        config = ConfigLoader.load_from_file(args.config)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}", exc_info=True)
        return 1

    app = CollectorApp(config, logger)

    if args.run_once:
        try:
            asyncio.run(app.run_gather_cycle())
        except Exception:
            return 1
        return 0

    asyncio.run(app.run_scheduler())
    return 0


if __name__ == '__main__':
    sys.exit(main())
