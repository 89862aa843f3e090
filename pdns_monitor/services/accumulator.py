"""Measurement sinks that collectors push results into."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..utils.metrics import Measurement


class Accumulator(ABC):
    """Receives measurements produced during a gather pass."""

    @abstractmethod
    def add_fields(
        self,
        measurement: str,
        fields: Dict[str, int],
        tags: Optional[Dict[str, str]] = None
    ) -> Measurement:
        """
        Record one measurement.

        Args:
            measurement: Measurement name (e.g. "powerdns")
            fields: Metric name to integer value
            tags: Identifying tags such as the originating server

        Returns:
            Measurement: The record that was stored or emitted
        """
        pass


class MemoryAccumulator(Accumulator):
    """Keeps every measurement in arrival order."""

    def __init__(self):
        self.measurements: List[Measurement] = []

    def add_fields(self, measurement, fields, tags=None) -> Measurement:
        record = Measurement(name=measurement, fields=dict(fields), tags=dict(tags or {}))
        self.measurements.append(record)
        return record

    def clear(self) -> None:
        self.measurements = []


class LogAccumulator(Accumulator):
    """
    Emits each measurement as one structured log record.

    With the JSON formatter from ``setup_logger`` every measurement becomes a
    single JSON line carrying ``measurement``, ``fields``, ``tags`` and
    ``measured_at`` keys.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger.getChild("measurements")
        self.count = 0

    def add_fields(self, measurement, fields, tags=None) -> Measurement:
        record = Measurement(name=measurement, fields=dict(fields), tags=dict(tags or {}))
        self.logger.info("measurement", extra=record.to_dict())
        self.count += 1
        return record
