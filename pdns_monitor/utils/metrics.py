"""Measurement data structures handed to accumulators."""

from dataclasses import dataclass, field
from typing import Optional, Dict
import time


@dataclass
class Measurement:
    """One named set of integer fields reported by a single target."""

    name: str
    fields: Dict[str, int]
    tags: Dict[str, str] = field(default_factory=dict)
    timestamp: Optional[float] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = time.time()

    def to_dict(self) -> Dict[str, object]:
        """Flatten to a JSON-friendly dict."""
        return {
            "measurement": self.name,
            "fields": dict(self.fields),
            "tags": dict(self.tags),
            "measured_at": self.timestamp,
        }
