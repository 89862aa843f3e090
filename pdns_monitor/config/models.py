"""Pydantic configuration models for the collector."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class PowerDNSConfig(BaseModel):
    """Configuration for the PowerDNS control-socket input."""
    # Empty means the default control socket path is queried
    unix_sockets: List[str] = Field(default_factory=list)

    @field_validator('unix_sockets')
    @classmethod
    def validate_socket_paths(cls, v: List[str]) -> List[str]:
        """Reject blank socket paths."""
        for path in v:
            if not path.strip():
                raise ValueError('Socket path must not be empty')
        return v


class MonitoringConfig(BaseModel):
    """Gather schedule configuration."""
    schedule: str = "* * * * *"  # Cron syntax

    @field_validator('schedule')
    @classmethod
    def validate_cron(cls, v: str) -> str:
        """Basic cron syntax validation."""
        parts = v.split()
        if len(parts) != 5:
            raise ValueError('Cron expression must have 5 parts: minute hour day month weekday')
        return v


class InputsConfig(BaseModel):
    """Enabled inputs. A missing section disables that input."""
    powerdns: Optional[PowerDNSConfig] = None

    @field_validator('powerdns', mode='before')
    @classmethod
    def empty_section_uses_defaults(cls, v):
        """A bare `powerdns:` key enables the input with defaults."""
        return {} if v is None else v


class MonitoringSystemConfig(BaseModel):
    """Root configuration model."""
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    inputs: InputsConfig = Field(default_factory=InputsConfig)
