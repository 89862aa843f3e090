"""Environment settings."""

import os
from typing import Optional


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set
            required: Whether the variable is required

        Returns:
            str: Environment variable value

        Raises:
            ValueError: If required variable is not set
        """
        value = os.getenv(key, default)
        if required and not value:
            raise ValueError(f"Required environment variable not set: {key}")
        return value or ""

    # Convenience accessors
    CONFIG_PATH = property(lambda self: Settings.get("PDNS_MONITOR_CONFIG", "config/config.yaml"))
    LOG_LEVEL = property(lambda self: Settings.get("LOG_LEVEL", "INFO"))
