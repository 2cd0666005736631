"""Configuration management for bezierkernel.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TessellationConfig: Step length, stroke widths and buffer encoding
- ProcessingConfig: Parallel evaluation settings
- LoggingConfig: Logging settings
- KernelSettings: Main application settings
"""

from bezierkernel.config.settings import (
    KernelSettings,
    LoggingConfig,
    ProcessingConfig,
    TessellationConfig,
    get_default_settings,
)

__all__ = [
    "KernelSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "TessellationConfig",
    "get_default_settings",
]
