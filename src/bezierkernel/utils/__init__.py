"""Utility functions for bezierkernel.

This module provides utility functions including:

- Logging setup and configuration
- Stage timing and statistics collection
"""

from bezierkernel.utils.logging import (
    PipelineLogger,
    TessellationStats,
    configure_logging,
)

__all__ = [
    "PipelineLogger",
    "TessellationStats",
    "configure_logging",
]
