"""Configuration settings for BezierKernel."""

from pathlib import Path

from pydantic import BaseModel, Field

from bezierkernel.domain.vertex import VertexFormat


class TessellationConfig(BaseModel):
    """Configuration for vertex budgeting and stroke widths.

    The step length is in world units: a segment of length L receives
    floor(L / step) vertices, so smaller steps give smoother output at the
    cost of a larger vertex buffer.
    """

    step: float = Field(
        default=8.0,
        gt=0.0,
        description="World-unit spacing between tessellated vertices",
    )
    width0: int = Field(
        default=8,
        ge=0,
        le=65535,
        description="Stroke width at the start of every segment",
    )
    width1: int = Field(
        default=8,
        ge=0,
        le=65535,
        description="Stroke width at the end of every segment",
    )
    cubic_length_samples: int = Field(
        default=16,
        ge=8,
        le=64,
        description="Chord count used to estimate curve arc lengths",
    )
    vertex_format: VertexFormat = Field(
        default=VertexFormat.HALF,
        description="Encoding of records in the output vertex buffer",
    )
    warn_on_dropped: bool = Field(
        default=True,
        description="Log a warning for path commands dropped for lack of an anchor point",
    )


class ProcessingConfig(BaseModel):
    """Configuration for parallel evaluation."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    sequential: bool = Field(
        default=False,
        description="Evaluate descriptors in-process instead of in a worker pool",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class KernelSettings(BaseModel):
    """Main application settings."""

    tessellation: TessellationConfig = Field(default_factory=TessellationConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> KernelSettings:
    """Get default application settings."""
    return KernelSettings()
