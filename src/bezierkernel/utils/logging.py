"""Logging utilities for BezierKernel."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog


@dataclass
class TessellationStats:
    """Statistics from one tessellation run."""

    segment_count: int = 0
    dropped_count: int = 0
    descriptor_count: int = 0
    degenerate_count: int = 0
    vertex_count: int = 0
    work_items: int = 0
    extract_ms: float = 0.0
    build_ms: float = 0.0
    evaluate_ms: float = 0.0
    assemble_ms: float = 0.0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("bezierkernel")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class PipelineLogger:
    """Logger for tracking tessellation stages and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = TessellationStats()

    def log_segments_extracted(
        self,
        segment_count: int,
        dropped_count: int,
        duration_ms: float,
    ) -> None:
        """Log segment extraction results."""
        self._logger.debug(
            "Segments extracted",
            segments=segment_count,
            dropped=dropped_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.segment_count = segment_count
        self._stats.dropped_count = dropped_count
        self._stats.extract_ms = duration_ms

    def log_descriptors_built(
        self,
        descriptor_count: int,
        degenerate_count: int,
        vertex_count: int,
        duration_ms: float,
    ) -> None:
        """Log descriptor table details."""
        self._logger.debug(
            "Descriptors built",
            descriptors=descriptor_count,
            degenerate=degenerate_count,
            vertices=vertex_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.descriptor_count = descriptor_count
        self._stats.degenerate_count = degenerate_count
        self._stats.vertex_count = vertex_count
        self._stats.build_ms = duration_ms

    def log_evaluation_complete(self, work_items: int, duration_ms: float) -> None:
        """Log completion of the parallel evaluation stage."""
        self._logger.info(
            "Descriptors evaluated",
            work_items=work_items,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.work_items = work_items
        self._stats.evaluate_ms = duration_ms

    def log_vertices_assembled(self, vertex_count: int, duration_ms: float) -> None:
        """Log vertex stream assembly."""
        self._logger.debug(
            "Vertices assembled",
            vertices=vertex_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.assemble_ms = duration_ms

    def log_pipeline_error(self, stage: str, error: Exception) -> None:
        """Log a failure that aborts the run."""
        self._logger.error(
            "Tessellation failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> TessellationStats:
        """Get current tessellation statistics."""
        return self._stats
