"""Tessellation pipeline orchestration.

Runs the full workflow for one invocation:
1. Extract segments (with arc lengths) from path commands
2. Build descriptors with vertex budgets and buffer offsets
3. Allocate the vertex buffer
4. Evaluate descriptors (in parallel) into the buffer
5. Assemble the ordered vertex stream

Stages 1-3 are sequential single passes; only stage 4 runs in parallel.
"""

import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from bezierkernel.config import KernelSettings
from bezierkernel.core.assembler import assemble_vertices
from bezierkernel.core.descriptors import build_descriptors
from bezierkernel.core.evaluator import EvaluationContext
from bezierkernel.core.extractor import DroppedCommand, SegmentExtractor
from bezierkernel.domain import (
    DescriptorTable,
    PathCommand,
    Segment,
    Vertex,
    VertexBuffer,
)
from bezierkernel.exceptions import BezierKernelError
from bezierkernel.utils import PipelineLogger, TessellationStats


@dataclass
class TessellationResult:
    """Everything produced by one pipeline run.

    Attributes:
        segments: Extracted segments in path order
        table: Descriptor table (descriptors and total vertex count)
        buffer: Filled vertex buffer
        vertices: Ordered vertex stream
        dropped: Commands dropped for lack of an anchor point
        stats: Counts and stage timings
    """

    segments: list[Segment]
    table: DescriptorTable
    buffer: VertexBuffer
    vertices: list[Vertex]
    dropped: list[DroppedCommand]
    stats: TessellationStats


class TessellationPipeline:
    """Orchestrates path tessellation.

    The evaluation context may be supplied by the caller, in which case it
    is reused and left open. Otherwise the pipeline creates a context from
    the processing settings for each run and releases it afterwards.

    Example:
        settings = KernelSettings()
        with EvaluationContext(max_workers=4) as context:
            pipeline = TessellationPipeline(settings, context=context)
            result = pipeline.run(commands)
    """

    def __init__(
        self,
        settings: KernelSettings,
        context: EvaluationContext | None = None,
    ) -> None:
        """Initialize the pipeline with configuration.

        Args:
            settings: Kernel settings containing tessellation and processing config
            context: Optional caller-owned evaluation context
        """
        self.settings = settings
        self.context = context
        self.logger = structlog.get_logger("bezierkernel.pipeline")

    def run(self, commands: Sequence[PathCommand]) -> TessellationResult:
        """Tessellate a single command stream.

        Args:
            commands: Ordered path commands

        Returns:
            TessellationResult for the stream
        """
        return self.run_paths([commands])

    def run_paths(self, paths: Iterable[Sequence[PathCommand]]) -> TessellationResult:
        """Tessellate several independent command streams into one buffer.

        Args:
            paths: Command streams, each starting with fresh pen state

        Returns:
            TessellationResult with vertices of all paths in input order

        Raises:
            ConfigurationError: If tessellation parameters are invalid
            BufferAllocationError: If the vertex buffer cannot be allocated
            DispatchError: If parallel evaluation fails
        """
        config = self.settings.tessellation
        pipeline_logger = PipelineLogger(self.logger)
        stats = pipeline_logger.stats
        stats.start_time = time.time()

        # Extract segments
        stage_start = time.time()
        extractor = SegmentExtractor(
            cubic_samples=config.cubic_length_samples,
            warn_on_dropped=config.warn_on_dropped,
        )
        segments = extractor.extract_paths(paths)
        dropped = extractor.dropped
        pipeline_logger.log_segments_extracted(
            segment_count=len(segments),
            dropped_count=len(dropped),
            duration_ms=(time.time() - stage_start) * 1000,
        )

        # Build descriptors
        stage_start = time.time()
        try:
            table = build_descriptors(
                segments,
                width0=config.width0,
                width1=config.width1,
                step=config.step,
            )
        except BezierKernelError as e:
            pipeline_logger.log_pipeline_error("build", e)
            raise
        pipeline_logger.log_descriptors_built(
            descriptor_count=len(table),
            degenerate_count=table.degenerate_count(),
            vertex_count=table.total_vertex_count,
            duration_ms=(time.time() - stage_start) * 1000,
        )

        # Allocate and fill the vertex buffer
        stage_start = time.time()
        try:
            buffer = VertexBuffer(table.total_vertex_count, config.vertex_format)
            work_items = self._evaluate(table, buffer)
        except BezierKernelError as e:
            pipeline_logger.log_pipeline_error("evaluate", e)
            raise
        pipeline_logger.log_evaluation_complete(
            work_items=work_items,
            duration_ms=(time.time() - stage_start) * 1000,
        )

        # Read back in segment order
        stage_start = time.time()
        vertices = assemble_vertices(buffer, table)
        pipeline_logger.log_vertices_assembled(
            vertex_count=len(vertices),
            duration_ms=(time.time() - stage_start) * 1000,
        )

        stats.end_time = time.time()

        self.logger.info(
            "Tessellation complete",
            segments=stats.segment_count,
            dropped=stats.dropped_count,
            descriptors=stats.descriptor_count,
            vertices=stats.vertex_count,
            duration_seconds=round(stats.duration_seconds, 4),
        )

        return TessellationResult(
            segments=segments,
            table=table,
            buffer=buffer,
            vertices=vertices,
            dropped=dropped,
            stats=stats,
        )

    def _evaluate(self, table: DescriptorTable, buffer: VertexBuffer) -> int:
        if self.context is not None:
            return self.context.dispatch(table, buffer)

        processing = self.settings.processing
        with EvaluationContext(
            max_workers=processing.max_workers,
            sequential=processing.sequential,
        ) as context:
            return context.dispatch(table, buffer)
