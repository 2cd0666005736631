"""Core tessellation algorithms for bezierkernel.

This module contains the core algorithms for:

- Arc-length estimation (lines, quadratic and cubic curves)
- Segment extraction from path command streams
- Descriptor building (vertex budgets and buffer offsets)
- Parallel curve evaluation into the shared vertex buffer
- Vertex stream assembly

Extraction, length estimation and descriptor building are sequential,
deterministic passes. Evaluation is a pure per-descriptor function that is
safe to run in worker processes.

Key functions:
- line_length, quadratic_length, cubic_length: Arc-length estimates
- extract_segments: Convert path commands to segments
- build_descriptors: Assign vertex counts and offsets
- evaluate: Sample one descriptor's curve
- assemble_vertices: Read the buffer back in segment order

Key classes:
- SegmentExtractor: Stateful command walker recording dropped commands
- EvaluationContext: Worker pool with explicit lifecycle
- TessellationPipeline: Runs all stages for one invocation
"""

from bezierkernel.core.arclength import (
    cubic_length,
    line_length,
    quadratic_length,
    segment_length,
)
from bezierkernel.core.assembler import assemble_vertices, iter_segment_vertices
from bezierkernel.core.descriptors import build_descriptors, vertex_count_for
from bezierkernel.core.evaluator import (
    EvaluationContext,
    evaluate,
    evaluate_into,
    evaluate_packed,
)
from bezierkernel.core.extractor import (
    DroppedCommand,
    SegmentExtractor,
    extract_segments,
)
from bezierkernel.core.pipeline import TessellationPipeline, TessellationResult

__all__ = [
    # Extraction
    "DroppedCommand",
    # Evaluation
    "EvaluationContext",
    "SegmentExtractor",
    # Pipeline
    "TessellationPipeline",
    "TessellationResult",
    # Assembly
    "assemble_vertices",
    # Descriptors
    "build_descriptors",
    # Arc length
    "cubic_length",
    "evaluate",
    "evaluate_into",
    "evaluate_packed",
    "extract_segments",
    "iter_segment_vertices",
    "line_length",
    "quadratic_length",
    "segment_length",
    "vertex_count_for",
]
