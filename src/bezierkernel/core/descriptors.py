"""Tessellation descriptor building.

Turns segments into descriptors with a vertex budget and a reserved range
in the vertex buffer. Offsets are a running sum computed in a single pass
in segment order, so descriptor ranges tile the buffer exactly:

    descriptors[i].vertex_index == sum(d.number_of_vertexes for d in descriptors[:i])
"""

import math
from collections.abc import Iterable

import structlog

from bezierkernel.domain import DescriptorTable, Segment, TessellationDescriptor
from bezierkernel.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


def vertex_count_for(length: float, step: float) -> int:
    """Number of vertices budgeted for a segment.

    Args:
        length: Segment arc length
        step: World-unit spacing between vertices

    Returns:
        floor(length / step); 0 for segments shorter than one step

    Examples:
        >>> vertex_count_for(80.0, 8.0)
        10
        >>> vertex_count_for(3.0, 8.0)
        0
    """
    if not math.isfinite(length) or length <= 0.0:
        return 0
    return int(math.floor(length / step))


def build_descriptors(
    segments: Iterable[Segment],
    width0: int,
    width1: int,
    step: float,
) -> DescriptorTable:
    """Build descriptors for an ordered list of segments.

    The same pair of stroke widths applies to every segment of the
    invocation.

    Args:
        segments: Segments in path order
        width0: Stroke width at the start of each segment
        width1: Stroke width at the end of each segment
        step: World-unit spacing between vertices

    Returns:
        DescriptorTable with descriptors in segment order and the total
        vertex count

    Raises:
        ConfigurationError: If step is not positive or a width is negative
    """
    if not step > 0.0 or not math.isfinite(step):
        raise ConfigurationError("step", f"must be a positive number, got {step}")
    if width0 < 0:
        raise ConfigurationError("width0", f"must not be negative, got {width0}")
    if width1 < 0:
        raise ConfigurationError("width1", f"must not be negative, got {width1}")

    descriptors: list[TessellationDescriptor] = []
    vertex_count = 0

    for segment in segments:
        count = vertex_count_for(segment.length, step)
        descriptors.append(
            TessellationDescriptor(
                kind=segment.kind,
                number_of_vertexes=count,
                vertex_index=vertex_count,
                width0=width0,
                width1=width1,
                control_points=segment.control_points,
            )
        )
        vertex_count += count

    table = DescriptorTable(descriptors=descriptors, total_vertex_count=vertex_count)

    logger.debug(
        "Descriptor table built",
        descriptors=len(descriptors),
        total_vertices=vertex_count,
        degenerate=table.degenerate_count(),
        step=step,
    )

    return table
