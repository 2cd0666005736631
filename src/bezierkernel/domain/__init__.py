"""Domain models for bezierkernel.

This module contains the core domain models representing path commands,
segments, tessellation descriptors and vertex buffers. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel evaluation)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point / vector
- MoveTo, LineTo, QuadCurveTo, CurveTo, Close: Path commands
- LineSegment, QuadSegment, CubicSegment: Typed segments with arc length
- TessellationDescriptor: Evaluation parameters for one segment
- DescriptorTable: Ordered descriptors with the total vertex count
- Vertex, VertexFormat, VertexBuffer: Output records and their buffer
"""

from bezierkernel.domain.commands import (
    Close,
    CurveTo,
    LineTo,
    MoveTo,
    PathCommand,
    QuadCurveTo,
)
from bezierkernel.domain.descriptor import (
    DESCRIPTOR_SIZE,
    DescriptorTable,
    TessellationDescriptor,
)
from bezierkernel.domain.point import Point
from bezierkernel.domain.segment import (
    CubicSegment,
    LineSegment,
    QuadSegment,
    Segment,
    SegmentKind,
)
from bezierkernel.domain.vertex import Vertex, VertexBuffer, VertexFormat

__all__: list[str] = [
    # Enums
    "SegmentKind",
    "VertexFormat",
    # Geometry
    "Point",
    # Commands
    "Close",
    "CurveTo",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadCurveTo",
    # Segments
    "CubicSegment",
    "LineSegment",
    "QuadSegment",
    "Segment",
    # Descriptors
    "DESCRIPTOR_SIZE",
    "DescriptorTable",
    "TessellationDescriptor",
    # Output
    "Vertex",
    "VertexBuffer",
]
