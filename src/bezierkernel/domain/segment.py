"""Typed path segments produced by the segment extractor.

Each segment kind carries exactly the control points it needs plus an
arc-length estimate. Segments chain: ``p0`` of a segment is the end point
of the previous segment in the same subpath.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TypeAlias

from bezierkernel.domain.point import Point


class SegmentKind(IntEnum):
    """Segment kind tag.

    Values match the element tags of the GPU descriptor layout.
    """

    LINE = 2
    QUAD = 3
    CUBIC = 4


@dataclass(frozen=True, slots=True)
class LineSegment:
    """Straight segment from ``p0`` to ``p1``."""

    p0: Point
    p1: Point
    length: float

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.LINE

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1)

    @property
    def end_point(self) -> Point:
        return self.p1


@dataclass(frozen=True, slots=True)
class QuadSegment:
    """Quadratic Bezier segment with control point ``p1``."""

    p0: Point
    p1: Point
    p2: Point
    length: float

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.QUAD

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1, self.p2)

    @property
    def end_point(self) -> Point:
        return self.p2


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """Cubic Bezier segment with control points ``p1`` and ``p2``."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point
    length: float

    @property
    def kind(self) -> SegmentKind:
        return SegmentKind.CUBIC

    @property
    def control_points(self) -> tuple[Point, ...]:
        return (self.p0, self.p1, self.p2, self.p3)

    @property
    def end_point(self) -> Point:
        return self.p3


Segment: TypeAlias = LineSegment | QuadSegment | CubicSegment

# Number of control points for each segment kind
CONTROL_POINT_COUNT: dict[SegmentKind, int] = {
    SegmentKind.LINE: 2,
    SegmentKind.QUAD: 3,
    SegmentKind.CUBIC: 4,
}
