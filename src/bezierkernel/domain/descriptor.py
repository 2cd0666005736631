"""Tessellation descriptors and their fixed binary layout.

A descriptor tells one evaluation work item which curve to sample, how
many vertices to produce and where in the shared vertex buffer to put them.

Binary layout (48 bytes, little-endian), compatible with the compute
kernel record:

    offset  size  field
    0       1     kind (u8)
    1       3     padding
    4       2     number_of_vertexes (u16)
    6       2     vertex_index (u16)
    8       2     width0 (u16)
    10      2     width1 (u16)
    12      4     padding
    16      32    p0..p3 (2 x f32 each, NaN when unused)
"""

import math
import struct
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from bezierkernel.domain.point import Point
from bezierkernel.domain.segment import CONTROL_POINT_COUNT, SegmentKind
from bezierkernel.exceptions import DescriptorOverflowError, TessellationError

DESCRIPTOR_STRUCT = struct.Struct("<B3xHHHH4x8f")
DESCRIPTOR_SIZE = DESCRIPTOR_STRUCT.size

UINT16_MAX = 0xFFFF

_UNUSED = (math.nan, math.nan)


def _check_u16(field_name: str, value: int) -> int:
    if value < 0 or value > UINT16_MAX:
        raise DescriptorOverflowError(field_name, value, UINT16_MAX)
    return value


@dataclass(frozen=True, slots=True)
class TessellationDescriptor:
    """Evaluation parameters for one segment.

    Attributes:
        kind: Segment kind (line, quadratic or cubic)
        number_of_vertexes: Vertices to produce for this segment (may be 0)
        vertex_index: Offset of the first vertex in the shared vertex buffer
        width0: Stroke width at t=0
        width1: Stroke width at t=1
        control_points: 2, 3 or 4 control points depending on kind
    """

    kind: SegmentKind
    number_of_vertexes: int
    vertex_index: int
    width0: int
    width1: int
    control_points: tuple[Point, ...]

    @property
    def end_index(self) -> int:
        return self.vertex_index + self.number_of_vertexes

    def pack(self) -> bytes:
        """Encode into the 48-byte binary record.

        Returns:
            Packed descriptor bytes

        Raises:
            DescriptorOverflowError: If a count, offset or width exceeds u16
        """
        coords: list[float] = []
        for i in range(4):
            if i < len(self.control_points):
                coords.extend(self.control_points[i].to_tuple())
            else:
                coords.extend(_UNUSED)

        return DESCRIPTOR_STRUCT.pack(
            int(self.kind),
            _check_u16("number_of_vertexes", self.number_of_vertexes),
            _check_u16("vertex_index", self.vertex_index),
            _check_u16("width0", self.width0),
            _check_u16("width1", self.width1),
            *coords,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "TessellationDescriptor":
        """Decode a 48-byte binary record.

        Args:
            data: Exactly DESCRIPTOR_SIZE bytes

        Returns:
            TessellationDescriptor instance (coordinates narrowed to float32)

        Raises:
            TessellationError: If the record is truncated or has an unknown kind
        """
        if len(data) != DESCRIPTOR_SIZE:
            raise TessellationError(
                f"Descriptor record must be {DESCRIPTOR_SIZE} bytes, got {len(data)}"
            )
        kind_tag, count, index, w0, w1, *coords = DESCRIPTOR_STRUCT.unpack(data)
        try:
            kind = SegmentKind(kind_tag)
        except ValueError as e:
            raise TessellationError(f"Unknown segment kind tag {kind_tag}") from e

        n_points = CONTROL_POINT_COUNT[kind]
        points = tuple(
            Point(coords[2 * i], coords[2 * i + 1]) for i in range(n_points)
        )
        return cls(
            kind=kind,
            number_of_vertexes=count,
            vertex_index=index,
            width0=w0,
            width1=w1,
            control_points=points,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the descriptor
        """
        return {
            "kind": int(self.kind),
            "number_of_vertexes": self.number_of_vertexes,
            "vertex_index": self.vertex_index,
            "width0": self.width0,
            "width1": self.width1,
            "control_points": [p.to_tuple() for p in self.control_points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TessellationDescriptor":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a descriptor

        Returns:
            TessellationDescriptor instance
        """
        return cls(
            kind=SegmentKind(data["kind"]),
            number_of_vertexes=data["number_of_vertexes"],
            vertex_index=data["vertex_index"],
            width0=data["width0"],
            width1=data["width1"],
            control_points=tuple(Point(x, y) for x, y in data["control_points"]),
        )


@dataclass
class DescriptorTable:
    """Ordered descriptors for one tessellation invocation.

    Attributes:
        descriptors: Descriptors in segment order
        total_vertex_count: Sum of all vertex counts (vertex buffer capacity)
    """

    descriptors: list[TessellationDescriptor] = field(default_factory=list)
    total_vertex_count: int = 0

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self) -> Iterator[TessellationDescriptor]:
        return iter(self.descriptors)

    def __getitem__(self, index: int) -> TessellationDescriptor:
        return self.descriptors[index]

    def is_empty(self) -> bool:
        return not self.descriptors

    def degenerate_count(self) -> int:
        """Number of descriptors that produce no vertices."""
        return sum(1 for d in self.descriptors if d.number_of_vertexes == 0)

    def pack(self) -> bytes:
        """Concatenate the binary records of all descriptors."""
        return b"".join(d.pack() for d in self.descriptors)

    @classmethod
    def unpack(cls, data: bytes) -> "DescriptorTable":
        """Decode a buffer of concatenated descriptor records.

        Raises:
            TessellationError: If the buffer length is not a multiple of the record size
        """
        if len(data) % DESCRIPTOR_SIZE:
            raise TessellationError(
                f"Descriptor buffer length {len(data)} is not a multiple of {DESCRIPTOR_SIZE}"
            )
        descriptors = [
            TessellationDescriptor.unpack(data[offset:offset + DESCRIPTOR_SIZE])
            for offset in range(0, len(data), DESCRIPTOR_SIZE)
        ]
        total = sum(d.number_of_vertexes for d in descriptors)
        return cls(descriptors=descriptors, total_vertex_count=total)
