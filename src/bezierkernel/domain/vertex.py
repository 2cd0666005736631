"""Vertex records and the shared output buffer.

The vertex buffer is a contiguous, preallocated array of fixed-size
records addressed by index. Descriptors own disjoint index ranges of it,
so evaluation results can be written without locking.
"""

import math
import struct
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import NamedTuple

from bezierkernel.exceptions import (
    BufferAllocationError,
    BufferBoundsError,
)


class Vertex(NamedTuple):
    """A tessellated vertex with its interpolated stroke width."""

    x: float
    y: float
    width: float


class VertexFormat(str, Enum):
    """Binary encoding of a vertex record.

    Every record holds x, y, width and one padding slot:
    - HALF: four 16-bit floats (8 bytes), the compute kernel format
    - SINGLE: four 32-bit floats (16 bytes)
    """

    HALF = "half"
    SINGLE = "single"

    @property
    def record_struct(self) -> struct.Struct:
        return _RECORD_STRUCTS[self]

    @property
    def record_size(self) -> int:
        return _RECORD_STRUCTS[self].size

    def pack(self, vertex: Vertex) -> bytes:
        """Encode one vertex as a record.

        Values too large for the encoding saturate to +/-inf, as a float
        conversion on the GPU side would.
        """
        limit = _OVERFLOW_LIMITS[self]
        return self.record_struct.pack(
            _saturate(vertex.x, limit),
            _saturate(vertex.y, limit),
            _saturate(vertex.width, limit),
            0.0,
        )

    def pack_many(self, vertices: Iterable[Vertex]) -> bytes:
        return b"".join(self.pack(v) for v in vertices)

    def unpack(self, data: bytes | bytearray | memoryview, offset: int = 0) -> Vertex:
        x, y, width, _ = self.record_struct.unpack_from(data, offset)
        return Vertex(x, y, width)


_RECORD_STRUCTS: dict[VertexFormat, struct.Struct] = {
    VertexFormat.HALF: struct.Struct("<eeee"),
    VertexFormat.SINGLE: struct.Struct("<ffff"),
}

# Smallest magnitudes that round to infinity in each encoding
_OVERFLOW_LIMITS: dict[VertexFormat, float] = {
    VertexFormat.HALF: 65520.0,
    VertexFormat.SINGLE: 2.0**128 - 2.0**103,
}


def _saturate(value: float, limit: float) -> float:
    if abs(value) >= limit:
        return math.copysign(math.inf, value)
    return value


class VertexBuffer:
    """Preallocated, index-addressed vertex record buffer.

    Each slot may be written exactly once. Writes outside the capacity or
    to an already written slot raise BufferBoundsError, which makes
    overlapping descriptor ranges detectable instead of silently corrupting
    output.

    Example:
        buffer = VertexBuffer(10, VertexFormat.HALF)
        buffer.write(0, Vertex(0.0, 0.0, 8.0))
        vertex = buffer.read(0)
    """

    def __init__(self, capacity: int, vertex_format: VertexFormat = VertexFormat.HALF) -> None:
        """Allocate the buffer.

        Args:
            capacity: Number of vertex records
            vertex_format: Record encoding

        Raises:
            BufferAllocationError: If the buffer cannot be allocated
        """
        if capacity < 0:
            raise BufferAllocationError(capacity, "capacity must not be negative")

        self._capacity = capacity
        self._format = vertex_format
        try:
            self._data = bytearray(capacity * vertex_format.record_size)
            self._written = bytearray(capacity)
        except (MemoryError, OverflowError) as e:
            raise BufferAllocationError(capacity, str(e) or type(e).__name__) from e
        self._written_count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def vertex_format(self) -> VertexFormat:
        return self._format

    @property
    def written_count(self) -> int:
        return self._written_count

    def __len__(self) -> int:
        return self._capacity

    def is_complete(self) -> bool:
        """True once every slot has been written."""
        return self._written_count == self._capacity

    def _check_range(self, offset: int, count: int) -> None:
        if offset < 0 or count < 0 or offset + count > self._capacity:
            raise BufferBoundsError(
                f"Range [{offset}, {offset + count}) outside buffer of capacity {self._capacity}"
            )

    def _claim(self, offset: int, count: int) -> None:
        for index in range(offset, offset + count):
            if self._written[index]:
                raise BufferBoundsError(f"Vertex slot {index} already written")
        self._written[offset:offset + count] = b"\x01" * count
        self._written_count += count

    def write(self, index: int, vertex: Vertex) -> None:
        """Write one vertex at ``index``."""
        self._check_range(index, 1)
        record = self._format.pack(vertex)
        self._claim(index, 1)
        size = self._format.record_size
        self._data[index * size:(index + 1) * size] = record

    def write_range(self, offset: int, packed: bytes) -> None:
        """Write already-encoded records starting at ``offset``.

        Args:
            offset: Index of the first record
            packed: Concatenated records in this buffer's format

        Raises:
            BufferBoundsError: If the records do not fit or overlap written slots
        """
        size = self._format.record_size
        if len(packed) % size:
            raise BufferBoundsError(
                f"Packed data length {len(packed)} is not a multiple of record size {size}"
            )
        count = len(packed) // size
        self._check_range(offset, count)
        self._claim(offset, count)
        self._data[offset * size:(offset + count) * size] = packed

    def read(self, index: int) -> Vertex:
        self._check_range(index, 1)
        return self._format.unpack(self._data, index * self._format.record_size)

    def read_range(self, offset: int, count: int) -> list[Vertex]:
        self._check_range(offset, count)
        size = self._format.record_size
        return [self._format.unpack(self._data, (offset + i) * size) for i in range(count)]

    def __iter__(self) -> Iterator[Vertex]:
        size = self._format.record_size
        for index in range(self._capacity):
            yield self._format.unpack(self._data, index * size)

    def to_bytes(self) -> bytes:
        """Raw buffer contents in record layout."""
        return bytes(self._data)
