"""Tests for domain models to verify they work correctly."""

import math
import struct

import pytest

from bezierkernel.domain import (
    DESCRIPTOR_SIZE,
    Close,
    CubicSegment,
    CurveTo,
    DescriptorTable,
    LineSegment,
    LineTo,
    MoveTo,
    Point,
    QuadCurveTo,
    QuadSegment,
    SegmentKind,
    TessellationDescriptor,
    Vertex,
    VertexBuffer,
    VertexFormat,
)
from bezierkernel.exceptions import (
    BufferAllocationError,
    BufferBoundsError,
    DescriptorOverflowError,
    GeometryError,
    TessellationError,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_arithmetic(self) -> None:
        """Test vector addition, subtraction and scaling."""
        a = Point(1.0, 2.0)
        b = Point(3.0, 5.0)
        assert a + b == Point(4.0, 7.0)
        assert b - a == Point(2.0, 3.0)
        assert a * 2.0 == Point(2.0, 4.0)
        assert 2.0 * a == Point(2.0, 4.0)
        assert b / 2.0 == Point(1.5, 2.5)
        assert -a == Point(-1.0, -2.0)

    def test_dot_and_cross(self) -> None:
        """Test dot and cross products."""
        x_axis = Point(1.0, 0.0)
        y_axis = Point(0.0, 1.0)
        assert x_axis.dot(y_axis) == 0.0
        assert Point(2.0, 3.0).dot(Point(4.0, 5.0)) == 23.0
        assert x_axis.cross(y_axis) == 1.0
        assert y_axis.cross(x_axis) == -1.0

    def test_length(self) -> None:
        """Test vector length."""
        v = Point(3.0, 4.0)
        assert v.length == 5.0
        assert v.length_squared == 25.0

    def test_normalized(self) -> None:
        """Test unit vector computation."""
        n = Point(3.0, 4.0).normalized()
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)
        assert n.length == pytest.approx(1.0)

    def test_normalize_zero_vector(self) -> None:
        """Normalizing the zero vector raises GeometryError."""
        with pytest.raises(GeometryError):
            Point(0.0, 0.0).normalized()

    def test_angles(self) -> None:
        """Test angle_to and angle_from."""
        origin = Point(0.0, 0.0)
        up = Point(0.0, 10.0)
        assert origin.angle_to(up) == pytest.approx(math.pi / 2)
        assert up.angle_from(origin) == pytest.approx(math.pi / 2)
        assert origin.angle_from(up) == pytest.approx(-math.pi / 2)

    def test_distance_and_lerp(self) -> None:
        """Test distance and interpolation."""
        a = Point(0.0, 0.0)
        b = Point(6.0, 8.0)
        assert a.distance_to(b) == 10.0
        assert a.lerp(b, 0.5) == Point(3.0, 4.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b

    def test_equality_and_hash(self) -> None:
        """Points compare and hash by value."""
        assert Point(1.0, 2.0) == Point(1.0, 2.0)
        assert Point(1.0, 2.0) != Point(2.0, 1.0)
        assert len({Point(1.0, 2.0), Point(1.0, 2.0), Point(2.0, 1.0)}) == 2

    def test_tuple_conversion(self) -> None:
        """Test conversion to and from tuples."""
        p = Point.from_tuple((7, 9))
        assert p == Point(7.0, 9.0)
        assert isinstance(p.x, float)
        assert p.to_tuple() == (7.0, 9.0)

    def test_is_finite(self) -> None:
        """NaN coordinates are not finite."""
        assert Point(1.0, 2.0).is_finite()
        assert not Point(math.nan, 0.0).is_finite()

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestCommands:
    """Tests for path command variants."""

    def test_commands_hold_points(self) -> None:
        """Each command carries only its own points."""
        assert MoveTo(Point(1, 2)).p == Point(1, 2)
        assert LineTo(Point(3, 4)).p == Point(3, 4)
        quad = QuadCurveTo(Point(1, 1), Point(2, 0))
        assert (quad.c1, quad.p) == (Point(1, 1), Point(2, 0))
        cubic = CurveTo(Point(1, 1), Point(2, 1), Point(3, 0))
        assert (cubic.c1, cubic.c2, cubic.p) == (Point(1, 1), Point(2, 1), Point(3, 0))

    def test_commands_compare_by_value(self) -> None:
        """Commands are value types."""
        assert LineTo(Point(1, 2)) == LineTo(Point(1, 2))
        assert Close() == Close()
        assert MoveTo(Point(1, 2)) != LineTo(Point(1, 2))


class TestSegments:
    """Tests for typed segments."""

    def test_line_segment(self) -> None:
        """Line segments carry two points."""
        seg = LineSegment(Point(0, 0), Point(10, 0), 10.0)
        assert seg.kind is SegmentKind.LINE
        assert seg.control_points == (Point(0, 0), Point(10, 0))
        assert seg.end_point == Point(10, 0)

    def test_quad_segment(self) -> None:
        """Quadratic segments carry three points."""
        seg = QuadSegment(Point(0, 0), Point(5, 5), Point(10, 0), 12.0)
        assert seg.kind is SegmentKind.QUAD
        assert len(seg.control_points) == 3
        assert seg.end_point == Point(10, 0)

    def test_cubic_segment(self) -> None:
        """Cubic segments carry four points."""
        seg = CubicSegment(Point(0, 0), Point(0, 5), Point(10, 5), Point(10, 0), 15.0)
        assert seg.kind is SegmentKind.CUBIC
        assert len(seg.control_points) == 4
        assert seg.end_point == Point(10, 0)

    def test_kind_tags(self) -> None:
        """Kind values match the descriptor element tags."""
        assert int(SegmentKind.LINE) == 2
        assert int(SegmentKind.QUAD) == 3
        assert int(SegmentKind.CUBIC) == 4


def _descriptor(**overrides) -> TessellationDescriptor:
    values = {
        "kind": SegmentKind.CUBIC,
        "number_of_vertexes": 12,
        "vertex_index": 30,
        "width0": 4,
        "width1": 9,
        "control_points": (Point(0, 0), Point(0, 50), Point(100, 50), Point(100, 0)),
    }
    values.update(overrides)
    return TessellationDescriptor(**values)


class TestTessellationDescriptor:
    """Tests for TessellationDescriptor and its binary layout."""

    def test_end_index(self) -> None:
        """end_index is one past the last reserved buffer slot."""
        assert _descriptor().end_index == 42

    def test_record_size(self) -> None:
        """Packed records are exactly 48 bytes."""
        assert DESCRIPTOR_SIZE == 48
        assert len(_descriptor().pack()) == 48

    def test_pack_layout(self) -> None:
        """Fields land at their fixed offsets, little-endian."""
        data = _descriptor().pack()
        assert data[0] == 4
        assert data[1:4] == b"\x00\x00\x00"
        assert struct.unpack_from("<HHHH", data, 4) == (12, 30, 4, 9)
        assert data[12:16] == b"\x00\x00\x00\x00"
        assert struct.unpack_from("<8f", data, 16) == (0.0, 0.0, 0.0, 50.0, 100.0, 50.0, 100.0, 0.0)

    def test_pack_unused_points_are_nan(self) -> None:
        """Lines pack NaN for p2 and p3."""
        d = _descriptor(kind=SegmentKind.LINE, control_points=(Point(1, 2), Point(3, 4)))
        coords = struct.unpack_from("<8f", d.pack(), 16)
        assert coords[:4] == (1.0, 2.0, 3.0, 4.0)
        assert all(math.isnan(c) for c in coords[4:])

    def test_unpack(self) -> None:
        """Unpacking restores the descriptor."""
        d = _descriptor(kind=SegmentKind.QUAD, control_points=(Point(0, 0), Point(5, 8), Point(10, 0)))
        assert TessellationDescriptor.unpack(d.pack()) == d

    def test_unpack_wrong_size(self) -> None:
        """Truncated records are rejected."""
        with pytest.raises(TessellationError):
            TessellationDescriptor.unpack(b"\x02" * 47)

    def test_unpack_unknown_kind(self) -> None:
        """Unknown kind tags are rejected."""
        data = bytearray(_descriptor().pack())
        data[0] = 9
        with pytest.raises(TessellationError, match="Unknown segment kind"):
            TessellationDescriptor.unpack(bytes(data))

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("number_of_vertexes", 70000),
            ("vertex_index", 65536),
            ("width0", -1),
        ],
    )
    def test_pack_overflow(self, field_name: str, value: int) -> None:
        """Values outside u16 raise DescriptorOverflowError."""
        with pytest.raises(DescriptorOverflowError) as exc_info:
            _descriptor(**{field_name: value}).pack()
        assert exc_info.value.field_name == field_name

    def test_dict_serialization(self) -> None:
        """Test descriptor serialization for worker processes."""
        d = _descriptor()
        assert TessellationDescriptor.from_dict(d.to_dict()) == d


class TestDescriptorTable:
    """Tests for DescriptorTable."""

    def test_empty_table(self) -> None:
        """An empty table has no vertices."""
        table = DescriptorTable()
        assert table.is_empty()
        assert len(table) == 0
        assert table.total_vertex_count == 0
        assert table.pack() == b""

    def test_pack_and_unpack(self) -> None:
        """Tables pack to concatenated records."""
        first = _descriptor(vertex_index=0, number_of_vertexes=5)
        second = _descriptor(
            kind=SegmentKind.LINE,
            vertex_index=5,
            number_of_vertexes=0,
            control_points=(Point(100, 0), Point(0, 0)),
        )
        table = DescriptorTable(descriptors=[first, second], total_vertex_count=5)
        data = table.pack()
        assert len(data) == 96

        restored = DescriptorTable.unpack(data)
        assert restored.descriptors == [first, second]
        assert restored.total_vertex_count == 5
        assert restored.degenerate_count() == 1

    def test_unpack_partial_record(self) -> None:
        """Buffers that are not whole records are rejected."""
        with pytest.raises(TessellationError):
            DescriptorTable.unpack(b"\x00" * 50)


class TestVertexFormat:
    """Tests for vertex record encodings."""

    def test_record_sizes(self) -> None:
        """Half records are 8 bytes, single records 16."""
        assert VertexFormat.HALF.record_size == 8
        assert VertexFormat.SINGLE.record_size == 16

    def test_half_precision(self) -> None:
        """Half precision keeps small integers exact and rounds others."""
        fmt = VertexFormat.HALF
        assert fmt.unpack(fmt.pack(Vertex(80.0, -3.0, 8.0))) == Vertex(80.0, -3.0, 8.0)
        rounded = fmt.unpack(fmt.pack(Vertex(80.0 / 9.0, 0.1, 8.0)))
        assert rounded.x == pytest.approx(80.0 / 9.0, abs=0.01)
        assert rounded.y == pytest.approx(0.1, abs=0.001)

    def test_half_overflow_saturates(self) -> None:
        """Values beyond half range encode as signed infinity."""
        fmt = VertexFormat.HALF
        vertex = fmt.unpack(fmt.pack(Vertex(1e6, -70000.0, 65535.0)))
        assert vertex.x == math.inf
        assert vertex.y == -math.inf
        assert vertex.width == math.inf

    def test_half_largest_finite(self) -> None:
        """Values just below the overflow limit round to the largest half."""
        fmt = VertexFormat.HALF
        assert fmt.unpack(fmt.pack(Vertex(65504.0, 65519.0, 0.0))) == Vertex(
            65504.0, 65504.0, 0.0
        )

    def test_single_overflow_saturates(self) -> None:
        """Values beyond single range encode as signed infinity."""
        fmt = VertexFormat.SINGLE
        vertex = fmt.unpack(fmt.pack(Vertex(1e39, -1e39, 1.0)))
        assert (vertex.x, vertex.y) == (math.inf, -math.inf)

    def test_single_precision(self) -> None:
        """Single precision keeps large coordinates."""
        fmt = VertexFormat.SINGLE
        assert fmt.unpack(fmt.pack(Vertex(1e6, 0.5, 2.0))) == Vertex(1e6, 0.5, 2.0)


class TestVertexBuffer:
    """Tests for VertexBuffer."""

    def test_allocation(self) -> None:
        """Buffers are allocated at their full size."""
        buffer = VertexBuffer(10, VertexFormat.HALF)
        assert len(buffer) == 10
        assert buffer.capacity == 10
        assert len(buffer.to_bytes()) == 80
        assert buffer.written_count == 0
        assert not buffer.is_complete()

    def test_empty_buffer(self) -> None:
        """A zero-capacity buffer is complete from the start."""
        buffer = VertexBuffer(0)
        assert buffer.is_complete()
        assert list(buffer) == []

    def test_negative_capacity(self) -> None:
        """Negative capacities cannot be allocated."""
        with pytest.raises(BufferAllocationError):
            VertexBuffer(-1)

    def test_write_and_read(self) -> None:
        """Written vertices are read back at their index."""
        buffer = VertexBuffer(3, VertexFormat.SINGLE)
        buffer.write(1, Vertex(1.0, 2.0, 3.0))
        assert buffer.read(1) == Vertex(1.0, 2.0, 3.0)
        assert buffer.written_count == 1

    def test_write_range(self) -> None:
        """Packed records are written contiguously."""
        fmt = VertexFormat.SINGLE
        buffer = VertexBuffer(4, fmt)
        buffer.write_range(1, fmt.pack_many([Vertex(1, 1, 1), Vertex(2, 2, 2)]))
        assert buffer.read_range(1, 2) == [Vertex(1, 1, 1), Vertex(2, 2, 2)]

    def test_write_out_of_bounds(self) -> None:
        """Writes beyond capacity raise BufferBoundsError."""
        fmt = VertexFormat.HALF
        buffer = VertexBuffer(2, fmt)
        with pytest.raises(BufferBoundsError):
            buffer.write(2, Vertex(0, 0, 0))
        with pytest.raises(BufferBoundsError):
            buffer.write_range(1, fmt.pack_many([Vertex(0, 0, 0)] * 2))
        assert buffer.written_count == 0

    def test_write_once(self) -> None:
        """Each slot can only be written once."""
        buffer = VertexBuffer(2)
        buffer.write(0, Vertex(0, 0, 0))
        with pytest.raises(BufferBoundsError, match="already written"):
            buffer.write(0, Vertex(1, 1, 1))

    def test_write_range_partial_record(self) -> None:
        """Packed data must be whole records."""
        buffer = VertexBuffer(2, VertexFormat.HALF)
        with pytest.raises(BufferBoundsError):
            buffer.write_range(0, b"\x00" * 5)

    def test_complete_after_all_writes(self) -> None:
        """is_complete turns true when every slot is written."""
        buffer = VertexBuffer(2)
        buffer.write(0, Vertex(0, 0, 1))
        buffer.write(1, Vertex(1, 0, 1))
        assert buffer.is_complete()
        assert list(buffer) == [Vertex(0, 0, 1), Vertex(1, 0, 1)]
