"""Unit tests for descriptor building.

Tests cover:
- Vertex budgets from arc length and step
- Running vertex offsets
- Width propagation and parameter validation
"""

import math

import pytest

from bezierkernel.core.descriptors import build_descriptors, vertex_count_for
from bezierkernel.core.extractor import extract_segments
from bezierkernel.domain import (
    Close,
    CubicSegment,
    CurveTo,
    LineSegment,
    LineTo,
    MoveTo,
    Point,
    QuadCurveTo,
    SegmentKind,
)
from bezierkernel.exceptions import ConfigurationError


class TestVertexCount:
    """Tests for the per-segment vertex budget."""

    @pytest.mark.parametrize(
        "length,step,expected",
        [
            (80.0, 8.0, 10),
            (79.9, 8.0, 9),
            (3.0, 8.0, 0),
            (8.0, 8.0, 1),
            (0.0, 8.0, 0),
            (100.0, 0.5, 200),
        ],
    )
    def test_floor_of_length_over_step(self, length, step, expected):
        """Count is the floor of length / step."""
        assert vertex_count_for(length, step) == expected

    @pytest.mark.parametrize("length", [math.nan, math.inf, -5.0])
    def test_invalid_lengths(self, length):
        """Lengths that are not finite and positive give no vertices."""
        assert vertex_count_for(length, 8.0) == 0


class TestBuildDescriptors:
    """Tests for descriptor table construction."""

    def test_single_line(self):
        """An 80-unit line at step 8 gets 10 vertices at offset 0."""
        segments = extract_segments([MoveTo(Point(0, 0)), LineTo(Point(80, 0))])
        table = build_descriptors(segments, width0=8, width1=8, step=8.0)

        assert len(table) == 1
        descriptor = table[0]
        assert descriptor.kind is SegmentKind.LINE
        assert descriptor.number_of_vertexes == 10
        assert descriptor.vertex_index == 0
        assert descriptor.control_points == (Point(0, 0), Point(80, 0))
        assert table.total_vertex_count == 10

    def test_short_segment_is_degenerate(self):
        """Segments shorter than a step are kept with zero vertices."""
        segments = extract_segments([MoveTo(Point(0, 0)), LineTo(Point(3, 0))])
        table = build_descriptors(segments, width0=8, width1=8, step=8.0)

        assert len(table) == 1
        assert table[0].number_of_vertexes == 0
        assert table.total_vertex_count == 0
        assert table.degenerate_count() == 1

    def test_close_offsets_after_first_segment(self):
        """The closing line starts right after the first segment's vertices."""
        segments = extract_segments(
            [MoveTo(Point(0, 0)), LineTo(Point(40, 0)), Close()]
        )
        table = build_descriptors(segments, width0=8, width1=8, step=8.0)

        assert len(table) == 2
        assert table[0].number_of_vertexes == 5
        assert table[1].vertex_index == table[0].number_of_vertexes
        assert table[1].control_points == (Point(40, 0), Point(0, 0))

    def test_running_offsets(self):
        """Each offset is the sum of all previous vertex counts."""
        segments = extract_segments(
            [
                MoveTo(Point(0, 0)),
                LineTo(Point(100, 0)),
                LineTo(Point(102, 0)),
                QuadCurveTo(Point(150, 80), Point(200, 0)),
                CurveTo(Point(200, 100), Point(100, 100), Point(100, 50)),
                Close(),
            ]
        )
        table = build_descriptors(segments, width0=4, width1=12, step=3.0)

        running = 0
        for descriptor in table:
            assert descriptor.vertex_index == running
            running += descriptor.number_of_vertexes
        assert table.total_vertex_count == running

    def test_one_descriptor_per_segment(self):
        """Descriptor order and kinds follow the segments."""
        segments = [
            LineSegment(Point(0, 0), Point(16, 0), 16.0),
            CubicSegment(Point(16, 0), Point(20, 10), Point(30, 10), Point(32, 0), 30.0),
            LineSegment(Point(32, 0), Point(33, 0), 1.0),
        ]
        table = build_descriptors(segments, width0=2, width1=6, step=4.0)

        assert [d.kind for d in table] == [
            SegmentKind.LINE,
            SegmentKind.CUBIC,
            SegmentKind.LINE,
        ]
        assert [d.number_of_vertexes for d in table] == [4, 7, 0]
        assert [d.vertex_index for d in table] == [0, 4, 11]
        assert table.total_vertex_count == 11

    def test_widths_propagate(self):
        """Every descriptor carries the invocation widths."""
        segments = extract_segments(
            [MoveTo(Point(0, 0)), LineTo(Point(50, 0)), LineTo(Point(50, 50))]
        )
        table = build_descriptors(segments, width0=3, width1=17, step=5.0)
        assert all(d.width0 == 3 and d.width1 == 17 for d in table)

    def test_empty_input(self):
        """No segments yield an empty table with zero vertices."""
        table = build_descriptors([], width0=8, width1=8, step=8.0)
        assert table.is_empty()
        assert table.total_vertex_count == 0

    def test_idempotent(self):
        """Building twice from the same segments gives identical tables."""
        segments = extract_segments(
            [MoveTo(Point(0, 0)), QuadCurveTo(Point(50, 90), Point(100, 0)), Close()]
        )
        first = build_descriptors(segments, width0=8, width1=8, step=2.0)
        second = build_descriptors(segments, width0=8, width1=8, step=2.0)
        assert first.descriptors == second.descriptors
        assert first.pack() == second.pack()

    @pytest.mark.parametrize("step", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_step(self, step):
        """Non-positive or non-finite steps are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_descriptors([], width0=8, width1=8, step=step)
        assert exc_info.value.parameter == "step"

    def test_negative_width(self):
        """Negative widths are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            build_descriptors([], width0=-1, width1=8, step=8.0)
        assert exc_info.value.parameter == "width0"
