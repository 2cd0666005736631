"""Converters from fonttools drawing protocols to path commands.

fontTools pens are the authoring boundary: glyph outlines, recordings and
SVG path data are all drawn into a PathCommandPen, which records the
corresponding PathCommand values.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.recordingPen import replayRecording
from fontTools.svgLib.path import parse_path

from bezierkernel.domain import (
    Close,
    CurveTo,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadCurveTo,
)


class PathCommandPen(BasePen):
    """Pen that records drawing calls as PathCommand values.

    BasePen decomposes TrueType quadratic splines (several off-curve points)
    into single QuadCurveTo segments and super-Beziers into single CurveTo
    segments, so every recorded command maps onto one segment kind.
    Components are decomposed when a glyph set is given.

    Example:
        pen = PathCommandPen(font.getGlyphSet())
        font.getGlyphSet()["O"].draw(pen)
        commands = pen.commands
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self.commands: list[PathCommand] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(MoveTo(Point.from_tuple(pt)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.commands.append(LineTo(Point.from_tuple(pt)))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.commands.append(QuadCurveTo(Point.from_tuple(pt1), Point.from_tuple(pt2)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.commands.append(
            CurveTo(Point.from_tuple(pt1), Point.from_tuple(pt2), Point.from_tuple(pt3))
        )

    def _closePath(self) -> None:
        self.commands.append(Close())

    def _endPath(self) -> None:
        # Open subpaths end without a closing segment
        pass


def commands_from_recording(recording: list[tuple[str, tuple[Any, ...]]]) -> list[PathCommand]:
    """Convert a RecordingPen recording to path commands.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        List of path commands
    """
    pen = PathCommandPen()
    replayRecording(recording, pen)
    return pen.commands


def commands_from_svg_path(path_data: str) -> list[PathCommand]:
    """Parse SVG path data into path commands.

    Arcs are converted to cubic curves by fonttools.

    Args:
        path_data: Contents of an SVG path ``d`` attribute

    Returns:
        List of path commands

    Raises:
        ValueError: If the path data cannot be parsed
    """
    pen = PathCommandPen()
    parse_path(path_data, pen)
    return pen.commands
