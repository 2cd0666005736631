"""Path commands describing an authored path.

A path is an ordered sequence of commands. Each command type carries only
the points it needs; PathCommand is the closed union of all of them.
"""

from dataclasses import dataclass
from typing import TypeAlias

from bezierkernel.domain.point import Point


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at ``p``."""

    p: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line from the pen position to ``p``."""

    p: Point


@dataclass(frozen=True, slots=True)
class QuadCurveTo:
    """Quadratic Bezier from the pen position through control ``c1`` to ``p``."""

    c1: Point
    p: Point


@dataclass(frozen=True, slots=True)
class CurveTo:
    """Cubic Bezier from the pen position with controls ``c1``, ``c2`` to ``p``."""

    c1: Point
    c2: Point
    p: Point


@dataclass(frozen=True, slots=True)
class Close:
    """Close the current subpath with a line back to its origin."""


PathCommand: TypeAlias = MoveTo | LineTo | QuadCurveTo | CurveTo | Close
