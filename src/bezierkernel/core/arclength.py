"""Arc-length estimation for path segments.

Lengths only budget vertex density, so estimates need to be close (within
a few percent) and deterministic, not exact:

- Lines: exact Euclidean distance
- Quadratic curves: closed-form integral of the derivative magnitude,
  falling back to chord summation when the closed form is ill-conditioned
- Cubic curves: chord-length summation over a fixed number of steps

All functions are pure, stateless, and safe to use from worker processes.
"""

import math

from bezierkernel.core._bezier import chord_length
from bezierkernel.domain import Point, SegmentKind

DEFAULT_SAMPLES = 16

# Below this the closed-form quadratic length loses precision
_CONDITION_EPSILON = 1e-9


def line_length(p0: Point, p1: Point) -> float:
    """Exact length of a straight segment.

    Examples:
        >>> line_length(Point(0.0, 0.0), Point(3.0, 4.0))
        5.0
    """
    return p0.distance_to(p1)


def quadratic_length(
    p0: Point, p1: Point, p2: Point, samples: int = DEFAULT_SAMPLES
) -> float:
    """Arc length of a quadratic Bezier curve.

    With B'(t) = 2at + b where a = p0 - 2p1 + p2 and b = 2(p1 - p0), the
    length is the integral over [0, 1] of sqrt(A t^2 + B t + C), which has a
    closed form. Straight control polygons (a = 0), coincident start and
    control points, and collinear polygons that fold back on themselves make
    the logarithm term degenerate; those fall back to chord summation.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        samples: Chord count for the fallback

    Returns:
        Arc length in world units

    Examples:
        >>> quadratic_length(Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0))
        10.0
    """
    a = p0 - p1 * 2.0 + p2
    b = (p1 - p0) * 2.0

    big_a = 4.0 * a.dot(a)
    big_b = 4.0 * a.dot(b)
    big_c = b.dot(b)

    if big_a < _CONDITION_EPSILON:
        # Control point is the chord midpoint: constant speed |b|
        return b.length

    s_abc = 2.0 * math.sqrt(max(big_a + big_b + big_c, 0.0))
    a_2 = math.sqrt(big_a)
    a_32 = 2.0 * big_a * a_2
    c_2 = 2.0 * math.sqrt(big_c)
    b_a = big_b / a_2

    denominator = b_a + c_2
    numerator = 2.0 * a_2 + b_a + s_abc
    if denominator <= _CONDITION_EPSILON * a_2 or numerator <= 0.0:
        return chord_length((p0, p1, p2), samples)

    length = (
        a_32 * s_abc
        + a_2 * big_b * (s_abc - c_2)
        + (4.0 * big_c * big_a - big_b * big_b) * math.log(numerator / denominator)
    ) / (4.0 * a_32)

    if not math.isfinite(length) or length < 0.0:
        return chord_length((p0, p1, p2), samples)
    return length


def cubic_length(
    p0: Point, p1: Point, p2: Point, p3: Point, samples: int = DEFAULT_SAMPLES
) -> float:
    """Approximate arc length of a cubic Bezier curve.

    Sums the chords between ``samples + 1`` points at uniform parameter
    steps. The estimate undershoots slightly for strongly curved segments.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        samples: Number of chords (8-16 is adequate for vertex budgeting)

    Returns:
        Arc length estimate in world units
    """
    return chord_length((p0, p1, p2, p3), samples)


def segment_length(
    kind: SegmentKind, points: tuple[Point, ...], samples: int = DEFAULT_SAMPLES
) -> float:
    """Dispatch to the length estimator for a segment kind.

    Args:
        kind: Segment kind
        points: Control points for that kind
        samples: Chord count for sampled estimates

    Returns:
        Arc length estimate in world units
    """
    if kind is SegmentKind.LINE:
        return line_length(points[0], points[1])
    if kind is SegmentKind.QUAD:
        return quadratic_length(points[0], points[1], points[2], samples)
    return cubic_length(points[0], points[1], points[2], points[3], samples)
