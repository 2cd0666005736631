"""Internal parametric Bezier evaluation.

This is an internal module containing helper functions for the evaluator
and the arc-length estimator. Not intended for public use.
"""

from bezierkernel.domain import Point


def line_point(p0: Point, p1: Point, t: float) -> Point:
    """Evaluate a line at parameter t.

    Args:
        p0: Start point
        p1: End point
        t: Parameter in [0, 1]

    Returns:
        p0 + t * (p1 - p0)
    """
    return Point(p0.x + t * (p1.x - p0.x), p0.y + t * (p1.y - p0.y))


def quadratic_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic Bezier curve using De Casteljau's algorithm.

    Args:
        p0: Start point
        p1: Control point
        p2: End point
        t: Parameter in [0, 1]

    Returns:
        Point on the curve
    """
    # First level
    q0 = line_point(p0, p1, t)
    q1 = line_point(p1, p2, t)

    # Second level (point on curve)
    return line_point(q0, q1, t)


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier curve using De Casteljau's algorithm.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        t: Parameter in [0, 1]

    Returns:
        Point on the curve
    """
    # First level
    q0 = line_point(p0, p1, t)
    q1 = line_point(p1, p2, t)
    q2 = line_point(p2, p3, t)

    # Second level
    r0 = line_point(q0, q1, t)
    r1 = line_point(q1, q2, t)

    # Third level (point on curve)
    return line_point(r0, r1, t)


def bezier_point(points: tuple[Point, ...], t: float) -> Point:
    """Evaluate a line, quadratic or cubic from its control points.

    Raises:
        ValueError: If the number of control points is not 2, 3 or 4
    """
    if len(points) == 2:
        return line_point(points[0], points[1], t)
    if len(points) == 3:
        return quadratic_point(points[0], points[1], points[2], t)
    if len(points) == 4:
        return cubic_point(points[0], points[1], points[2], points[3], t)
    raise ValueError(f"Expected 2, 3 or 4 control points, got {len(points)}")


def chord_length(points: tuple[Point, ...], samples: int) -> float:
    """Sum of chord lengths over ``samples`` uniform parameter steps.

    Args:
        points: Control points of the curve
        samples: Number of chords

    Returns:
        Polyline length approximating the arc length (never longer than it)
    """
    total = 0.0
    previous = points[0]
    for i in range(1, samples + 1):
        current = bezier_point(points, i / samples)
        total += previous.distance_to(current)
        previous = current
    return total
