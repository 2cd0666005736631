"""BezierKernel - Tessellate vector paths into width-annotated vertex streams.

BezierKernel turns path commands (move, line, quadratic and cubic Bezier
curves, close) into a dense polyline of vertices for GPU stroke rendering.
Each segment gets a vertex budget proportional to its arc length, segments
are evaluated independently in parallel, and the results land in a single
preallocated vertex buffer in path order.

Example:
    $ bezierkernel --svg "M 0 0 C 40 80 120 80 160 0" --step 4

This prints the descriptor table and the number of vertices produced.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
