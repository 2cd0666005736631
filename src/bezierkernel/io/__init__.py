"""Path input layer for bezierkernel.

This module turns outlines from the vector-geometry side (fonttools) into
path command streams. It provides a clean abstraction layer between
fonttools and the domain models.

Key responsibilities:
- Record fonttools pen drawing calls as path commands
- Replay RecordingPen recordings
- Parse SVG path data
- Load TTF/OTF fonts and draw glyph outlines

Key classes:
- PathCommandPen: fonttools pen producing PathCommand values
- OutlineReader: Load fonts and extract glyph outlines
"""

from bezierkernel.io.pen import (
    PathCommandPen,
    commands_from_recording,
    commands_from_svg_path,
)
from bezierkernel.io.reader import OutlineReader

__all__ = [
    "OutlineReader",
    "PathCommandPen",
    "commands_from_recording",
    "commands_from_svg_path",
]
