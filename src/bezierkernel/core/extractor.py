"""Segment extraction from path command streams.

Walks path commands and emits typed segments with arc-length estimates.
Commands that need an anchor point (line, curve, close) but arrive before
any move are dropped rather than raised. Each drop is recorded on the
extractor and logged as a warning.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from bezierkernel.core.arclength import (
    DEFAULT_SAMPLES,
    cubic_length,
    line_length,
    quadratic_length,
)
from bezierkernel.domain import (
    Close,
    CubicSegment,
    CurveTo,
    LineSegment,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadCurveTo,
    QuadSegment,
    Segment,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DroppedCommand:
    """A command skipped because its anchor point was unset.

    Attributes:
        path_index: Index of the path (command stream) it came from
        command_index: Position of the command within that stream
        command: The dropped command
    """

    path_index: int
    command_index: int
    command: PathCommand


class SegmentExtractor:
    """Converts path commands into an ordered list of segments.

    Keeps the subpath origin and the current pen position while walking a
    command stream. Independent command streams (e.g. several authored
    shapes) are processed with fresh state and concatenated in input order.

    Example:
        extractor = SegmentExtractor()
        segments = extractor.extract([MoveTo(Point(0, 0)), LineTo(Point(80, 0))])
    """

    def __init__(self, cubic_samples: int = DEFAULT_SAMPLES, warn_on_dropped: bool = True) -> None:
        """Initialize the extractor.

        Args:
            cubic_samples: Chord count for sampled curve lengths
            warn_on_dropped: Log a warning for every dropped command
        """
        self.cubic_samples = cubic_samples
        self.warn_on_dropped = warn_on_dropped
        self._dropped: list[DroppedCommand] = []

    @property
    def dropped(self) -> list[DroppedCommand]:
        """Commands dropped during the last extract call."""
        return list(self._dropped)

    def extract(self, commands: Iterable[PathCommand]) -> list[Segment]:
        """Extract segments from a single command stream.

        Args:
            commands: Ordered path commands

        Returns:
            Segments in command order
        """
        self._dropped = []
        return self._extract_path(0, commands)

    def extract_paths(self, paths: Iterable[Iterable[PathCommand]]) -> list[Segment]:
        """Extract segments from several independent command streams.

        Args:
            paths: Command streams, each starting with fresh pen state

        Returns:
            Concatenated segments in input order
        """
        self._dropped = []
        segments: list[Segment] = []
        for path_index, commands in enumerate(paths):
            segments.extend(self._extract_path(path_index, commands))
        return segments

    def _extract_path(self, path_index: int, commands: Iterable[PathCommand]) -> list[Segment]:
        origin: Point | None = None
        last_point: Point | None = None
        segments: list[Segment] = []

        for command_index, command in enumerate(commands):
            if isinstance(command, MoveTo):
                origin = command.p
                last_point = command.p
                continue

            if isinstance(command, Close):
                if last_point is None or origin is None:
                    self._drop(path_index, command_index, command)
                    continue
                segments.append(
                    LineSegment(last_point, origin, line_length(last_point, origin))
                )
                last_point = None
                origin = None
                continue

            if last_point is None:
                self._drop(path_index, command_index, command)
                continue

            if isinstance(command, LineTo):
                segments.append(
                    LineSegment(last_point, command.p, line_length(last_point, command.p))
                )
            elif isinstance(command, QuadCurveTo):
                length = quadratic_length(last_point, command.c1, command.p, self.cubic_samples)
                segments.append(QuadSegment(last_point, command.c1, command.p, length))
            elif isinstance(command, CurveTo):
                length = cubic_length(
                    last_point, command.c1, command.c2, command.p, self.cubic_samples
                )
                segments.append(
                    CubicSegment(last_point, command.c1, command.c2, command.p, length)
                )
            else:
                raise TypeError(f"Unsupported path command: {command!r}")

            last_point = command.p

        return segments

    def _drop(self, path_index: int, command_index: int, command: PathCommand) -> None:
        self._dropped.append(DroppedCommand(path_index, command_index, command))
        if self.warn_on_dropped:
            logger.warning(
                "Path command dropped",
                reason="no anchor point",
                path_index=path_index,
                command_index=command_index,
                command=type(command).__name__,
            )


def extract_segments(
    commands: Sequence[PathCommand],
    cubic_samples: int = DEFAULT_SAMPLES,
) -> list[Segment]:
    """Extract segments from a single command stream.

    Convenience wrapper around SegmentExtractor with warnings enabled.

    Args:
        commands: Ordered path commands
        cubic_samples: Chord count for sampled curve lengths

    Returns:
        Segments in command order
    """
    return SegmentExtractor(cubic_samples=cubic_samples).extract(commands)
