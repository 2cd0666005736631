"""Outline reader for loading glyph paths from TTF/OTF fonts.

This module provides the OutlineReader class for loading font files
and extracting glyph outlines as path command streams.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont

from bezierkernel.domain import PathCommand
from bezierkernel.exceptions import GlyphNotFoundError, OutlineLoadError
from bezierkernel.io.pen import PathCommandPen


class OutlineReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    Each glyph outline is returned as one command stream; its contours
    become subpaths separated by MoveTo commands.

    Example:
        with OutlineReader(Path("font.ttf")) as reader:
            for name, commands in reader.iter_glyph_commands():
                print(name, len(commands))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the outline reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            OutlineLoadError: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path))
        except Exception as e:
            raise OutlineLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def glyph_names(self) -> list[str]:
        """Glyph names in font order."""
        return list(self._require_font().getGlyphOrder())

    def glyph_commands(self, name: str) -> list[PathCommand]:
        """Draw one glyph into path commands.

        Composite glyphs are decomposed into their components' outlines.

        Args:
            name: Glyph name

        Returns:
            Path commands of the glyph outline (empty for blank glyphs)

        Raises:
            RuntimeError: If font has not been loaded yet
            GlyphNotFoundError: If the glyph does not exist
        """
        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)

        pen = PathCommandPen(glyph_set)
        glyph_set[name].draw(pen)
        return pen.commands

    def iter_glyph_commands(self) -> Iterator[tuple[str, list[PathCommand]]]:
        """Iterate over all glyphs as (name, commands) pairs in font order.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        for name in self.glyph_names():
            yield name, self.glyph_commands(name)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "OutlineReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
