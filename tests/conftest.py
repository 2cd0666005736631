"""Shared fixtures.

Builds a small TrueType font on the fly with fontTools' FontBuilder so the
outline tests do not depend on fonts installed on the machine.
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen


def _draw_notdef(pen):
    pen.moveTo((50, 0))
    pen.lineTo((450, 0))
    pen.lineTo((450, 700))
    pen.lineTo((50, 700))
    pen.closePath()


def _draw_square(pen):
    pen.moveTo((100, 100))
    pen.lineTo((900, 100))
    pen.lineTo((900, 900))
    pen.lineTo((100, 900))
    pen.closePath()


def _draw_o(pen):
    pen.moveTo((500, 100))
    pen.qCurveTo((900, 100), (900, 500))
    pen.qCurveTo((900, 900), (500, 900))
    pen.qCurveTo((100, 900), (100, 500))
    pen.qCurveTo((100, 100), (500, 100))
    pen.closePath()


def _draw_space(pen):
    pass


# name -> (draw function, left side bearing)
TEST_GLYPHS = {
    ".notdef": (_draw_notdef, 50),
    "square": (_draw_square, 100),
    "O": (_draw_o, 100),
    "space": (_draw_space, 0),
}


def build_test_font(path: Path) -> Path:
    """Write a four-glyph TrueType font to ``path``."""
    glyphs = {}
    for name, (draw, _) in TEST_GLYPHS.items():
        pen = TTGlyphPen(None)
        draw(pen)
        glyphs[name] = pen.glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(list(TEST_GLYPHS))
    builder.setupCharacterMap({0x20: "space", 0x4F: "O", 0x25A1: "square"})
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics(
        {name: (1000, lsb) for name, (_, lsb) in TEST_GLYPHS.items()}
    )
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "Kernel Test", "styleName": "Regular"})
    builder.setupOS2()
    builder.setupPost()
    builder.save(str(path))
    return path


@pytest.fixture
def test_font(tmp_path):
    """Path to a freshly built TrueType test font."""
    return build_test_font(tmp_path / "KernelTest-Regular.ttf")
