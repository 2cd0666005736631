"""Command-line interface for bezierkernel.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Tessellate glyphs from TTF/OTF fonts or raw SVG path data
- Descriptor table and vertex listings
- Verbose/quiet output modes
- Detailed error reporting
"""

from bezierkernel.cli.app import cli, main

__all__ = ["cli", "main"]
