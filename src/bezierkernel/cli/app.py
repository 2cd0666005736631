"""CLI application entry point for bezierkernel.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from bezierkernel import __version__
from bezierkernel.cli.output import (
    console,
    print_descriptor_table,
    print_error,
    print_font_info,
    print_header,
    print_input_summary,
    print_settings,
    print_step,
    print_success,
    print_vertices,
)
from bezierkernel.config import (
    KernelSettings,
    LoggingConfig,
    ProcessingConfig,
    TessellationConfig,
)
from bezierkernel.core import TessellationPipeline
from bezierkernel.domain import PathCommand, VertexFormat
from bezierkernel.exceptions import BezierKernelError, OutlineLoadError
from bezierkernel.io import OutlineReader, commands_from_svg_path
from bezierkernel.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="bezierkernel",
    help="Tessellate vector paths into width-annotated vertex streams.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]BezierKernel[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def tessellate(
    input_font: Annotated[
        Path | None,
        typer.Argument(
            help="Path to a TTF/OTF font whose glyphs are tessellated",
            show_default=False,
        ),
    ] = None,
    glyphs: Annotated[
        list[str] | None,
        typer.Option(
            "--glyph",
            "-g",
            help="Glyph name to tessellate (repeatable)",
        ),
    ] = None,
    svg: Annotated[
        str | None,
        typer.Option(
            "--svg",
            help="SVG path data to tessellate instead of font glyphs",
        ),
    ] = None,
    step: Annotated[
        float,
        typer.Option(
            "--step",
            "-s",
            help="World-unit spacing between vertices",
            min=0.001,
        ),
    ] = 8.0,
    width0: Annotated[
        int,
        typer.Option(
            "--width0",
            help="Stroke width at segment start",
            min=0,
            max=65535,
        ),
    ] = 8,
    width1: Annotated[
        int,
        typer.Option(
            "--width1",
            help="Stroke width at segment end",
            min=0,
            max=65535,
        ),
    ] = 8,
    vertex_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Vertex record encoding (half|single)",
        ),
    ] = "half",
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    sequential: Annotated[
        bool,
        typer.Option(
            "--sequential",
            help="Evaluate in-process instead of in a worker pool",
        ),
    ] = False,
    show_vertices: Annotated[
        bool,
        typer.Option(
            "--show-vertices",
            help="Print every tessellated vertex",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output (descriptor table)",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Tessellate font glyphs or SVG path data into a vertex stream.

    Every segment receives floor(length / step) vertices, evaluated in
    parallel into one vertex buffer and read back in path order.

    Example:
        bezierkernel Roboto-Regular.ttf -g O -g Q --step 4

        bezierkernel --svg "M 0 0 L 80 0" --show-vertices
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if (input_font is None) == (svg is None):
        print_error(
            "Provide either a font file or --svg path data",
            details="Glyphs are selected with --glyph when a font is given.",
        )
        raise typer.Exit(code=1)

    try:
        fmt = VertexFormat(vertex_format.lower())
    except ValueError:
        print_error(
            f"Invalid format: {vertex_format}",
            details="Valid values: half, single",
        )
        raise typer.Exit(code=1)

    settings = KernelSettings(
        tessellation=TessellationConfig(
            step=step,
            width0=width0,
            width1=width1,
            vertex_format=fmt,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
            sequential=sequential,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        # Collect command streams
        if not quiet:
            print_step("Loading paths")

        paths: list[list[PathCommand]] = []
        if input_font is not None:
            paths = _load_glyph_paths(input_font, glyphs or [], quiet)
        elif svg is not None:
            try:
                paths = [commands_from_svg_path(svg)]
            except ValueError as e:
                print_error(f"Could not parse SVG path data: {e}")
                raise typer.Exit(code=1)

        if not quiet:
            print_input_summary(
                path_count=len(paths),
                command_count=sum(len(p) for p in paths),
            )
            print_settings(step, width0, width1, fmt.value)

        # Tessellate
        if not quiet:
            print_step("Tessellating")

        pipeline = TessellationPipeline(settings)
        result = pipeline.run_paths(paths)

        if verbose:
            print_descriptor_table(result.table)

        if show_vertices:
            print_vertices(result.vertices)

        if not quiet:
            stats = result.stats
            print_success(
                total_time_s=stats.duration_seconds,
                segments=stats.segment_count,
                vertices=stats.vertex_count,
                dropped=stats.dropped_count,
                degenerate=stats.degenerate_count,
                buffer_bytes=len(result.buffer.to_bytes()),
            )

    except OutlineLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except BezierKernelError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _load_glyph_paths(
    font_path: Path, glyph_names: list[str], quiet: bool
) -> list[list[PathCommand]]:
    """Load the outlines of the requested glyphs.

    Args:
        font_path: Path to font file
        glyph_names: Glyphs to load, one command stream each
        quiet: Suppress output

    Returns:
        Command streams in the order the glyphs were requested

    Raises:
        typer.Exit: If the font is missing or no glyph was requested
    """
    if not font_path.exists() or not font_path.is_file():
        print_error(
            f"Input file not found: {font_path}",
            details=f"The file '{font_path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not glyph_names:
        print_error(
            "No glyphs selected",
            details="Use --glyph NAME (repeatable) to choose glyphs to tessellate.",
        )
        raise typer.Exit(code=1)

    with OutlineReader(font_path) as reader:
        if not quiet:
            print_font_info(
                font_path=str(font_path),
                font_type=reader.format,
                glyph_count=reader.glyph_count,
                upm=reader.units_per_em,
            )
        return [reader.glyph_commands(name) for name in glyph_names]


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
