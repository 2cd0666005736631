"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from bezierkernel.domain import DescriptorTable, Vertex

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# Rows shown before tables are truncated
MAX_TABLE_ROWS = 40


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]BezierKernel[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_input_summary(path_count: int, command_count: int) -> None:
    """Print the size of the tessellation input.

    Args:
        path_count: Number of independent command streams
        command_count: Total number of path commands
    """
    plural = "path" if path_count == 1 else "paths"
    console.print(f"  {path_count} {plural} {SYM_DOT} {command_count} commands")


def print_settings(step: float, width0: int, width1: int, vertex_format: str) -> None:
    """Print tessellation parameters."""
    console.print(
        f"  step {step:g} {SYM_DOT} widths {width0}→{width1} {SYM_DOT} {vertex_format} records"
    )


def print_descriptor_table(table: DescriptorTable) -> None:
    """Print the descriptor table.

    Args:
        table: Descriptors to show (truncated after MAX_TABLE_ROWS rows)
    """
    rich_table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    rich_table.add_column("#", justify="right")
    rich_table.add_column("kind")
    rich_table.add_column("vertices", justify="right")
    rich_table.add_column("offset", justify="right")
    rich_table.add_column("start")
    rich_table.add_column("end")

    for index, descriptor in enumerate(table.descriptors[:MAX_TABLE_ROWS]):
        start = descriptor.control_points[0]
        end = descriptor.control_points[-1]
        rich_table.add_row(
            str(index),
            descriptor.kind.name.lower(),
            str(descriptor.number_of_vertexes),
            str(descriptor.vertex_index),
            f"({start.x:.1f}, {start.y:.1f})",
            f"({end.x:.1f}, {end.y:.1f})",
        )

    console.print(rich_table)
    if len(table) > MAX_TABLE_ROWS:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(table) - MAX_TABLE_ROWS} more)")


def print_vertices(vertices: list[Vertex]) -> None:
    """Print the assembled vertex stream, one vertex per line."""
    for index, vertex in enumerate(vertices):
        console.print(f"  {index:>6}  {vertex.x:10.3f} {vertex.y:10.3f}  w={vertex.width:.2f}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    total_time_s: float,
    segments: int,
    vertices: int,
    dropped: int,
    degenerate: int,
    buffer_bytes: int,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        segments: Number of segments extracted
        vertices: Number of vertices produced
        dropped: Number of commands dropped for lack of an anchor point
        degenerate: Number of segments shorter than one step
        buffer_bytes: Size of the vertex buffer in bytes
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")
    console.print(
        f"  {segments} segments {SYM_DOT} {vertices} vertices {SYM_DOT} {buffer_bytes:,} bytes"
    )

    dropped_style = "yellow" if dropped > 0 else "green"
    console.print(
        f"  [{dropped_style}]{dropped} dropped commands[/{dropped_style}] "
        f"{SYM_DOT} {degenerate} degenerate segments"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
