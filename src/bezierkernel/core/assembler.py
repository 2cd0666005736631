"""Vertex stream assembly.

Reads the filled vertex buffer back in descriptor order. Descriptor ranges
tile the buffer in segment order, so this is a straight pass-through read;
no deduplication or smoothing is applied.
"""

from collections.abc import Iterable, Iterator

from bezierkernel.domain import TessellationDescriptor, Vertex, VertexBuffer
from bezierkernel.exceptions import BufferBoundsError


def _check_readable(buffer: VertexBuffer) -> None:
    if not buffer.is_complete():
        raise BufferBoundsError(
            f"Vertex buffer read before evaluation completed "
            f"({buffer.written_count} of {buffer.capacity} records written)"
        )


def iter_segment_vertices(
    buffer: VertexBuffer,
    descriptors: Iterable[TessellationDescriptor],
) -> Iterator[tuple[int, list[Vertex]]]:
    """Yield each descriptor's vertices in descriptor order.

    Args:
        buffer: Fully written vertex buffer
        descriptors: Descriptors in their original order

    Yields:
        (descriptor_index, vertices) pairs; zero-count descriptors yield an
        empty list

    Raises:
        BufferBoundsError: If the buffer is not fully written or the
            descriptors do not tile it contiguously
    """
    _check_readable(buffer)

    expected_index = 0
    for descriptor_index, descriptor in enumerate(descriptors):
        if descriptor.vertex_index != expected_index:
            raise BufferBoundsError(
                f"Descriptor {descriptor_index} starts at {descriptor.vertex_index}, "
                f"expected {expected_index}"
            )
        yield descriptor_index, buffer.read_range(
            descriptor.vertex_index, descriptor.number_of_vertexes
        )
        expected_index = descriptor.end_index

    if expected_index != buffer.capacity:
        raise BufferBoundsError(
            f"Descriptors cover {expected_index} of {buffer.capacity} buffer records"
        )


def assemble_vertices(
    buffer: VertexBuffer,
    descriptors: Iterable[TessellationDescriptor],
) -> list[Vertex]:
    """Flatten the vertex buffer into an ordered vertex list.

    Descriptor i's vertices precede descriptor i+1's.

    Args:
        buffer: Fully written vertex buffer
        descriptors: Descriptors in their original order

    Returns:
        All vertices in segment order
    """
    vertices: list[Vertex] = []
    for _, segment_vertices in iter_segment_vertices(buffer, descriptors):
        vertices.extend(segment_vertices)
    return vertices
