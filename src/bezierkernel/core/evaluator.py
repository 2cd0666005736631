"""Parallel curve evaluation into the shared vertex buffer.

Each descriptor is an independent unit of work: it is sampled at its own
vertex count and written into its own reserved range of the vertex buffer.
Ranges are disjoint by construction, so no locking is needed; the only
synchronization point is the join after all work items complete.

Key components:
- evaluate: Pure reference evaluation of one descriptor
- evaluate_packed: Top-level picklable function for parallel execution
- evaluate_into: Evaluate one descriptor straight into a buffer
- EvaluationContext: Caller-owned worker pool with explicit lifecycle
"""

import time
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from concurrent.futures.process import BrokenProcessPool
from typing import Any

import structlog

from bezierkernel.core._bezier import bezier_point
from bezierkernel.domain import (
    DescriptorTable,
    TessellationDescriptor,
    Vertex,
    VertexBuffer,
    VertexFormat,
)
from bezierkernel.exceptions import BufferBoundsError, DispatchError

logger = structlog.get_logger(__name__)


def parameter_at(index: int, count: int) -> float:
    """Curve parameter for the vertex at ``index`` out of ``count``.

    Vertices are spread evenly over [0, 1] including both ends; a single
    vertex sits at t=0.
    """
    if count <= 1:
        return 0.0
    return index / (count - 1)


def evaluate(descriptor: TessellationDescriptor) -> list[Vertex]:
    """Sample one descriptor's curve.

    Args:
        descriptor: Descriptor to evaluate

    Returns:
        number_of_vertexes vertices in parameter order, with widths linearly
        interpolated from width0 to width1. Empty for zero-count descriptors.
    """
    count = descriptor.number_of_vertexes
    if count <= 0:
        return []

    points = descriptor.control_points
    width0 = float(descriptor.width0)
    width1 = float(descriptor.width1)

    vertices: list[Vertex] = []
    for index in range(count):
        t = parameter_at(index, count)
        point = bezier_point(points, t)
        vertices.append(Vertex(point.x, point.y, width0 + (width1 - width0) * t))
    return vertices


def evaluate_packed(descriptor_dict: dict[str, Any], vertex_format: str) -> bytes:
    """Evaluate a serialized descriptor and return encoded vertex records.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        descriptor_dict: Serialized descriptor (from TessellationDescriptor.to_dict())
        vertex_format: VertexFormat value of the target buffer

    Returns:
        Concatenated records for the descriptor's vertex range
    """
    descriptor = TessellationDescriptor.from_dict(descriptor_dict)
    return VertexFormat(vertex_format).pack_many(evaluate(descriptor))


def evaluate_into(descriptor: TessellationDescriptor, buffer: VertexBuffer) -> None:
    """Evaluate one descriptor and write its vertices into ``buffer``.

    Zero-count descriptors return without touching the buffer.

    Raises:
        BufferBoundsError: If the descriptor range lies outside the buffer
    """
    if descriptor.number_of_vertexes <= 0:
        return
    packed = buffer.vertex_format.pack_many(evaluate(descriptor))
    buffer.write_range(descriptor.vertex_index, packed)


class EvaluationContext:
    """Execution context for descriptor evaluation.

    Owns the worker pool that evaluates descriptors. A context is created
    once, reused across any number of dispatches, and released explicitly
    with close() (or by using it as a context manager).

    With ``sequential=True`` descriptors are evaluated in-process with the
    same per-descriptor function, which is useful for testing and for small
    inputs where process start-up dominates.

    Example:
        with EvaluationContext(max_workers=4) as context:
            buffer = VertexBuffer(table.total_vertex_count)
            context.dispatch(table, buffer)
    """

    def __init__(self, max_workers: int | None = None, sequential: bool = False) -> None:
        """Initialize the context.

        Args:
            max_workers: Maximum worker processes (None = auto-detect)
            sequential: Evaluate in the calling process instead of a pool
        """
        self.max_workers = max_workers
        self.sequential = sequential
        self._executor: ProcessPoolExecutor | None = None
        self._closed = False

        if not sequential:
            self._executor = ProcessPoolExecutor(max_workers=max_workers)

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(self, table: DescriptorTable, buffer: VertexBuffer) -> int:
        """Evaluate every non-empty descriptor into its buffer range.

        Returns only after every work item has completed.

        Args:
            table: Descriptors to evaluate
            buffer: Preallocated buffer of exactly table.total_vertex_count records

        Returns:
            Number of work items dispatched

        Raises:
            BufferBoundsError: If the buffer capacity does not match the table
            DispatchError: If the context was released, the pool is unusable,
                or a work item failed
        """
        if self._closed:
            raise DispatchError("evaluation context has been released")
        if buffer.capacity != table.total_vertex_count:
            raise BufferBoundsError(
                f"Buffer capacity {buffer.capacity} does not match "
                f"total vertex count {table.total_vertex_count}"
            )

        work = [
            (index, descriptor)
            for index, descriptor in enumerate(table)
            if descriptor.number_of_vertexes > 0
        ]

        start_time = time.time()
        logger.info(
            "Starting evaluation",
            work_items=len(work),
            vertices=table.total_vertex_count,
            sequential=self._executor is None,
            max_workers=self.max_workers,
        )

        if self._executor is None:
            self._dispatch_sequential(work, buffer)
        else:
            self._dispatch_parallel(self._executor, work, buffer)

        logger.info(
            "Evaluation complete",
            work_items=len(work),
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return len(work)

    def _dispatch_sequential(
        self,
        work: list[tuple[int, TessellationDescriptor]],
        buffer: VertexBuffer,
    ) -> None:
        fmt = buffer.vertex_format
        for index, descriptor in work:
            try:
                packed = fmt.pack_many(evaluate(descriptor))
            except Exception as e:
                raise DispatchError(str(e), index) from e
            buffer.write_range(descriptor.vertex_index, packed)

    def _dispatch_parallel(
        self,
        executor: ProcessPoolExecutor,
        work: list[tuple[int, TessellationDescriptor]],
        buffer: VertexBuffer,
    ) -> None:
        fmt_value = buffer.vertex_format.value
        pending_futures: dict[Future[bytes], tuple[int, TessellationDescriptor]] = {}

        try:
            for index, descriptor in work:
                future = executor.submit(evaluate_packed, descriptor.to_dict(), fmt_value)
                pending_futures[future] = (index, descriptor)
        except (BrokenProcessPool, RuntimeError) as e:
            for f in pending_futures:
                f.cancel()
            raise DispatchError(f"could not submit work: {e}") from e

        try:
            for future in as_completed(pending_futures):
                index, descriptor = pending_futures.pop(future)
                try:
                    packed = future.result()
                except BrokenProcessPool as e:
                    raise DispatchError("worker pool terminated abruptly", index) from e
                except Exception as e:
                    raise DispatchError(str(e), index) from e

                buffer.write_range(descriptor.vertex_index, packed)
        except BaseException:
            cancelled_count = 0
            for f in pending_futures:
                if f.cancel():
                    cancelled_count += 1
            logger.error(
                "Evaluation aborted",
                pending=len(pending_futures),
                cancelled=cancelled_count,
            )
            raise

    def close(self) -> None:
        """Release the worker pool. Further dispatches raise DispatchError."""
        if self._closed:
            return
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def __enter__(self) -> "EvaluationContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
