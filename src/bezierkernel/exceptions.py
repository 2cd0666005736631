"""Exception hierarchy for BezierKernel."""


class BezierKernelError(Exception):
    """Base exception for all BezierKernel errors."""

    pass


class ConfigurationError(BezierKernelError):
    """Invalid tessellation parameters."""

    def __init__(self, parameter: str, reason: str) -> None:
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid value for '{parameter}': {reason}")


class GeometryError(BezierKernelError):
    """Errors in geometric calculations."""

    pass


class TessellationError(BezierKernelError):
    """Errors raised while building or filling the vertex buffer."""

    pass


class DescriptorOverflowError(TessellationError):
    """A descriptor field does not fit the fixed binary layout."""

    def __init__(self, field_name: str, value: int, limit: int) -> None:
        self.field_name = field_name
        self.value = value
        self.limit = limit
        super().__init__(
            f"Descriptor field '{field_name}' value {value} exceeds limit {limit}"
        )


class BufferAllocationError(TessellationError):
    """The vertex buffer could not be allocated."""

    def __init__(self, capacity: int, reason: str) -> None:
        self.capacity = capacity
        self.reason = reason
        super().__init__(
            f"Failed to allocate vertex buffer of {capacity} records: {reason}"
        )


class BufferBoundsError(TessellationError):
    """Access outside the vertex buffer, or a capacity mismatch."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DispatchError(BezierKernelError):
    """Parallel evaluation could not be dispatched or a work item failed."""

    def __init__(self, reason: str, descriptor_index: int | None = None) -> None:
        self.reason = reason
        self.descriptor_index = descriptor_index
        if descriptor_index is None:
            super().__init__(f"Evaluation dispatch failed: {reason}")
        else:
            super().__init__(
                f"Evaluation of descriptor {descriptor_index} failed: {reason}"
            )


class OutlineError(BezierKernelError):
    """Errors related to reading outlines from fonts."""

    pass


class OutlineLoadError(OutlineError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(OutlineError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")
