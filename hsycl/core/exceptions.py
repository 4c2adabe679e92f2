# -*- coding: utf-8 -*-
"""
Exceptions - Error hierarchy for hsycl.

Every error raised by the library derives from ``HsyclError`` and also
from the closest built-in exception, so callers can catch either.

Author
------
hsycl contributors

License
-------
MIT License
Copyright (c) 2026 hsycl contributors
See LICENSE file for full text.

Created
-------
2026-10-15

Modified
--------
2026-10-15
"""

# Standard library
from typing import Optional, Sequence


class HsyclError(Exception):
    """Base class for all hsycl errors."""


class UnsupportedDimensionsError(HsyclError, ValueError):
    """A range or index was built with a dimensionality outside 1..3."""

    def __init__(self, dimensions: int) -> None:
        self.dimensions = dimensions
        super().__init__(
            f"Dimensions are between 1 and 3, got {dimensions}"
        )


class DimensionMismatchError(HsyclError, ValueError):
    """Two index-space objects of different dimensionality were combined.

    Parameters
    ----------
    expected : int
        Dimensionality of the left-hand operand.
    got : int
        Dimensionality of the right-hand operand.
    what : str
        Short description of the failing combination.
    """

    def __init__(self, expected: int, got: int, what: str = "operands") -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            f"Dimensionality mismatch between {what}: {expected} != {got}"
        )


class OutOfBoundsError(HsyclError, IndexError):
    """An accessor was indexed outside of its buffer.

    Parameters
    ----------
    index : Sequence[int] or int
        The offending coordinate or linear offset.
    extent : Sequence[int] or int
        The extent that was exceeded.
    """

    def __init__(self, index, extent, dimension: Optional[int] = None) -> None:
        self.index = index
        self.extent = extent
        self.dimension = dimension
        where = "" if dimension is None else f" in dimension {dimension}"
        super().__init__(
            f"Index {_fmt(index)} is out of bounds{where} for extent "
            f"{_fmt(extent)}"
        )


class ReadOnlyBufferError(HsyclError, PermissionError):
    """A write was attempted through an accessor of a read-only buffer."""


class BufferReleasedError(HsyclError, ReferenceError):
    """An accessor was used after its buffer was garbage collected."""


class DeviceSelectionError(HsyclError, RuntimeError):
    """No device could be selected."""


def _fmt(value) -> str:
    if isinstance(value, Sequence):
        return "(" + ", ".join(str(v) for v in value) + ")"
    return str(value)
