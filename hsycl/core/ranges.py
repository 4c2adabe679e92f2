# -*- coding: utf-8 -*-
"""
Index Space - Ranges, ids and ND-ranges describing kernel index spaces.

A ``Range`` holds one extent per dimension and an ``Id`` holds one
coordinate per dimension. Both have a fixed dimensionality between 1
and 3 and store signed integers so that offsets can be negative. The
elementwise ``add``, ``multiply`` and ``divide_ceiling`` operations are
what the work-group scheduler uses to rebuild global indices.

``NdRange`` couples a global range with a per-group local range and an
offset, and derives the number of work-groups in each dimension.

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
from collections.abc import Iterable
from typing import Iterator, List, Optional, Tuple, Type, Union

# hsycl internal
from hsycl.core.exceptions import (
    DimensionMismatchError,
    UnsupportedDimensionsError,
)

MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 3


def _check_dimensions(dimensions: int) -> int:
    if not MIN_DIMENSIONS <= dimensions <= MAX_DIMENSIONS:
        raise UnsupportedDimensionsError(dimensions)
    return dimensions


class Range:
    """A multi-dimensional extent.

    Parameters
    ----------
    *values : int
        One extent per dimension, 1 to 3 values. Any integer-like value
        (including numpy integers) is accepted and stored as ``int``.

    Examples
    --------
    >>> Range(2, 3)
    Range(2, 3)
    >>> Range.zeros(3)
    Range(0, 0, 0)
    """

    __slots__ = ('_values',)

    def __init__(self, *values: int) -> None:
        _check_dimensions(len(values))
        self._values: List[int] = [int(v) for v in values]

    @classmethod
    def zeros(cls, dimensions: int = 1) -> 'Range':
        """Create a range of ``dimensions`` zero components."""
        _check_dimensions(dimensions)
        return cls(*([0] * dimensions))

    @property
    def dimensions(self) -> int:
        """Number of dimensions."""
        return len(self._values)

    def get(self, index: int) -> int:
        """Return the component of dimension ``index``."""
        return self._values[index]

    def size(self) -> int:
        """Product of all components."""
        total = 1
        for v in self._values:
            total *= v
        return total

    def to_tuple(self) -> Tuple[int, ...]:
        return tuple(self._values)

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._values[index] = int(value)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Range):
            return self._values == other._values
        if isinstance(other, tuple):
            return tuple(self._values) == other
        return NotImplemented

    # Mutable (used as an iteration accumulator), so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: 'Range') -> 'Range':
        return add(self, other)

    def __mul__(self, other: 'Range') -> 'Range':
        return multiply(self, other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(str(v) for v in self._values)})"


class Id(Range):
    """A multi-dimensional coordinate, e.g. the index of a work-item."""

    __slots__ = ()


RangeLike = Union[Range, Tuple[int, ...], List[int], int]


def as_range(value: RangeLike, cls: Type[Range] = Range) -> Range:
    """Coerce ``value`` into a ``Range`` (or ``Id``).

    Parameters
    ----------
    value : Range, tuple, list or int
        An existing range, a sequence of extents, or a single int for a
        1-D range.
    cls : Type[Range]
        ``Range`` or ``Id``.

    Returns
    -------
    Range
        ``value`` itself if it is already an instance of ``cls``,
        otherwise a new instance.
    """
    if isinstance(value, cls):
        return value
    if isinstance(value, Range):
        return cls(*value)
    if isinstance(value, Iterable):
        return cls(*value)
    return cls(value)


def _check_same(a: Range, b: Range, what: str) -> None:
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b), what)


def _result_type(a: Range, b: Range) -> Type[Range]:
    return Id if isinstance(a, Id) or isinstance(b, Id) else Range


def divide_ceiling(dividend: Range, divisor: Range) -> Range:
    """Elementwise division rounded up.

    Used to compute how many work-groups cover a global range. Only
    meaningful for positive components.
    """
    _check_same(dividend, divisor, "dividend and divisor")
    return _result_type(dividend, divisor)(*(
        (a + b - 1) // b for a, b in zip(dividend, divisor)
    ))


def multiply(a: Range, b: Range) -> Range:
    """Elementwise product."""
    _check_same(a, b, "factors")
    return _result_type(a, b)(*(x * y for x, y in zip(a, b)))


def add(a: Range, b: Range) -> Range:
    """Elementwise sum."""
    _check_same(a, b, "terms")
    return _result_type(a, b)(*(x + y for x, y in zip(a, b)))


def linearize(index: Iterable[int], extent: Range) -> int:
    """Row-major linear offset of ``index`` inside ``extent``.

    The last dimension varies fastest, which matches both the iteration
    order of the engine and numpy's C order.
    """
    coords = tuple(index)
    if len(coords) != len(extent):
        raise DimensionMismatchError(len(extent), len(coords), "index and extent")
    offset = 0
    for coord, size in zip(coords, extent):
        offset = offset * size + coord
    return offset


class NdRange:
    """A global index space split into work-groups.

    Parameters
    ----------
    global_size : RangeLike
        Extent of the whole index space.
    local_size : RangeLike
        Extent of one work-group.
    offset : Optional[RangeLike]
        Added to every global index. Defaults to all zeros.

    Raises
    ------
    DimensionMismatchError
        If the three components differ in dimensionality.

    Notes
    -----
    The local size does not have to divide the global size. The group
    count is rounded up, and the trailing groups then reach past the
    global range. See :func:`hsycl.core.kernel.parallel_for` for how
    those extra work-items are handled.
    """

    def __init__(
        self,
        global_size: RangeLike,
        local_size: RangeLike,
        offset: Optional[RangeLike] = None,
    ) -> None:
        self._global_range = Range(*as_range(global_size))
        self._local_range = Range(*as_range(local_size))
        _check_same(self._global_range, self._local_range,
                    "global and local range")
        if offset is None:
            self._offset = Id.zeros(len(self._global_range))
        else:
            self._offset = Id(*as_range(offset))
            _check_same(self._global_range, self._offset,
                        "global range and offset")

    @property
    def dimensions(self) -> int:
        return len(self._global_range)

    def get_global_range(self) -> Range:
        return self._global_range

    def get_local_range(self) -> Range:
        return self._local_range

    def get_offset(self) -> Id:
        return self._offset

    def get_group_range(self) -> Range:
        """Number of work-groups needed to cover the global range."""
        return divide_ceiling(self._global_range, self._local_range)

    def is_uniform(self) -> bool:
        """Whether the local range evenly divides the global range."""
        return all(
            g % l == 0 for g, l in zip(self._global_range, self._local_range)
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NdRange):
            return (
                self._global_range == other._global_range
                and self._local_range == other._local_range
                and self._offset == other._offset
            )
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"NdRange(global={self._global_range.to_tuple()}, "
            f"local={self._local_range.to_tuple()}, "
            f"offset={self._offset.to_tuple()})"
        )
