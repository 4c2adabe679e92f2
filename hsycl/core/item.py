# -*- coding: utf-8 -*-
"""
Work-Items - Coordinates handed to kernels launched over an NdRange.

An ``Item`` carries the global and local index of one work-item, plus
the index of the work-group it belongs to and the ``NdRange`` it was
launched over. The scheduler fills the indices in through the setters
before each kernel invocation.

A ``Group`` is what a hierarchical kernel receives: the index of one
work-group within the NdRange.

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
from typing import Optional

# hsycl internal
from hsycl.core.exceptions import DimensionMismatchError
from hsycl.core.ranges import Id, NdRange, Range, RangeLike, as_range, linearize


class Item:
    """One work-item of an ND-range launch.

    Parameters
    ----------
    nd_range : NdRange
        The launch configuration this item belongs to.

    Notes
    -----
    The global index includes the ND-range offset.
    """

    def __init__(self, nd_range: NdRange) -> None:
        self._nd_range = nd_range
        dims = nd_range.dimensions
        self._global_index = Id.zeros(dims)
        self._local_index = Id.zeros(dims)
        self._group_index = Id.zeros(dims)

    @classmethod
    def from_sizes(
        cls,
        global_size: RangeLike,
        local_size: RangeLike,
    ) -> 'Item':
        """Build an item for a fresh ``NdRange(global_size, local_size)``."""
        return cls(NdRange(global_size, local_size))

    @property
    def dimensions(self) -> int:
        return self._nd_range.dimensions

    def get_global(self, dimension: Optional[int] = None):
        """Global index, or one of its components if ``dimension`` is given."""
        if dimension is None:
            return self._global_index
        return self._global_index[dimension]

    def get_local(self, dimension: Optional[int] = None):
        """Local index, or one of its components if ``dimension`` is given."""
        if dimension is None:
            return self._local_index
        return self._local_index[dimension]

    def get_group(self, dimension: Optional[int] = None):
        """Work-group index, or one of its components."""
        if dimension is None:
            return self._group_index
        return self._group_index[dimension]

    def set_global(self, index: RangeLike) -> None:
        self._global_index = self._checked(index)

    def set_local(self, index: RangeLike) -> None:
        self._local_index = self._checked(index)

    def set_group(self, index: RangeLike) -> None:
        self._group_index = self._checked(index)

    def get_global_range(self) -> Range:
        return self._nd_range.get_global_range()

    def get_local_range(self) -> Range:
        return self._nd_range.get_local_range()

    def get_group_range(self) -> Range:
        return self._nd_range.get_group_range()

    def get_offset(self) -> Id:
        return self._nd_range.get_offset()

    def get_nd_range(self) -> NdRange:
        return self._nd_range

    def get_linear_id(self) -> int:
        """Row-major position of the global index inside the global range.

        The offset is subtracted first. Work-items of a trailing partial
        work-group map past ``get_global_range().size()``.
        """
        relative = [
            g - o for g, o in zip(self._global_index, self.get_offset())
        ]
        return linearize(relative, self.get_global_range())

    def get_local_linear_id(self) -> int:
        return linearize(self._local_index, self.get_local_range())

    def _checked(self, index: RangeLike) -> Id:
        value = Id(*as_range(index))
        if len(value) != self.dimensions:
            raise DimensionMismatchError(
                self.dimensions, len(value), "item and index"
            )
        return value

    def __repr__(self) -> str:
        return (
            f"Item(global={self._global_index.to_tuple()}, "
            f"local={self._local_index.to_tuple()}, "
            f"group={self._group_index.to_tuple()})"
        )


class Group:
    """One work-group of an ND-range launch.

    Parameters
    ----------
    nd_range : NdRange
        The launch configuration.
    index : Id
        Index of this group within ``nd_range.get_group_range()``.
    """

    def __init__(self, nd_range: NdRange, index: RangeLike) -> None:
        self._nd_range = nd_range
        self._index = Id(*as_range(index))
        if len(self._index) != nd_range.dimensions:
            raise DimensionMismatchError(
                nd_range.dimensions, len(self._index), "group and index"
            )

    @property
    def dimensions(self) -> int:
        return self._nd_range.dimensions

    def get_id(self, dimension: Optional[int] = None):
        if dimension is None:
            return self._index
        return self._index[dimension]

    def get_linear_id(self) -> int:
        return linearize(self._index, self.get_group_range())

    def get_group_range(self) -> Range:
        return self._nd_range.get_group_range()

    def get_local_range(self) -> Range:
        return self._nd_range.get_local_range()

    def get_nd_range(self) -> NdRange:
        return self._nd_range

    def __repr__(self) -> str:
        return f"Group({self._index.to_tuple()})"
