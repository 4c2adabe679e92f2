# -*- coding: utf-8 -*-
"""
Tests for hsycl.core.item - Item and Group.

Author
------
hsycl contributors

Created
-------
2026-10-15
"""

import pytest

from hsycl.core.exceptions import DimensionMismatchError
from hsycl.core.item import Group, Item
from hsycl.core.ranges import Id, NdRange, Range


# ---------------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------------

class TestItem:
    def test_starts_at_origin(self):
        item = Item(NdRange((4, 6), (2, 3)))
        assert item.get_global() == (0, 0)
        assert item.get_local() == (0, 0)
        assert item.get_group() == (0, 0)
        assert item.dimensions == 2

    def test_from_sizes(self):
        item = Item.from_sizes(Range(8), Range(4))
        assert item.get_global_range() == (8,)
        assert item.get_local_range() == (4,)
        assert item.get_group_range() == (2,)

    def test_setters_and_component_getters(self):
        item = Item(NdRange((4, 6), (2, 3)))
        item.set_global(Id(3, 5))
        item.set_local((1, 2))
        item.set_group([1, 1])
        assert item.get_global(0) == 3
        assert item.get_global(1) == 5
        assert item.get_local(1) == 2
        assert item.get_group(0) == 1
        assert isinstance(item.get_local(), Id)

    def test_setter_copies_index(self):
        item = Item(NdRange(4, 2))
        index = Id(1)
        item.set_global(index)
        index[0] = 3
        assert item.get_global() == (1,)

    def test_setter_rejects_wrong_dimensionality(self):
        item = Item(NdRange((4, 4), (2, 2)))
        with pytest.raises(DimensionMismatchError):
            item.set_global(Id(1))

    def test_offset_and_nd_range(self):
        ndr = NdRange(4, 2, 10)
        item = Item(ndr)
        assert item.get_offset() == (10,)
        assert item.get_nd_range() is ndr

    def test_linear_ids(self):
        item = Item(NdRange((4, 6), (2, 3), (1, 1)))
        item.set_global((3, 5))
        item.set_local((1, 1))
        # (3 - 1) * 6 + (5 - 1)
        assert item.get_linear_id() == 16
        assert item.get_local_linear_id() == 4

    def test_repr(self):
        assert "global=(0,)" in repr(Item(NdRange(2, 1)))


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------

class TestGroup:
    def test_index_and_ranges(self):
        ndr = NdRange((8, 9), (4, 3))
        group = Group(ndr, Id(1, 2))
        assert group.get_id() == (1, 2)
        assert group.get_id(1) == 2
        assert group.get_group_range() == (2, 3)
        assert group.get_local_range() == (4, 3)
        assert group.get_linear_id() == 5
        assert group.get_nd_range() is ndr
        assert group.dimensions == 2

    def test_rejects_wrong_dimensionality(self):
        with pytest.raises(DimensionMismatchError):
            Group(NdRange((4, 4), (2, 2)), Id(0))
