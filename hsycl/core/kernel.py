# -*- coding: utf-8 -*-
"""
Kernel Launch - parallel_for, single_task and hierarchical launches.

``parallel_for`` over a ``Range`` calls the kernel with an ``Id`` for
every coordinate. Over an ``NdRange`` it enumerates the work-groups
with an ``IterationEngine`` (possibly in parallel), enumerates the
work-items of each group sequentially, and calls the kernel with an
``Item`` whose global index is rebuilt as::

    global = local + local_range * group + offset

When the local range does not divide the global range, the trailing
groups still run their full local range. By default the resulting
global indices beyond ``offset + global_range`` reach the kernel
unchanged; an engine built with ``clip_partial_groups=True`` skips them.

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
import logging
from typing import Any, Callable, Optional, Union

# hsycl internal
from hsycl.core.config import load_config
from hsycl.core.exceptions import DimensionMismatchError
from hsycl.core.item import Group, Item
from hsycl.core.iteration import IterationEngine, iterate
from hsycl.core.ranges import (
    Id,
    NdRange,
    Range,
    RangeLike,
    add,
    as_range,
    multiply,
)

logger = logging.getLogger(__name__)

LOCAL_MEM_FENCE = 123
GLOBAL_MEM_FENCE = 124

_default_engine: Optional[IterationEngine] = None


def default_engine() -> IterationEngine:
    """Engine used by launches that do not pass one.

    Built from :func:`hsycl.core.config.load_config` on first use.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = IterationEngine.from_config(load_config())
        logger.debug("Default engine: %r", _default_engine)
    return _default_engine


def set_default_engine(engine: Optional[IterationEngine]) -> None:
    """Replace the default engine. None reloads it from config on next use."""
    global _default_engine
    _default_engine = engine


def kernel_lambda(name: str, kernel: Callable) -> Callable:
    """Name a kernel. Returns ``kernel`` unchanged."""
    logger.debug("Kernel '%s'", name)
    return kernel


def single_task(kernel: Callable[[], Any]) -> None:
    """Run ``kernel`` once, without an index."""
    kernel()


def parallel_for(
    space: Union[NdRange, RangeLike],
    kernel: Callable[[Any], Any],
    offset: Optional[RangeLike] = None,
    engine: Optional[IterationEngine] = None,
) -> None:
    """Run ``kernel`` over every point of an index space.

    Parameters
    ----------
    space : NdRange or RangeLike
        With a ``Range`` (or tuple/int) the kernel receives an ``Id``.
        With an ``NdRange`` it receives an ``Item``.
    kernel : Callable
        Called once per point. Under a parallel engine it is called
        concurrently from several threads and must guard any shared
        state itself.
    offset : Optional[RangeLike]
        Shift added to every ``Id`` of a plain range launch. ND-range
        launches carry their offset in the ``NdRange``.
    engine : Optional[IterationEngine]
        Defaults to :func:`default_engine`.
    """
    engine = engine or default_engine()
    if isinstance(space, NdRange):
        if offset is not None:
            raise ValueError("An NdRange launch takes its offset from the NdRange")
        engine.iterate(
            space.get_group_range(),
            lambda group: _run_work_group(
                space, group, kernel, engine.clip_partial_groups
            ),
        )
        return

    extent = as_range(space)
    if offset is None:
        engine.iterate(extent, kernel)
        return
    shift = as_range(offset, Id)
    if len(shift) != len(extent):
        raise DimensionMismatchError(len(extent), len(shift), "range and offset")
    engine.iterate(extent, lambda index: kernel(index + shift))


def parallel_for_work_group(
    nd_range: NdRange,
    kernel: Callable[[Group], Any],
    engine: Optional[IterationEngine] = None,
) -> None:
    """Run ``kernel`` once per work-group of ``nd_range``.

    The kernel typically calls :func:`parallel_for_work_item` on the
    ``Group`` it receives.
    """
    engine = engine or default_engine()
    engine.iterate(
        nd_range.get_group_range(),
        lambda index: kernel(Group(nd_range, index)),
    )


def parallel_for_work_item(
    group: Group,
    kernel: Callable[[Item], Any],
    engine: Optional[IterationEngine] = None,
) -> None:
    """Run ``kernel`` for every work-item of ``group``, sequentially."""
    engine = engine or default_engine()
    _run_work_group(
        group.get_nd_range(), group.get_id(), kernel,
        engine.clip_partial_groups,
    )


def barrier(fence: int = LOCAL_MEM_FENCE) -> None:
    """Work-group barrier. Does nothing.

    Work-items of a group run one after another on a single thread, so
    no work-item can wait for the others here. Kernels that need every
    work-item of a group to finish a phase before the next one starts
    must be split into separate launches.
    """


def _run_work_group(
    nd_range: NdRange,
    group: Id,
    kernel: Callable[[Item], Any],
    clip: bool,
) -> None:
    """Call ``kernel`` for each work-item of one work-group."""
    local_range = nd_range.get_local_range()
    offset = nd_range.get_offset()
    base = add(multiply(local_range, group), offset)
    end = add(nd_range.get_global_range(), offset)
    clip = clip and not nd_range.is_uniform()
    logger.debug("Work-group %s", group.to_tuple())

    # One item per group, owned by the thread running the group
    item = Item(nd_range)
    item.set_group(group)

    def run_item(local: Id) -> None:
        global_index = add(local, base)
        if clip and not _inside(global_index, offset, end):
            return
        item.set_local(local)
        item.set_global(global_index)
        kernel(item)

    iterate(local_range, run_item)


def _inside(index: Range, start: Range, end: Range) -> bool:
    return all(s <= i < e for i, s, e in zip(index, start, end))
