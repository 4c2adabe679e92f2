# -*- coding: utf-8 -*-
"""
Iteration Engine - Enumerate every coordinate of a multi-dimensional box.

``iterate`` walks ``[0, extent)`` one dimension per recursion level,
leading dimension outermost, and calls the callback with an ``Id`` once
all dimensions are assigned. ``IterationEngine`` wraps it and, when
configured for parallel execution, splits the outermost dimension into
contiguous chunks that run on a thread pool. Each chunk owns its own
coordinate accumulator and recurses sequentially through the remaining
dimensions.

The parallel call is fork-join: it returns once every chunk finished.
The engine adds no locking around the callback.

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
import os
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence

# Third-party
import numpy as np

# hsycl internal
from hsycl.core.config import HsyclConfig
from hsycl.core.ranges import Id, Range, RangeLike, as_range

logger = logging.getLogger(__name__)

IdCallback = Callable[[Id], None]


def _recurse(
    extent: Range,
    dimension: int,
    index: List[int],
    callback: IdCallback,
) -> None:
    """Assign ``index[dimension:]`` in turn, then call ``callback``."""
    if dimension == len(extent):
        callback(Id(*index))
        return
    for value in range(extent[dimension]):
        index[dimension] = value
        _recurse(extent, dimension + 1, index, callback)


def iterate(extent: RangeLike, callback: IdCallback) -> None:
    """Sequentially visit every coordinate in ``[0, extent)``.

    Coordinates are produced in row-major order (the last dimension
    varies fastest). A non-positive extent in any dimension produces no
    calls.

    Parameters
    ----------
    extent : RangeLike
        Size of the box to enumerate.
    callback : Callable[[Id], None]
        Called once per coordinate with a fresh ``Id``.
    """
    extent = as_range(extent)
    _recurse(extent, 0, [0] * len(extent), callback)


def _iterate_chunk(
    extent: Range,
    outer_values: Sequence[int],
    callback: IdCallback,
) -> None:
    # Accumulator owned by this task only
    index = [0] * len(extent)
    for value in outer_values:
        index[0] = int(value)
        _recurse(extent, 1, index, callback)


class IterationEngine:
    """Enumerates index spaces, sequentially or on a thread pool.

    Parameters
    ----------
    parallel : bool
        If True, distribute the outermost dimension across worker
        threads. If False, run everything on the calling thread.
    max_workers : Optional[int]
        Number of worker threads. Defaults to the CPU count.
    clip_partial_groups : bool
        If True, ND-range launches skip work-items whose global index
        falls outside the global range. If False (default) they are
        passed to the kernel.
    """

    def __init__(
        self,
        parallel: bool = False,
        max_workers: Optional[int] = None,
        clip_partial_groups: bool = False,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._parallel = parallel
        self._max_workers = max_workers or os.cpu_count() or 1
        self._clip_partial_groups = clip_partial_groups

    @classmethod
    def from_config(cls, config: HsyclConfig) -> 'IterationEngine':
        """Build an engine from an ``HsyclConfig``."""
        return cls(
            parallel=config.parallel,
            max_workers=config.max_workers,
            clip_partial_groups=config.clip_partial_groups,
        )

    @property
    def parallel(self) -> bool:
        return self._parallel

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def clip_partial_groups(self) -> bool:
        return self._clip_partial_groups

    def iterate(self, extent: RangeLike, callback: IdCallback) -> None:
        """Visit every coordinate in ``[0, extent)`` exactly once.

        In parallel mode the callback may run concurrently on several
        threads, each with distinct coordinates. Order is only
        guaranteed within one worker's chunk.

        Raises
        ------
        Exception
            The first exception raised by the callback (in chunk order)
            once every worker has stopped.
        """
        extent = as_range(extent)
        if not self._parallel or extent[0] <= 1 or self._max_workers == 1:
            iterate(extent, callback)
            return

        n_workers = min(self._max_workers, extent[0])
        chunks = [
            c for c in np.array_split(np.arange(extent[0]), n_workers)
            if len(c)
        ]
        logger.debug(
            "Distributing %d outer iterations of %s over %d workers",
            extent[0], extent.to_tuple(), len(chunks),
        )
        with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
            futures = [
                executor.submit(_iterate_chunk, extent, chunk.tolist(), callback)
                for chunk in chunks
            ]
            wait(futures)
        for future in futures:
            error = future.exception()
            if error is not None:
                raise error

    def __repr__(self) -> str:
        return (
            f"IterationEngine(parallel={self._parallel}, "
            f"max_workers={self._max_workers}, "
            f"clip_partial_groups={self._clip_partial_groups})"
        )
