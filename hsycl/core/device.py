# -*- coding: utf-8 -*-
"""
Devices and Queues - Device selection, contexts, queues, command groups.

There is a single kind of device here, the host. Selectors score
devices; the highest non-negative score wins. A selector is one of
three variants:

- ``BEST_AVAILABLE``: every device scores 0, so the first device wins,
- ``FIXED_SCORE``: every device gets the same constant score,
- ``CUSTOM``: a user function computes the score.

A ``Queue`` owns the ``IterationEngine`` that runs its kernels. Command
groups submitted to it run immediately on the calling thread.

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
import platform
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

# Third-party
import numpy as np

# hsycl internal
from hsycl.core.config import HsyclConfig, load_config
from hsycl.core.exceptions import DeviceSelectionError
from hsycl.core.iteration import IterationEngine
from hsycl.core.kernel import parallel_for, single_task
from hsycl.core.ranges import NdRange, RangeLike

logger = logging.getLogger(__name__)


class Device:
    """A compute device. Only the host is modelled.

    Parameters
    ----------
    name : str
        Human-readable device name.
    """

    def __init__(self, name: str = "host") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def is_host(self) -> bool:
        return True

    @property
    def info(self) -> Dict[str, Any]:
        """Device information.

        Returns
        -------
        Dict[str, Any]
            Name, processor, logical CPU count and numpy version.
        """
        return {
            'name': self._name,
            'is_host': True,
            'processor': platform.processor() or platform.machine(),
            'cpu_count': os.cpu_count() or 1,
            'numpy_version': np.__version__,
        }

    def __repr__(self) -> str:
        return f"Device({self._name!r})"


def get_devices() -> List[Device]:
    """All devices available to this process."""
    return [Device()]


class SelectorKind(Enum):
    """Variants of device selection."""

    BEST_AVAILABLE = "best_available"
    FIXED_SCORE = "fixed_score"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DeviceSelector:
    """Scores devices to pick one.

    Attributes
    ----------
    kind : SelectorKind
        Which scoring variant applies.
    fixed_score : int
        Score returned by ``FIXED_SCORE`` selectors.
    function : Optional[Callable[[Device], int]]
        Scoring function of ``CUSTOM`` selectors.
    """

    kind: SelectorKind = SelectorKind.BEST_AVAILABLE
    fixed_score: int = 0
    function: Optional[Callable[[Device], int]] = None

    def __post_init__(self) -> None:
        if self.kind is SelectorKind.CUSTOM and self.function is None:
            raise ValueError("A CUSTOM selector needs a scoring function")

    def score(self, device: Device) -> int:
        """Score ``device``. Negative scores mean never select it."""
        if self.kind is SelectorKind.CUSTOM:
            return int(self.function(device))
        if self.kind is SelectorKind.FIXED_SCORE:
            return self.fixed_score
        return 0

    def __call__(self, device: Device) -> int:
        return self.score(device)


def default_selector() -> DeviceSelector:
    return DeviceSelector(SelectorKind.BEST_AVAILABLE)


def gpu_selector() -> DeviceSelector:
    """Selector standing in for "best GPU". Scores every device 1."""
    return DeviceSelector(SelectorKind.FIXED_SCORE, fixed_score=1)


def fixed_score_selector(score: int) -> DeviceSelector:
    return DeviceSelector(SelectorKind.FIXED_SCORE, fixed_score=score)


def custom_selector(function: Callable[[Device], int]) -> DeviceSelector:
    return DeviceSelector(SelectorKind.CUSTOM, function=function)


def select_device(
    selector: Optional[DeviceSelector] = None,
    devices: Optional[Sequence[Device]] = None,
) -> Device:
    """Pick the device with the highest score.

    Ties go to the earliest device.

    Raises
    ------
    DeviceSelectionError
        If there are no devices or every score is negative.
    """
    selector = selector or default_selector()
    candidates = list(get_devices() if devices is None else devices)
    best: Optional[Device] = None
    best_score = -1
    for device in candidates:
        score = selector.score(device)
        logger.debug("Device %s scored %d", device.name, score)
        if score > best_score:
            best, best_score = device, score
    if best is None or best_score < 0:
        raise DeviceSelectionError(
            f"No device accepted by {selector.kind.value} selector "
            f"among {len(candidates)} candidates"
        )
    return best


class Context:
    """Groups the devices a queue works with.

    Parameters
    ----------
    target : Optional[Union[Device, DeviceSelector]]
        A device, or a selector to pick one. Defaults to the default
        selector.
    """

    def __init__(
        self,
        target: Optional[Union[Device, DeviceSelector]] = None,
    ) -> None:
        if isinstance(target, Device):
            self._device = target
        else:
            self._device = select_device(target)

    @property
    def device(self) -> Device:
        return self._device


class Queue:
    """Where command groups are submitted.

    Parameters
    ----------
    target : Optional[Union[Context, Device, DeviceSelector]]
        Context to run in, or what to build one from.
    config : Optional[HsyclConfig]
        Execution configuration. Defaults to :func:`load_config`.
    """

    def __init__(
        self,
        target: Optional[Union[Context, Device, DeviceSelector]] = None,
        config: Optional[HsyclConfig] = None,
    ) -> None:
        self._context = target if isinstance(target, Context) else Context(target)
        self._config = config or load_config()
        self._engine = IterationEngine.from_config(self._config)
        logger.debug(
            "Queue on %s with %r", self._context.device.name, self._engine
        )

    @property
    def context(self) -> Context:
        return self._context

    @property
    def device(self) -> Device:
        return self._context.device

    @property
    def config(self) -> HsyclConfig:
        return self._config

    @property
    def engine(self) -> IterationEngine:
        return self._engine

    def submit(self, command_group: Callable[[], Any]) -> 'CommandGroup':
        """Run ``command_group`` now. See :class:`CommandGroup`."""
        return CommandGroup(self, command_group)

    def parallel_for(
        self,
        space: Union[NdRange, RangeLike],
        kernel: Callable[[Any], Any],
        offset: Optional[RangeLike] = None,
    ) -> None:
        """:func:`hsycl.core.kernel.parallel_for` on this queue's engine."""
        parallel_for(space, kernel, offset=offset, engine=self._engine)

    def single_task(self, kernel: Callable[[], Any]) -> None:
        single_task(kernel)

    def wait(self) -> None:
        """Wait for submitted work. Submissions are synchronous, so returns at once."""


class CommandGroup:
    """A batch of commands submitted to a queue.

    The functor runs immediately and synchronously; the constructor
    returns after it finished. Exceptions propagate to the caller.

    Parameters
    ----------
    queue : Queue
        Queue the group is submitted to.
    functor : Callable[[], Any]
        Zero-argument callable, usually launching kernels.
    """

    def __init__(self, queue: Queue, functor: Callable[[], Any]) -> None:
        self._queue = queue
        self.result = functor()

    @property
    def queue(self) -> Queue:
        return self._queue
