# -*- coding: utf-8 -*-
"""
hsycl - Host-side SYCL execution model.

Runs data-parallel kernels over 1-, 2- and 3-dimensional index spaces
on the host, optionally spreading the outermost dimension over a
thread pool. Kernels read and write numpy-backed buffers through
accessors.

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

__version__ = "0.1.0"

from hsycl.core.access import AccessMode, AccessTarget
from hsycl.core.config import HsyclConfig, load_config
from hsycl.core.device import (
    CommandGroup,
    Context,
    Device,
    DeviceSelector,
    Queue,
    SelectorKind,
    custom_selector,
    default_selector,
    fixed_score_selector,
    get_devices,
    gpu_selector,
    select_device,
)
from hsycl.core.exceptions import (
    BufferReleasedError,
    DeviceSelectionError,
    DimensionMismatchError,
    HsyclError,
    OutOfBoundsError,
    ReadOnlyBufferError,
    UnsupportedDimensionsError,
)
from hsycl.core.item import Group, Item
from hsycl.core.iteration import IterationEngine, iterate
from hsycl.core.kernel import (
    GLOBAL_MEM_FENCE,
    LOCAL_MEM_FENCE,
    barrier,
    kernel_lambda,
    parallel_for,
    parallel_for_work_group,
    parallel_for_work_item,
    single_task,
)
from hsycl.core.memory import Accessor, Buffer
from hsycl.core.ranges import (
    Id,
    NdRange,
    Range,
    add,
    divide_ceiling,
    linearize,
    multiply,
)

__all__: list = [
    "AccessMode", "AccessTarget",
    "HsyclConfig", "load_config",
    "CommandGroup", "Context", "Device", "DeviceSelector", "Queue",
    "SelectorKind", "custom_selector", "default_selector",
    "fixed_score_selector", "get_devices", "gpu_selector", "select_device",
    "BufferReleasedError", "DeviceSelectionError", "DimensionMismatchError",
    "HsyclError", "OutOfBoundsError", "ReadOnlyBufferError",
    "UnsupportedDimensionsError",
    "Group", "Item",
    "IterationEngine", "iterate",
    "GLOBAL_MEM_FENCE", "LOCAL_MEM_FENCE", "barrier", "kernel_lambda",
    "parallel_for", "parallel_for_work_group", "parallel_for_work_item",
    "single_task",
    "Accessor", "Buffer",
    "Id", "NdRange", "Range", "add", "divide_ceiling", "linearize",
    "multiply",
]
