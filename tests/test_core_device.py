# -*- coding: utf-8 -*-
"""
Tests for hsycl.core.device - devices, selectors, contexts, queues and
command groups.

Author
------
hsycl contributors

Created
-------
2026-10-15
"""

from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from hsycl.core import device as device_module
from hsycl.core.config import HsyclConfig
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
from hsycl.core.exceptions import DeviceSelectionError
from hsycl.core.memory import Buffer
from hsycl.core.ranges import NdRange, Range


# ---------------------------------------------------------------------------
# Device
# ---------------------------------------------------------------------------

class TestDevice:
    def test_host_device(self):
        dev = Device()
        assert dev.name == "host"
        assert dev.is_host() is True

    def test_info(self):
        info = Device("cpu0").info
        assert info['name'] == "cpu0"
        assert info['is_host'] is True
        assert info['cpu_count'] >= 1
        assert info['numpy_version'] == np.__version__

    def test_get_devices(self):
        devices = get_devices()
        assert len(devices) == 1
        assert devices[0].is_host()


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

class TestSelectors:
    def test_default_scores_zero(self):
        sel = default_selector()
        assert sel.kind is SelectorKind.BEST_AVAILABLE
        assert sel(Device()) == 0

    def test_gpu_selector_fixed_score(self):
        sel = gpu_selector()
        assert sel.kind is SelectorKind.FIXED_SCORE
        assert sel.score(Device()) == 1

    def test_fixed_score(self):
        assert fixed_score_selector(7)(Device()) == 7

    def test_custom(self):
        sel = custom_selector(lambda d: len(d.name))
        assert sel.kind is SelectorKind.CUSTOM
        assert sel(Device("abcd")) == 4

    def test_custom_needs_function(self):
        with pytest.raises(ValueError):
            DeviceSelector(SelectorKind.CUSTOM)

    def test_selectors_are_immutable(self):
        sel = gpu_selector()
        with pytest.raises(AttributeError):
            sel.fixed_score = 5


class TestSelectDevice:
    def test_highest_score_wins(self):
        devices = [Device("a"), Device("bbb"), Device("cc")]
        sel = custom_selector(lambda d: len(d.name))
        assert select_device(sel, devices).name == "bbb"

    def test_ties_go_to_first(self):
        devices = [Device("a"), Device("b")]
        assert select_device(gpu_selector(), devices).name == "a"

    def test_defaults_to_host(self):
        assert select_device().is_host()

    def test_negative_scores_rejected(self):
        with pytest.raises(DeviceSelectionError):
            select_device(fixed_score_selector(-1))

    def test_no_devices(self):
        with pytest.raises(DeviceSelectionError):
            select_device(default_selector(), [])


# ---------------------------------------------------------------------------
# Context / Queue / CommandGroup
# ---------------------------------------------------------------------------

class TestContext:
    def test_from_device(self):
        dev = Device("mine")
        assert Context(dev).device is dev

    def test_from_selector(self):
        assert Context(gpu_selector()).device.is_host()

    def test_default(self):
        assert Context().device.name == "host"


class TestQueue:
    def test_engine_from_config(self):
        q = Queue(config=HsyclConfig(parallel=False, max_workers=2))
        assert q.engine.parallel is False
        assert q.engine.max_workers == 2
        assert q.config.max_workers == 2

    def test_loads_config_when_missing(self):
        with patch.object(
            device_module, 'load_config',
            return_value=HsyclConfig(max_workers=3),
        ) as mock_load:
            q = Queue()
        mock_load.assert_called_once()
        assert q.engine.max_workers == 3

    def test_from_context(self):
        ctx = Context(Device("x"))
        q = Queue(ctx, config=HsyclConfig())
        assert q.context is ctx
        assert q.device.name == "x"

    def test_from_selector(self):
        q = Queue(gpu_selector(), config=HsyclConfig())
        assert q.device.is_host()

    def test_parallel_for_uses_queue_engine(self):
        q = Queue(config=HsyclConfig(parallel=False))
        seen = []
        q.parallel_for(Range(2, 2), lambda i: seen.append(i.to_tuple()))
        assert seen == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_parallel_for_nd_range(self):
        q = Queue(config=HsyclConfig(parallel=True, max_workers=2))
        buf = Buffer(6, dtype=np.int64)
        acc = buf.get_access()

        def kernel(item):
            acc[item] = item.get_group(0)

        q.parallel_for(NdRange(6, 2), kernel)
        np.testing.assert_array_equal(buf.to_numpy(), [0, 0, 1, 1, 2, 2])

    def test_single_task(self):
        q = Queue(config=HsyclConfig())
        kernel = MagicMock()
        q.single_task(kernel)
        kernel.assert_called_once_with()

    def test_wait_returns(self):
        assert Queue(config=HsyclConfig()).wait() is None


class TestCommandGroup:
    def test_runs_immediately(self):
        q = Queue(config=HsyclConfig())
        functor = MagicMock(return_value="done")
        group = CommandGroup(q, functor)
        functor.assert_called_once_with()
        assert group.result == "done"
        assert group.queue is q

    def test_submit(self):
        q = Queue(config=HsyclConfig(parallel=False))
        host = np.zeros(4)
        buf = Buffer(4, host_data=host)

        def command_group():
            acc = buf.get_access()

            def kernel(index):
                acc[index] = index[0] * 2.0

            q.parallel_for(4, kernel)

        q.submit(command_group)
        np.testing.assert_array_equal(host, [0.0, 2.0, 4.0, 6.0])

    def test_exception_propagates(self):
        q = Queue(config=HsyclConfig())

        def command_group():
            raise RuntimeError("bad group")

        with pytest.raises(RuntimeError, match="bad group"):
            q.submit(command_group)
