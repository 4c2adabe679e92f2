# -*- coding: utf-8 -*-
"""
Tests for hsycl.__main__ - command line entry point.

Author
------
hsycl contributors

Created
-------
2026-10-15
"""

import json

import pytest

from hsycl.__main__ import main
from hsycl.core.config import HsyclConfig


class TestMain:
    def test_info_prints_device_and_config(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        HsyclConfig(max_workers=2).save(path)
        assert main(["--info", "--config", str(path)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['device']['is_host'] is True
        assert data['config']['max_workers'] == 2

    def test_overrides(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        HsyclConfig().save(path)
        assert main(["--config", str(path), "--sequential", "--workers", "3"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['config']['parallel'] is False
        assert data['config']['max_workers'] == 3

    @pytest.mark.parametrize("extra", [[], ["--sequential"]])
    def test_demo(self, tmp_path, capsys, extra):
        path = tmp_path / "config.json"
        HsyclConfig(max_workers=2).save(path)
        assert main(["--demo", "64", "--config", str(path)] + extra) == 0
        assert "vector add (64 elements): ok" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.json")]) == 1
        assert "config file not found" in capsys.readouterr().err

    def test_bad_workers(self, capsys):
        assert main(["--workers", "0"]) == 1

    def test_bad_demo_size(self, tmp_path):
        path = tmp_path / "config.json"
        HsyclConfig().save(path)
        assert main(["--demo", "0", "--config", str(path)]) == 1
