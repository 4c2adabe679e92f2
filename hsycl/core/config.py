# -*- coding: utf-8 -*-
"""
Configuration Module - Execution defaults for hsycl.

Provides an HsyclConfig dataclass selecting between sequential and
parallel iteration, the worker count and the partial work-group
policy. Loads from ~/.hsycl/hsycl_config.json if it exists, otherwise
uses the defaults.

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
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".hsycl"
_CONFIG_FILE = _CONFIG_DIR / "hsycl_config.json"


@dataclass
class HsyclConfig:
    """Global hsycl configuration with defaults.

    Attributes
    ----------
    parallel : bool
        Run the outermost loop of every launch on a thread pool.
    max_workers : int
        Number of worker threads used when ``parallel`` is set.
    clip_partial_groups : bool
        Skip work-items of partial trailing work-groups whose global
        index lies outside the global range.
    """

    parallel: bool = True
    max_workers: int = 4
    clip_partial_groups: bool = False

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = path or _CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def load_config(path: Optional[Path] = None) -> HsyclConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ~/.hsycl/hsycl_config.json.

    Returns
    -------
    HsyclConfig
        Loaded or default configuration.
    """
    path = path or _CONFIG_FILE
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return HsyclConfig(**{
                k: v for k, v in data.items()
                if k in HsyclConfig.__dataclass_fields__
            })
        except Exception as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return HsyclConfig()
