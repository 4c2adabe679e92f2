# -*- coding: utf-8 -*-
"""
Access Tags - How and where a kernel accesses buffer data.

Both enumerations are advisory: accessors carry them for callers to
inspect but do not restrict operations based on them.

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
from enum import Enum


class AccessMode(Enum):
    """Type of access a kernel performs on a buffer.

    ``READ_WRITE`` is its own mode, distinct from ``READ`` and ``WRITE``.
    """

    READ = 42
    WRITE = 43
    ATOMIC = 44
    READ_WRITE = 45
    DISCARD_READ_WRITE = 46

    @property
    def reads(self) -> bool:
        return self in (AccessMode.READ, AccessMode.ATOMIC, AccessMode.READ_WRITE)

    @property
    def writes(self) -> bool:
        return self is not AccessMode.READ


class AccessTarget(Enum):
    """Memory a buffer access is aimed at."""

    GLOBAL_BUFFER = 2014
    CONSTANT_BUFFER = 2015
    LOCAL = 2016
    IMAGE = 2017
    HOST_BUFFER = 2018
    HOST_IMAGE = 2019
    IMAGE_ARRAY = 2020
    CL_BUFFER = 2021
    CL_IMAGE = 2022
