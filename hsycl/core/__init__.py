# -*- coding: utf-8 -*-
"""
Core Module - Execution model for hsycl.

Contains the index-space algebra, the iteration engine, kernel launch,
buffers and accessors, and the device/queue collaborators.

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
