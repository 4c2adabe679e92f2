# -*- coding: utf-8 -*-
"""
hsycl CLI - Inspect the execution setup and run a smoke-test kernel.

Usage::

    python -m hsycl --info
    python -m hsycl --demo 1024
    python -m hsycl --demo 1024 --sequential --config my_config.json

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

import argparse
import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import List, Optional


def _vector_add(queue, n: int) -> bool:
    import numpy as np

    from hsycl.core.access import AccessMode
    from hsycl.core.memory import Buffer

    a = np.arange(n, dtype=np.float64)
    b = np.arange(n, dtype=np.float64) * 2.0
    c = np.zeros(n, dtype=np.float64)

    buf_a = Buffer(n, host_data=a)
    buf_b = Buffer(n, host_data=b)
    buf_c = Buffer(n, host_data=c)

    def command_group():
        ka = buf_a.get_access(AccessMode.READ)
        kb = buf_b.get_access(AccessMode.READ)
        kc = buf_c.get_access(AccessMode.WRITE)

        def kernel(i):
            kc[i] = ka[i] + kb[i]

        queue.parallel_for(n, kernel)

    queue.submit(command_group)
    return bool(np.array_equal(c, a + b))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hsycl",
        description="hsycl - Host-side SYCL execution model.",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a JSON config file (default ~/.hsycl/hsycl_config.json).",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print device information and the effective configuration.",
    )
    parser.add_argument(
        "--demo",
        type=int,
        metavar="N",
        default=None,
        help="Run a vector-add kernel over N elements and check the result.",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run kernels on the calling thread only.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads for parallel execution.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.config is not None and not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        return 1
    if args.workers is not None and args.workers < 1:
        print("Error: --workers must be at least 1", file=sys.stderr)
        return 1

    from hsycl.core.config import load_config
    from hsycl.core.device import Queue

    config = load_config(args.config)
    if args.sequential:
        config = replace(config, parallel=False)
    if args.workers is not None:
        config = replace(config, max_workers=args.workers)

    queue = Queue(config=config)

    if args.info or args.demo is None:
        print(json.dumps(
            {'device': queue.device.info, 'config': asdict(config)},
            indent=2,
        ))

    if args.demo is not None:
        if args.demo < 1:
            print("Error: --demo needs a positive size", file=sys.stderr)
            return 1
        ok = _vector_add(queue, args.demo)
        print(f"vector add ({args.demo} elements): {'ok' if ok else 'FAILED'}")
        return 0 if ok else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
