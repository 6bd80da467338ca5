"""
Host Information

Author: storeconf Project
License: MIT
"""

import os


def num_cpus() -> int:
    """Number of processors available to this process, at least 1."""
    if hasattr(os, "sched_getaffinity"):
        count = len(os.sched_getaffinity(0))
    else:
        count = os.cpu_count() or 1
    return max(1, count)
