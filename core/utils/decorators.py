"""
Utility decorators and context managers.
"""

import time
from contextlib import contextmanager


@contextmanager
def timer():
    """
    Measure elapsed wall time of a block.

    Example:
        >>> with timer() as t:
        ...     do_work()
        >>> t["ms"]  # available after the block exits
    """
    result = {"ms": 0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = int((time.perf_counter() - start) * 1000)
