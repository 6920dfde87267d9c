import time
from contextlib import contextmanager
from typing import Callable, Iterator


@contextmanager
def timer_ms() -> Iterator[Callable[[], int]]:
    """Yield a callable returning milliseconds elapsed since entry."""
    start = time.perf_counter()
    yield lambda: int((time.perf_counter() - start) * 1000)
