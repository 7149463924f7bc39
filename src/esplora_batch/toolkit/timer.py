import time


class Timer:
    """
    A context manager to measure the duration of an operation.
    Uses a monotonic clock, so the result is not affected by system clock updates.

    Usage:
    >>> with Timer() as timer:
    >>>     await fan_out(...)
    >>> print(f"Fan-out completed in {timer.elapsed()} seconds.")
    """

    def __enter__(self):
        self.start_time = time.monotonic()
        self.end_time = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.monotonic()

    def elapsed(self) -> float:
        end_time = self.end_time if self.end_time is not None else time.monotonic()
        return end_time - self.start_time
