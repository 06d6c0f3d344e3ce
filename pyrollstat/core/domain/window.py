from collections import deque
from typing import Iterator

from pyrollstat.core.domain.errors import ConfigurationError
from pyrollstat.core.domain.sample import Sample


class EvictionWindow:
    """Bounded FIFO of samples, oldest first.

    Unlike ``deque(maxlen=...)`` the window never drops on its own: the owner
    pops the oldest sample explicitly so it can also remove it from the
    partition that holds it.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"Window capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self.buf: deque[Sample] = deque()

    def push(self, sample: Sample):
        if len(self.buf) >= self.capacity:
            raise OverflowError("Eviction window is full, pop the oldest sample first")
        self.buf.append(sample)

    def pop_oldest(self) -> Sample:
        if not self.buf:
            raise IndexError("pop from an empty eviction window")
        return self.buf.popleft()

    def is_full(self) -> bool:
        return len(self.buf) == self.capacity

    def clear(self):
        self.buf.clear()

    def __len__(self):
        return len(self.buf)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.buf)
