from typing import Iterable, Iterator, Optional

from sortedcontainers import SortedList

from pyrollstat.core.domain.sample import Sample
from pyrollstat.core.ports.partition import PartitionPort


class SortedPartition(PartitionPort):
    """Partition backed by a ``SortedList``.

    ``SortedList`` keeps a positional index, so ``select`` runs in O(log n)
    alongside add, remove and both ends.
    """

    def __init__(self, samples: Optional[Iterable[Sample]] = None):
        self.data: SortedList = SortedList(samples or ())

    def add(self, sample: Sample):
        self.data.add(sample)

    def remove(self, sample: Sample):
        try:
            self.data.remove(sample)
        except ValueError:
            raise KeyError(f"{sample} is not held by this partition") from None

    def min(self) -> Sample:
        if not self.data:
            raise IndexError("min() of an empty partition")
        return self.data[0]

    def max(self) -> Sample:
        if not self.data:
            raise IndexError("max() of an empty partition")
        return self.data[-1]

    def pop_min(self) -> Sample:
        if not self.data:
            raise IndexError("pop_min() of an empty partition")
        return self.data.pop(0)

    def pop_max(self) -> Sample:
        if not self.data:
            raise IndexError("pop_max() of an empty partition")
        return self.data.pop()

    def select(self, rank: int) -> Sample:
        if not 0 <= rank < len(self.data):
            raise IndexError(f"rank {rank} out of range for partition of size {len(self.data)}")
        return self.data[rank]

    def clear(self):
        self.data.clear()

    def __contains__(self, sample: Sample) -> bool:
        return sample in self.data

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.data)
