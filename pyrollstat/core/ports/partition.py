from abc import ABC, abstractmethod
from typing import Iterator

from pyrollstat.core.domain.sample import Sample


class PartitionPort(ABC):
    """Ordered multiset of samples with cheap access to both ends.

    Iteration is ascending by ``(value, sequence_id)``.
    """

    @abstractmethod
    def add(self, sample: Sample):
        pass

    @abstractmethod
    def remove(self, sample: Sample):
        """Remove the exact sample. Raises KeyError if it is not held."""
        pass

    @abstractmethod
    def min(self) -> Sample:
        pass

    @abstractmethod
    def max(self) -> Sample:
        pass

    @abstractmethod
    def select(self, rank: int) -> Sample:
        """Return the sample at zero based ascending position ``rank``."""
        pass

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    def __contains__(self, sample: Sample) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Sample]:
        pass

    def pop_min(self) -> Sample:
        sample = self.min()
        self.remove(sample)
        return sample

    def pop_max(self) -> Sample:
        sample = self.max()
        self.remove(sample)
        return sample
