from __future__ import annotations
import logging
import math
import threading
from typing import Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from pyrollstat.core.domain.distribution import CollisionPolicy, DistributionBucket
from pyrollstat.core.domain.errors import (
    ConfigurationError,
    CounterExhaustedError,
    EmptyStateError,
    InvalidArgumentError,
)
from pyrollstat.core.domain.params.engine_params import (
    DEFAULT_STEPS,
    MAX_SEQUENCE_ID,
    DistributionParams,
    EngineParams,
)
from pyrollstat.core.domain.sample import Sample
from pyrollstat.core.domain.window import EvictionWindow
from pyrollstat.core.ports.numeric import NumericPort
from pyrollstat.core.ports.partition import PartitionPort
from pyrollstat.core.services.distribution import DistributionBuilder
from pyrollstat.core.services.numeric import FLOAT, numeric_for
from pyrollstat.core.services.partition import SortedPartition

logger = logging.getLogger(__name__)

N = TypeVar("N")


class RollingOrderStatistics(Generic[N]):
    """Median, percentile and distribution queries over a stream of numbers.

    Samples are split between two sorted partitions: ``lower`` holds the
    smaller half and is never behind ``upper`` nor more than one sample ahead,
    so the median sits at ``lower.max()`` (odd count) or between
    ``lower.max()`` and ``upper.min()`` (even count).

    Args:
        capacity: Track only the most recent ``capacity`` samples. ``None``
            tracks everything ever added and grows without bound.
        numeric: Arithmetic for the value type (float or Decimal).
        max_sequence_id: Largest sequence id handed out before ``add_value``
            refuses further samples. Reset by ``clear``.
        collision_policy: How ``generate_distribution`` merges buckets that
            share a representative value.

    NOTES:
      Not thread safe. Wrap the whole engine in ``SynchronizedEngine`` when it
      is shared between threads.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        numeric: NumericPort = FLOAT,
        max_sequence_id: int = MAX_SEQUENCE_ID,
        collision_policy: CollisionPolicy = CollisionPolicy.SUM,
    ):
        if capacity is not None and (
            isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0
        ):
            raise ConfigurationError(f"Capacity must be a positive integer or None, got {capacity!r}")
        if not isinstance(max_sequence_id, int) or max_sequence_id < 0:
            raise ConfigurationError(f"max_sequence_id must be a non-negative integer, got {max_sequence_id!r}")

        self.capacity = capacity
        self.numeric = numeric
        self.max_sequence_id = max_sequence_id
        self.lower: PartitionPort = SortedPartition()
        self.upper: PartitionPort = SortedPartition()
        self.window: Optional[EvictionWindow] = (
            EvictionWindow(capacity) if capacity is not None else None
        )
        self.distribution = DistributionBuilder(collision_policy)
        self._next_id = 0

        logger.debug(
            "Created %s engine (capacity=%s, numeric=%s)",
            "bounded" if self.is_bounded else "unbounded",
            capacity,
            numeric.name,
        )

    @property
    def is_bounded(self) -> bool:
        return self.window is not None

    @property
    def count(self) -> int:
        return len(self.lower) + len(self.upper)

    @property
    def contains_values(self) -> bool:
        return self.count > 0

    @property
    def value(self) -> N:
        return self.get_median()

    def add_value(self, value) -> None:
        value = self.numeric.coerce(value)
        if self.numeric.is_nan(value):
            raise InvalidArgumentError("NaN cannot be ordered and is not accepted")

        sequence_id = self._next_id
        if sequence_id > self.max_sequence_id:
            raise CounterExhaustedError(
                f"Sequence id counter exhausted after {self.max_sequence_id + 1} samples, call clear()"
            )
        self._next_id = sequence_id + 1

        if self.window is not None and self.window.is_full():
            self._evict(self.window.pop_oldest())
            # eviction can empty lower while upper still holds a sample
            self._rebalance()

        sample = Sample(value, sequence_id)
        if not self.lower or value <= self.lower.max().value:
            self.lower.add(sample)
        else:
            self.upper.add(sample)

        if self.window is not None:
            self.window.push(sample)

        self._rebalance()

    def add_values(self, values: Iterable) -> None:
        for value in values:
            self.add_value(value)

    def get_median(self) -> N:
        self._require_values()

        if len(self.lower) == len(self.upper):
            return self.numeric.average(self.lower.max().value, self.upper.min().value)
        return self.lower.max().value

    def minimum(self) -> N:
        self._require_values()
        return self.lower.min().value

    def maximum(self) -> N:
        self._require_values()
        if self.upper:
            return self.upper.max().value
        return self.lower.max().value

    def get_percentile(self, percentile) -> N:
        """Linearly interpolated percentile, ``percentile`` in [0, 1].

        Ranks are resolved with ``select`` on the partitions, so a query costs
        O(log n).
        """
        if not 0 <= percentile <= 1:
            raise InvalidArgumentError(f"Percentile must be within [0, 1], got {percentile!r}")
        self._require_values()

        if percentile == 0:
            return self.minimum()
        if percentile == 1:
            return self.maximum()

        rank = (self.count - 1) * self.numeric.coerce(percentile)
        lower_index = math.floor(rank)
        if lower_index >= self.count - 1:
            return self.maximum()

        weight = rank - lower_index
        return self.numeric.interpolate(
            self._select(lower_index), self._select(lower_index + 1), weight
        )

    def get_bracket(self, precise_index) -> Tuple[N, N]:
        """The two ranked values around the fractional rank ``precise_index``."""
        self._require_values()
        last = self.count - 1
        if not 0 <= precise_index <= last:
            raise InvalidArgumentError(f"Index must be within [0, {last}], got {precise_index!r}")

        lower_index = math.floor(precise_index)
        return self._select(lower_index), self._select(min(lower_index + 1, last))

    def generate_distribution(self, steps: int = DEFAULT_STEPS) -> Dict[N, int]:
        return self.distribution.generate(self, steps)

    def distribution_buckets(self, steps: int = DEFAULT_STEPS) -> List[DistributionBucket]:
        return self.distribution.buckets(self, steps)

    def clear(self) -> None:
        self.lower.clear()
        self.upper.clear()
        if self.window is not None:
            self.window.clear()
        self._next_id = 0
        logger.debug("Engine cleared (capacity=%s)", self.capacity)

    def __len__(self):
        return self.count

    def __iter__(self) -> Iterator[N]:
        for sample in self.lower:
            yield sample.value
        for sample in self.upper:
            yield sample.value

    def _select(self, rank: int) -> N:
        if rank < len(self.lower):
            return self.lower.select(rank).value
        return self.upper.select(rank - len(self.lower)).value

    def _evict(self, sample: Sample):
        if sample in self.lower:
            self.lower.remove(sample)
        else:
            self.upper.remove(sample)

    def _rebalance(self):
        while len(self.lower) > len(self.upper) + 1:
            self.upper.add(self.lower.pop_max())
        while len(self.upper) > len(self.lower):
            self.lower.add(self.upper.pop_min())

    def _require_values(self):
        if not self.contains_values:
            raise EmptyStateError("No values added yet.")


class RunningMedian(RollingOrderStatistics[N]):
    """Order statistics over every value added so far."""

    def __init__(self, numeric: NumericPort = FLOAT, **kwargs):
        super().__init__(capacity=None, numeric=numeric, **kwargs)


class MovingMedian(RollingOrderStatistics[N]):
    """Order statistics over the last ``window_size`` values."""

    def __init__(self, window_size: int, numeric: NumericPort = FLOAT, **kwargs):
        super().__init__(capacity=window_size, numeric=numeric, **kwargs)


class SynchronizedEngine(Generic[N]):
    """Serialises every call on one engine behind a single lock.

    Rebalancing touches both partitions, so the lock covers the engine as a
    whole rather than each partition.
    """

    def __init__(self, engine: RollingOrderStatistics[N]):
        self.engine = engine
        self.lock = threading.Lock()

    def add_value(self, value) -> None:
        with self.lock:
            self.engine.add_value(value)

    def add_values(self, values: Iterable) -> None:
        with self.lock:
            self.engine.add_values(values)

    def get_median(self) -> N:
        with self.lock:
            return self.engine.get_median()

    def minimum(self) -> N:
        with self.lock:
            return self.engine.minimum()

    def maximum(self) -> N:
        with self.lock:
            return self.engine.maximum()

    def get_percentile(self, percentile) -> N:
        with self.lock:
            return self.engine.get_percentile(percentile)

    def get_bracket(self, precise_index) -> Tuple[N, N]:
        with self.lock:
            return self.engine.get_bracket(precise_index)

    def generate_distribution(self, steps: int = DEFAULT_STEPS) -> Dict[N, int]:
        with self.lock:
            return self.engine.generate_distribution(steps)

    def distribution_buckets(self, steps: int = DEFAULT_STEPS) -> List[DistributionBucket]:
        with self.lock:
            return self.engine.distribution_buckets(steps)

    @property
    def contains_values(self) -> bool:
        with self.lock:
            return self.engine.contains_values

    @property
    def count(self) -> int:
        with self.lock:
            return self.engine.count

    @property
    def value(self) -> N:
        with self.lock:
            return self.engine.value

    def clear(self) -> None:
        with self.lock:
            self.engine.clear()

    def __len__(self):
        with self.lock:
            return len(self.engine)

    def __iter__(self) -> Iterator[N]:
        # snapshot taken under the lock
        with self.lock:
            values = list(self.engine)
        return iter(values)


def build_engine(
    params: EngineParams, distribution: Optional[DistributionParams] = None
) -> RollingOrderStatistics:
    distribution = distribution or DistributionParams()
    return RollingOrderStatistics(
        capacity=params.capacity,
        numeric=numeric_for(params.numeric),
        max_sequence_id=params.max_sequence_id,
        collision_policy=distribution.collision_policy,
    )
