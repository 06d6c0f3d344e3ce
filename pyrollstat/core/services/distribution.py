from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Dict, List

from pyrollstat.core.domain.distribution import CollisionPolicy, DistributionBucket
from pyrollstat.core.domain.errors import InvalidArgumentError
from pyrollstat.core.domain.params.engine_params import DEFAULT_STEPS
from pyrollstat.utils.median import median

if TYPE_CHECKING:
    from pyrollstat.core.services.engine import RollingOrderStatistics

logger = logging.getLogger(__name__)


class DistributionBuilder:
    """Buckets the tracked values into ``steps`` equal width ranges.

    ``buckets`` is keyed by bucket index and never loses counts. ``generate``
    keeps the historical ``representative -> count`` shape and resolves
    representative collisions according to ``collision_policy``.
    """

    def __init__(self, collision_policy: CollisionPolicy = CollisionPolicy.SUM):
        self.collision_policy = collision_policy

    def buckets(self, engine: RollingOrderStatistics, steps: int = DEFAULT_STEPS) -> List[DistributionBucket]:
        if not engine.contains_values:
            return []

        numeric = engine.numeric
        steps = max(int(steps), 1)
        minimum = engine.minimum()
        maximum = engine.maximum()
        if not (numeric.is_finite(minimum) and numeric.is_finite(maximum)):
            raise InvalidArgumentError("A distribution needs finite values, the tracked range is unbounded")

        # work on halved values: maximum - minimum may overflow, half of it cannot
        half_min = minimum / 2
        half_coverage = maximum / 2 - half_min
        half_step = (half_coverage + numeric.epsilon(half_coverage)) / steps

        grouped: Dict[int, list] = {}
        for value in engine:
            if half_coverage == 0:
                index = 0
            else:
                index = min(max(math.floor((value / 2 - half_min) / half_step), 0), steps - 1)
            grouped.setdefault(index, []).append(value)

        # engine iteration is ascending, so every group is already sorted
        return [
            DistributionBucket(
                index=index,
                lower=(half_min + half_step * index) * 2,
                upper=(half_min + half_step * (index + 1)) * 2,
                representative=median(values, is_sorted=True, numeric=numeric),
                count=len(values),
            )
            for index, values in sorted(grouped.items())
        ]

    def generate(self, engine: RollingOrderStatistics, steps: int = DEFAULT_STEPS) -> Dict:
        result: Dict = {}
        for bucket in self.buckets(engine, steps):
            key = bucket.representative
            if key in result:
                logger.debug(
                    "Buckets share representative %s, policy %s",
                    key,
                    self.collision_policy.to_str(),
                )
                if self.collision_policy is CollisionPolicy.SUM:
                    result[key] += bucket.count
                    continue
            result[key] = bucket.count
        return result
