from dataclasses import dataclass
from enum import Enum
from typing import Any


class CollisionPolicy(Enum):
    """What to do when two buckets report the same representative value."""

    SUM = "SUM"
    OVERWRITE = "OVERWRITE"

    def to_str(self) -> str:
        return self.name


@dataclass(frozen=True)
class DistributionBucket:
    index: int
    lower: Any
    upper: Any
    representative: Any
    count: int
