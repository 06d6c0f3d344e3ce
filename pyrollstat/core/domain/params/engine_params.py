from dataclasses import dataclass
from typing import Optional

from pyrollstat.core.domain.distribution import CollisionPolicy
from pyrollstat.core.domain.errors import ConfigurationError

MAX_SEQUENCE_ID = 2**64 - 1

DEFAULT_CAPACITY: Optional[int] = None
DEFAULT_NUMERIC = "float"
DEFAULT_STEPS = 10
DEFAULT_COLLISION_POLICY = CollisionPolicy.SUM


def _positive_int(name: str, raw) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigurationError(f"{name} must be an integer, got {type(raw).__name__}")
    if raw <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw}")
    return raw


@dataclass
class EngineParams:
    capacity: Optional[int] = DEFAULT_CAPACITY
    numeric: str = DEFAULT_NUMERIC
    max_sequence_id: int = MAX_SEQUENCE_ID

    @staticmethod
    def from_dict(engine_props: dict) -> "EngineParams":
        capacity = engine_props.get("capacity", DEFAULT_CAPACITY)
        if capacity is not None:
            capacity = _positive_int("capacity", capacity)

        numeric = engine_props.get("numeric", DEFAULT_NUMERIC)
        if not isinstance(numeric, str):
            raise ConfigurationError(f"numeric must be a string, got {type(numeric).__name__}")

        max_sequence_id = engine_props.get("max_sequence_id", MAX_SEQUENCE_ID)
        if isinstance(max_sequence_id, bool) or not isinstance(max_sequence_id, int) or max_sequence_id < 0:
            raise ConfigurationError(f"max_sequence_id must be a non-negative integer, got {max_sequence_id!r}")

        return EngineParams(capacity=capacity, numeric=numeric.lower(), max_sequence_id=max_sequence_id)


@dataclass
class DistributionParams:
    steps: int = DEFAULT_STEPS
    collision_policy: CollisionPolicy = DEFAULT_COLLISION_POLICY

    @staticmethod
    def from_dict(distribution_props: dict) -> "DistributionParams":
        steps = _positive_int("steps", distribution_props.get("steps", DEFAULT_STEPS))

        raw_policy = distribution_props.get("collision_policy", DEFAULT_COLLISION_POLICY.to_str())
        try:
            policy = CollisionPolicy[str(raw_policy).upper()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown collision policy: {raw_policy}, expected one of {[p.name for p in CollisionPolicy]}"
            ) from None

        return DistributionParams(steps=steps, collision_policy=policy)
