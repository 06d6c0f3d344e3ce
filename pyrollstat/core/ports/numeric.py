from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

N = TypeVar("N")

EPSILON_SCALE = 1e-10


class NumericPort(ABC, Generic[N]):
    """Arithmetic the engine needs from a number type.

    Values must be totally ordered (once NaN is rejected), support subtraction
    and division by an int.
    """

    name: str = ""

    @abstractmethod
    def coerce(self, x: Any) -> N:
        """Convert an input value or a float constant into N."""
        pass

    @abstractmethod
    def is_nan(self, value: N) -> bool:
        pass

    @abstractmethod
    def is_finite(self, value: N) -> bool:
        pass

    @abstractmethod
    def smallest_positive(self) -> N:
        pass

    def parse(self, text: str) -> N:
        return self.coerce(text.strip())

    def average(self, a: N, b: N) -> N:
        return (a + b) / 2

    def interpolate(self, low: N, high: N, weight: Any) -> N:
        w = self.coerce(weight)
        if w == 0:
            # exact rank, keeps an infinite low from turning into NaN
            return low
        return low * (1 - w) + high * w

    def epsilon(self, coverage: N) -> N:
        """Pad added to a value range so its maximum stays inside the last bucket."""
        return max(coverage * self.coerce(EPSILON_SCALE), self.smallest_positive())
