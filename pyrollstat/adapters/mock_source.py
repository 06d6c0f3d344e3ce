from typing import Iterator
import numpy as np

from pyrollstat.core.ports.numeric import NumericPort
from pyrollstat.core.ports.reader import ValueReaderPort
from pyrollstat.core.services.numeric import FLOAT


class MockValueSource(ValueReaderPort):
    """
    Reproducible stream of normally distributed values with an optional
    linear drift, useful to watch a moving window follow the signal.
    """

    def __init__(
        self,
        samples: int,
        mean: float = 0.0,
        stdev: float = 1.0,
        drift: float = 0.0,
        seed: int = 0,
        numeric: NumericPort = FLOAT,
    ):
        self.samples = samples
        self.mean = mean
        self.stdev = stdev
        self.drift = drift
        self.numeric = numeric
        self._rng = np.random.default_rng(seed)

    def read(self) -> Iterator:
        noise = self._rng.normal(self.mean, self.stdev, size=self.samples)
        trend = self.drift * np.arange(self.samples)
        for value in noise + trend:
            yield self.numeric.coerce(float(value))

    def close(self):
        pass
