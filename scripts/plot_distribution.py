import logging
import sys

import matplotlib.pyplot as plt

from pyrollstat.adapters.mock_source import MockValueSource
from pyrollstat.core.config import Config
from pyrollstat.core.services.engine import build_engine
from pyrollstat.core.services.numeric import numeric_for


logging.basicConfig(
    level=logging.ERROR,
    format="%(asctime)s [%(levelname)s] %(message)s",
)


def main():
    cfg = Config(sys.argv[1] if len(sys.argv) > 1 else "./configs/config.yaml")
    params = cfg.engine_params()
    distribution = cfg.distribution_params()
    numeric = numeric_for(params.numeric)
    engine = build_engine(params, distribution)

    source = MockValueSource(cfg.mock_samples, drift=0.01, seed=cfg.mock_seed, numeric=numeric)
    medians = []
    for value in source.read():
        engine.add_value(value)
        medians.append(float(engine.get_median()))

    buckets = engine.distribution_buckets(distribution.steps)

    fig, (ax_median, ax_hist) = plt.subplots(2, 1, figsize=(8, 6))
    ax_median.plot(medians, label="median")
    ax_median.set_title(f"Rolling median (capacity={engine.capacity})")
    ax_median.legend()

    ax_hist.bar(
        [float(b.lower) for b in buckets],
        [b.count for b in buckets],
        width=[float(b.upper - b.lower) for b in buckets],
        align="edge",
    )
    ax_hist.set_title(f"Distribution of the last {engine.count} values")

    plt.tight_layout()
    plt.show(block=True)


if __name__ == "__main__":
    main()
