import logging
import sys

from pyrollstat.adapters.mock_source import MockValueSource
from pyrollstat.adapters.readers import FileValueReader
from pyrollstat.core.config import Config
from pyrollstat.core.ports.reader import ValueReaderPort
from pyrollstat.core.services.engine import build_engine
from pyrollstat.core.services.numeric import numeric_for


def main():
    cfg = Config(sys.argv[1] if len(sys.argv) > 1 else "./configs/config.yaml")
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger = logging.getLogger("pyrollstat")

    params = cfg.engine_params()
    distribution = cfg.distribution_params()
    numeric = numeric_for(params.numeric)
    engine = build_engine(params, distribution)

    if cfg.source_filename:
        source: ValueReaderPort = FileValueReader(cfg.source_filename, numeric)
    else:
        source = MockValueSource(cfg.mock_samples, seed=cfg.mock_seed, numeric=numeric)

    try:
        engine.add_values(source.read())
    finally:
        source.close()

    if not engine.contains_values:
        logger.error("Source produced no values")
        return

    logger.info("tracked=%d min=%s max=%s", engine.count, engine.minimum(), engine.maximum())
    logger.info("median=%s", engine.get_median())
    for p in (0.05, 0.25, 0.75, 0.95):
        logger.info("p%02d=%s", round(p * 100), engine.get_percentile(p))
    for representative, count in engine.generate_distribution(distribution.steps).items():
        logger.info("bucket %s: %d", representative, count)


if __name__ == "__main__":
    main()
