import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from pyrollstat.core.domain.errors import ConfigurationError
from pyrollstat.core.domain.params.engine_params import DistributionParams, EngineParams

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "ERROR"
DEFAULT_SOURCE_FILENAME: Optional[str] = None
DEFAULT_MOCK_SAMPLES = 1000
DEFAULT_MOCK_SEED = 0


class Config:
    def __init__(self, path: str):
        """
        Load YAML configuration from the given path.

        Args:
            path: Path to config.yaml, usually 'configs/config.yaml' in project root.
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Config file not found: {self.path}")

        with open(self.path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root must be a mapping, got {type(data).__name__}")

        self._data: Dict[str, Any] = data
        logger.info("Loaded config from %s", self.path)

    def get(self, key: str, default=None):
        """Get a config value by key."""
        return self._data.get(key, default)

    def engine_params(self) -> EngineParams:
        return EngineParams.from_dict(self._section("engine"))

    def distribution_params(self) -> DistributionParams:
        return DistributionParams.from_dict(self._section("distribution"))

    @property
    def log_level(self) -> int:
        raw = self._section("logging").get("level", DEFAULT_LOG_LEVEL)
        level = logging.getLevelName(str(raw).upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown log level: {raw}")
        return level

    @property
    def source_filename(self) -> Optional[str]:
        return self._section("source").get("filename", DEFAULT_SOURCE_FILENAME)

    @property
    def mock_samples(self) -> int:
        return self._section("source").get("mock_samples", DEFAULT_MOCK_SAMPLES)

    @property
    def mock_seed(self) -> int:
        return self._section("source").get("mock_seed", DEFAULT_MOCK_SEED)

    def _section(self, name: str) -> Dict[str, Any]:
        props = self._data.get(name) or {}
        if not isinstance(props, dict):
            raise ConfigurationError(f"'{name}' section must be a mapping, got {type(props).__name__}")
        return props
