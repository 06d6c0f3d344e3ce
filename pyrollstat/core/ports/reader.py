from abc import ABC, abstractmethod
from typing import Iterator


class ValueReaderPort(ABC):
    @abstractmethod
    def read(self) -> Iterator:
        """yield values in arrival order"""
        pass

    @abstractmethod
    def close(self):
        """close reader."""
        pass
