import os
from typing import Iterator

from pyrollstat.core.ports.numeric import NumericPort
from pyrollstat.core.ports.reader import ValueReaderPort
from pyrollstat.core.services.numeric import FLOAT


class FileValueReader(ValueReaderPort):
    def __init__(self, filename: str, numeric: NumericPort = FLOAT):
        """
        Text file reader adapter, one number per line.
            :param filename: Path to the file
            :param numeric: Arithmetic used to parse each line
        """
        if not os.path.exists(filename):
            raise FileNotFoundError(f"File {filename} does not exist")
        self.filename = filename
        self.numeric = numeric
        self.file = open(filename, "r")

    def read(self) -> Iterator:
        """
        Yield parsed values. Blank lines and lines starting with '#' are skipped.
        """
        for lineno, line in enumerate(self.file, start=1):
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            try:
                yield self.numeric.parse(text)
            except (ValueError, ArithmeticError):
                raise ValueError(f"{self.filename}:{lineno}: not a number: {text!r}") from None

    def close(self):
        self.file.close()
