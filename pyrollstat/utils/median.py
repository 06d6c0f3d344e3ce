from typing import Iterable, Optional, Sequence

from pyrollstat.core.domain.errors import InvalidArgumentError
from pyrollstat.core.ports.numeric import NumericPort


def median(values: Iterable, is_sorted: bool = False, numeric: Optional[NumericPort] = None):
    """Median of a finite sequence, sorting a copy unless ``is_sorted`` is set.

    Even sized inputs average the two middle values, through ``numeric`` when
    given so Decimal inputs stay Decimal.
    """
    ordered: Sequence = list(values) if is_sorted else sorted(values)
    n = len(ordered)
    if n == 0:
        raise InvalidArgumentError("The input sequence must not be empty.")

    mid = n // 2
    if n % 2:
        return ordered[mid]
    if numeric is not None:
        return numeric.average(ordered[mid - 1], ordered[mid])
    return (ordered[mid - 1] + ordered[mid]) / 2
