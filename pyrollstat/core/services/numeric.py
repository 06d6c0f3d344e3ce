import math
import sys
from decimal import Decimal
from typing import Any, Dict

from pyrollstat.core.domain.errors import ConfigurationError, InvalidArgumentError
from pyrollstat.core.ports.numeric import NumericPort

# smallest step a 28 digit decimal can resolve
DECIMAL_RESOLUTION = Decimal("1E-28")


class FloatArithmetic(NumericPort[float]):
    name = "float"

    def coerce(self, x: Any) -> float:
        try:
            return float(x)
        except OverflowError:
            raise InvalidArgumentError(f"Value {x!r} is out of float range") from None

    def is_nan(self, value: float) -> bool:
        return math.isnan(value)

    def is_finite(self, value: float) -> bool:
        return math.isfinite(value)

    def smallest_positive(self) -> float:
        return sys.float_info.min


class DecimalArithmetic(NumericPort[Decimal]):
    name = "decimal"

    def coerce(self, x: Any) -> Decimal:
        if isinstance(x, Decimal):
            return x
        if isinstance(x, float):
            # go through repr so 0.1 stays 0.1 instead of its binary expansion
            return Decimal(repr(x))
        return Decimal(x)

    def is_nan(self, value: Decimal) -> bool:
        return value.is_nan()

    def is_finite(self, value: Decimal) -> bool:
        return value.is_finite()

    def smallest_positive(self) -> Decimal:
        return DECIMAL_RESOLUTION


FLOAT = FloatArithmetic()
DECIMAL = DecimalArithmetic()

NUMERIC_KINDS: Dict[str, NumericPort] = {
    FLOAT.name: FLOAT,
    DECIMAL.name: DECIMAL,
}


def numeric_for(kind: str) -> NumericPort:
    try:
        return NUMERIC_KINDS[kind.lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(
            f"Unknown numeric kind: {kind!r}, expected one of {sorted(NUMERIC_KINDS)}"
        ) from None
