import math
import sys
from decimal import Decimal

import pytest

from pyrollstat.core.domain.errors import ConfigurationError, InvalidArgumentError
from pyrollstat.core.services.engine import MovingMedian, RunningMedian
from pyrollstat.core.services.numeric import (
    DECIMAL,
    DECIMAL_RESOLUTION,
    FLOAT,
    numeric_for,
)
from pyrollstat.utils.median import median


def test_numeric_for_known_kinds():
    assert numeric_for("float") is FLOAT
    assert numeric_for("Decimal") is DECIMAL


@pytest.mark.parametrize("kind", ["int128", "", None])
def test_numeric_for_unknown_kind(kind):
    with pytest.raises(ConfigurationError):
        numeric_for(kind)


def test_float_arithmetic():
    assert FLOAT.coerce(3) == 3.0 and isinstance(FLOAT.coerce(3), float)
    assert FLOAT.is_nan(float("nan"))
    assert not FLOAT.is_nan(float("inf"))
    assert FLOAT.average(1, 2) == 1.5
    assert FLOAT.interpolate(10.0, 20.0, 0.25) == 12.5
    assert FLOAT.epsilon(0.0) == sys.float_info.min
    assert FLOAT.epsilon(100.0) == pytest.approx(1e-8)


def test_decimal_arithmetic():
    assert DECIMAL.coerce(0.1) == Decimal("0.1")
    assert DECIMAL.coerce("2.50") == Decimal("2.50")
    assert DECIMAL.is_nan(Decimal("NaN"))
    assert DECIMAL.average(Decimal("0.1"), Decimal("0.2")) == Decimal("0.15")
    assert DECIMAL.interpolate(Decimal(10), Decimal(20), 0.25) == Decimal("12.5")
    assert DECIMAL.epsilon(Decimal(0)) == DECIMAL_RESOLUTION
    assert DECIMAL.parse(" 1.25\n") == Decimal("1.25")


def test_decimal_engine_keeps_exact_values():
    engine = MovingMedian(4, numeric=DECIMAL)
    engine.add_values([Decimal("0.1"), Decimal("0.2"), 0.3])
    assert engine.get_median() == Decimal("0.2")

    engine.add_value("0.4")
    assert engine.get_median() == Decimal("0.25")
    assert isinstance(engine.get_median(), Decimal)

    engine.add_value(Decimal("0.5"))
    assert engine.minimum() == Decimal("0.2")
    assert engine.get_percentile(0.5) == Decimal("0.35")
    assert engine.get_percentile(Decimal("0.25")) == Decimal("0.275")


def test_decimal_engine_rejects_nan():
    engine = RunningMedian(numeric=DECIMAL)
    with pytest.raises(InvalidArgumentError):
        engine.add_value(Decimal("NaN"))
    with pytest.raises(InvalidArgumentError):
        engine.add_value(float("nan"))
    assert not engine.contains_values


def test_integer_inputs_in_float_engine():
    engine = RunningMedian()
    engine.add_values([1, 2])
    assert engine.get_median() == 1.5
    assert all(isinstance(v, float) for v in engine)


def test_float_engine_rejects_out_of_range_integers():
    engine = RunningMedian()
    with pytest.raises(InvalidArgumentError):
        engine.add_value(10 ** 400)
    assert not engine.contains_values
    with pytest.raises(InvalidArgumentError):
        FLOAT.coerce(-(10 ** 400))


@pytest.mark.parametrize(
    "values, expected",
    [([1, 3, 2], 2), ([1, 4, 3, 5, 7, 23, 2, 1, 9, 3], 3.5), ([7], 7), ([2, 1], 1.5)],
)
def test_median_helper(values, expected):
    assert median(values) == expected


def test_median_helper_sorted_input_is_not_resorted():
    # is_sorted trusts the caller, the middle element is taken as is
    assert median([3, 1, 2], is_sorted=True) == 1


def test_median_helper_decimal():
    assert median([Decimal("1.1"), Decimal("1.2")], numeric=DECIMAL) == Decimal("1.15")


def test_median_helper_empty():
    with pytest.raises(InvalidArgumentError):
        median([])
    with pytest.raises(ValueError):
        median(iter(()))


def test_median_helper_generator():
    assert math.isclose(median(x / 10 for x in range(5)), 0.2)
