import math

import numpy as np

from pompkit.logmeanexp import logmeanexp


def test_constant_values():
    assert logmeanexp([-3.5, -3.5, -3.5]) == -3.5


def test_mean_of_exponentials():
    assert math.isclose(logmeanexp(np.log([1.0, 2.0, 3.0])), math.log(2.0))


def test_no_overflow_for_large_values():
    assert math.isclose(logmeanexp([1000.0, 1000.0]), 1000.0)


def test_drop_element():
    x = np.log([1.0, 2.0, 3.0, 100.0])
    assert math.isclose(logmeanexp(x, drop=3), math.log(2.0))


def test_drop_out_of_range_is_ignored():
    x = [0.1, 0.7, -2.0]
    assert logmeanexp(x, drop=10) == logmeanexp(x)
    assert logmeanexp(x, drop=-1) == logmeanexp(x)


def test_bounded_by_max():
    x = [0.2, -5.0, 3.1, 1.0]
    v = logmeanexp(x)
    assert max(x) - math.log(len(x)) <= v <= max(x)


def test_empty_is_nan():
    result = logmeanexp([])
    np.testing.assert_equal(result, np.nan)