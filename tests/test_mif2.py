import numpy as np
import pytest

from pompkit.arrays import LabeledArray
from pompkit.mif2 import randwalk_perturbation


@pytest.fixture
def params():
    data = np.vstack([np.full(2000, 1.0), np.full(2000, 5.0), np.full(2000, -2.0)])
    return LabeledArray(data, ("a", "b", "c"))


def test_only_named_rows_change(params):
    out = randwalk_perturbation(params, {"b": 0.5}, np.random.default_rng(1))
    np.testing.assert_array_equal(out.data[0], params.data[0])
    np.testing.assert_array_equal(out.data[2], params.data[2])
    assert np.all(out.data[1] != 5.0)
    assert out.rownames == ("a", "b", "c")


def test_spread_matches_sd(params):
    out = randwalk_perturbation(params, {"a": 2.0}, np.random.default_rng(2))
    assert abs(out.data[0].std() - 2.0) < 0.15
    assert abs(out.data[0].mean() - 1.0) < 0.15


def test_zero_sd_is_identity(params):
    out = randwalk_perturbation(params, {"a": 0.0, "c": 0.0}, np.random.default_rng(3))
    np.testing.assert_array_equal(out.data, params.data)


def test_input_not_modified(params):
    before = params.data.copy()
    randwalk_perturbation(params, {"a": 1.0}, np.random.default_rng(4))
    np.testing.assert_array_equal(params.data, before)


def test_reproducible(params):
    a = randwalk_perturbation(params, {"a": 1.0, "c": 0.3}, np.random.default_rng(9))
    b = randwalk_perturbation(params, {"a": 1.0, "c": 0.3}, np.random.default_rng(9))
    np.testing.assert_array_equal(a.data, b.data)


def test_unknown_parameter(params):
    with pytest.raises(ValueError, match="'z' not found among the parameters"):
        randwalk_perturbation(params, {"z": 1.0}, np.random.default_rng(0))