import numpy as np
import pytest

from pompkit.probe_marginal import probe_marginal_setup, probe_marginal_solve


@pytest.fixture
def ref():
    return np.random.default_rng(1).normal(size=40)


def test_setup_dimensions(ref):
    setup = probe_marginal_setup(ref, order=3, diff=1)
    assert setup.q.shape == (39, 3)
    assert setup.r.shape == (3, 3)
    assert sorted(setup.pivot.tolist()) == [0, 1, 2]


def test_reference_against_itself(ref):
    setup = probe_marginal_setup(ref, order=3, diff=1)
    beta = probe_marginal_solve(ref, setup, diff=1)
    np.testing.assert_allclose(beta.data, [1.0, 0.0, 0.0], atol=1e-8)


def test_scaled_and_shifted_data(ref):
    setup = probe_marginal_setup(ref, order=3, diff=0)
    beta = probe_marginal_solve(3.0 * ref + 7.0, setup, diff=0)
    np.testing.assert_allclose(beta.data, [3.0, 0.0, 0.0], atol=1e-8)


def test_order_of_data_irrelevant(ref):
    setup = probe_marginal_setup(ref, order=2, diff=0)
    data = np.random.default_rng(2).normal(size=40)
    shuffled = np.random.default_rng(3).permutation(data)
    a = probe_marginal_solve(data, setup, diff=0)
    b = probe_marginal_solve(shuffled, setup, diff=0)
    np.testing.assert_allclose(a.data, b.data)


def test_names(ref):
    setup = probe_marginal_setup(ref, order=3, diff=1)
    beta = probe_marginal_solve(ref, setup, diff=1)
    assert beta.rownames == ("marg.1", "marg.2", "marg.3")


def test_length_mismatch(ref):
    setup = probe_marginal_setup(ref, order=3, diff=1)
    with pytest.raises(ValueError, match="length of 'ref'"):
        probe_marginal_solve(ref[:-1], setup, diff=1)


def test_diff_too_large():
    with pytest.raises(ValueError, match="diff <"):
        probe_marginal_setup([1.0, 2.0, 3.0], order=1, diff=3)