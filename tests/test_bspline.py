import numpy as np
import pytest

from pompkit.bspline import (
    bspline_basis,
    bspline_basis_eval,
    periodic_bspline_basis,
    periodic_bspline_basis_eval,
)


def test_partition_of_unity():
    x = np.linspace(0, 1, 41)
    b = bspline_basis(x, nbasis=7, degree=3)
    assert b.shape == (41, 7)
    assert np.allclose(b.sum(axis=1), 1.0)
    assert (b >= -1e-12).all()


def test_derivative_of_sum_is_zero():
    x = np.linspace(0, 1, 25)
    d = bspline_basis(x, nbasis=6, degree=3, deriv=1)
    assert np.allclose(d.sum(axis=1), 0.0, atol=1e-9)


def test_degree_zero_is_indicator():
    b = bspline_basis([0.5, 1.5, 2.5, 3.5], nbasis=4, degree=0, rg=(0, 4))
    assert np.array_equal(b, np.eye(4))


def test_derivative_matches_finite_difference():
    x = np.array([0.1, 0.45, 0.8])
    h = 1e-6
    d = bspline_basis(x, nbasis=6, degree=3, deriv=1, rg=(0, 1))
    up = bspline_basis(x + h, nbasis=6, degree=3, rg=(0, 1))
    down = bspline_basis(x - h, nbasis=6, degree=3, rg=(0, 1))
    assert np.allclose(d, (up - down) / (2 * h), atol=1e-4)


def test_derivative_beyond_degree_is_zero():
    b = bspline_basis(np.linspace(0, 1, 5), nbasis=5, degree=2, deriv=3)
    assert np.array_equal(b, np.zeros((5, 5)))


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(nbasis=3, degree=3),
        dict(nbasis=5, degree=-1),
        dict(nbasis=5, degree=3, deriv=-1),
        dict(nbasis=5, degree=3, rg=(1, 1)),
    ],
)
def test_bspline_errors(kwargs):
    with pytest.raises(ValueError):
        bspline_basis([0.0, 0.5, 1.0], **kwargs)


def test_eval_matches_basis_row():
    nbasis, degree = 5, 3
    dx = 1.0 / (nbasis - degree)
    knots = -degree * dx + dx * np.arange(nbasis + degree + 1)
    row = bspline_basis_eval(0.3, knots, degree, nbasis, 0)
    full = bspline_basis([0.3], nbasis=nbasis, degree=degree, rg=(0, 1))
    assert np.allclose(row, full[0])


def test_eval_needs_enough_knots():
    with pytest.raises(ValueError):
        bspline_basis_eval(0.5, [0, 1, 2], 3, 5, 0)


def test_periodic_partition_of_unity():
    x = np.linspace(-2, 3, 51)
    b = periodic_bspline_basis(x, nbasis=6, degree=3, period=1.0)
    assert b.shape == (51, 6)
    assert np.allclose(b.sum(axis=1), 1.0)


def test_periodic_is_periodic():
    x = np.array([0.1, 0.37, 0.9])
    a = periodic_bspline_basis(x, nbasis=5, degree=2, period=2.0)
    b = periodic_bspline_basis(x + 2.0, nbasis=5, degree=2, period=2.0)
    c = periodic_bspline_basis(x - 4.0, nbasis=5, degree=2, period=2.0)
    assert np.allclose(a, b)
    assert np.allclose(a, c)


def test_periodic_eval_matches_matrix_row():
    row = periodic_bspline_basis_eval(0.42, 1.0, 3, 7, 1)
    full = periodic_bspline_basis([0.42], nbasis=7, degree=3, period=1.0, deriv=1)
    assert np.allclose(row, full[0])


@pytest.mark.parametrize(
    "args",
    [(0.0, 3, 5, 0), (1.0, 3, 0, 0), (1.0, -1, 5, 0), (1.0, 4, 3, 0), (1.0, 3, 5, -1)],
)
def test_periodic_errors(args):
    period, degree, nbasis, deriv = args
    with pytest.raises(ValueError):
        periodic_bspline_basis_eval(0.2, period, degree, nbasis, deriv)