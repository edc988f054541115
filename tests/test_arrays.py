import numpy as np
import pytest

from pompkit.arrays import (
    LabeledArray,
    as_matrix,
    as_state_array,
    make_array,
    match_names,
)


def test_make_array_filled_with_nan():
    a = make_array((2, 3), ["a", "b"])
    assert a.shape == (2, 3)
    assert np.isnan(a.data).all()
    assert a.rownames == ("a", "b")


def test_labeled_array_rejects_wrong_rowname_count():
    with pytest.raises(ValueError):
        LabeledArray(np.zeros((3, 2)), ("a", "b"))


def test_labeled_array_index_of():
    a = LabeledArray(np.zeros(3), ("x", "y", "z"))
    assert a.index_of("z") == 2
    with pytest.raises(KeyError):
        a.index_of("w")


def test_as_matrix_from_mapping():
    m = as_matrix({"a": 1.0, "b": 2.0, "c": 3.0})
    assert m.shape == (3, 1)
    assert m.rownames == ("a", "b", "c")
    assert m.data[:, 0].tolist() == [1.0, 2.0, 3.0]


def test_as_matrix_keeps_matrix():
    x = np.arange(6.0).reshape(2, 3)
    m = as_matrix(LabeledArray(x, ("u", "v")))
    assert np.array_equal(m.data, x)
    assert m.rownames == ("u", "v")


def test_as_matrix_collapses_trailing_dims_column_major():
    x = np.arange(24.0).reshape(2, 3, 4)
    m = as_matrix(x)
    assert m.shape == (2, 12)
    for j in range(3):
        for k in range(4):
            assert np.array_equal(m.data[:, j + 3 * k], x[:, j, k])


def test_as_state_array_from_vector():
    s = as_state_array({"X": 5.0, "Y": 6.0})
    assert s.shape == (2, 1, 1)
    assert s.rownames == ("X", "Y")
    assert s.data[1, 0, 0] == 6.0


def test_as_state_array_from_matrix():
    x = np.arange(8.0).reshape(2, 4)
    s = as_state_array(x)
    assert s.shape == (2, 1, 4)
    assert np.array_equal(s.data[:, 0, :], x)


def test_as_state_array_from_rank_four():
    x = np.arange(48.0).reshape(2, 3, 4, 2)
    s = as_state_array(x)
    assert s.shape == (2, 3, 8)
    assert np.array_equal(s.data[:, :, 4 + 1], x[:, :, 1, 1])


def test_match_names_positions():
    assert match_names(["a", "b", "c"], ["c", "a"], "parameters") == [2, 0]


def test_match_names_missing():
    with pytest.raises(ValueError, match="'q' not found among the parameters"):
        match_names(["a", "b"], ["q"], "parameters")


def test_match_names_invalid_provided():
    with pytest.raises(ValueError, match="invalid variable names"):
        match_names(None, ["a"], "state variables")