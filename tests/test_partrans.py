import math

import numpy as np
import pytest

from pompkit.arrays import LabeledArray
from pompkit.partrans import Direction, partrans
from pompkit.pompfun import FunMode, Pomp, PompFun


def to_log(a, b, **_):
    return {"a": math.log(a)}


def from_log(a, b, **_):
    return {"a": math.exp(a)}


@pytest.fixture
def model():
    return Pomp(partrans_to=PompFun(to_log), partrans_from=PompFun(from_log))


def test_vector_to_estimation_scale(model):
    est = partrans(model, {"a": math.e, "b": 5.0}, Direction.TO)
    assert est.rownames == ("a", "b")
    assert est.ndim == 1
    np.testing.assert_allclose(est.data, [1.0, 5.0])


def test_round_trip(model):
    original = {"a": 2.5, "b": -1.0}
    back = partrans(model, partrans(model, original, "to"), "from")
    np.testing.assert_allclose(back.data, list(original.values()))
    assert back.rownames == ("a", "b")


def test_matrix_input_gives_matrix(model):
    params = LabeledArray([[1.0, math.e], [2.0, 3.0]], ("a", "b"))
    est = partrans(model, params, Direction.TO)
    assert est.shape == (2, 2)
    np.testing.assert_allclose(est.data[0], np.log(params.data[0]))
    np.testing.assert_allclose(est.data[1], params.data[1])


def test_input_left_unchanged(model):
    params = LabeledArray([[2.0, 4.0], [1.0, 1.0]], ("a", "b"))
    partrans(model, params, Direction.TO)
    np.testing.assert_array_equal(params.data, [[2.0, 4.0], [1.0, 1.0]])


def test_undefined_is_identity():
    params = LabeledArray([[2.0, 4.0], [1.0, 1.0]], ("a", "b"))
    out = partrans(Pomp(), params, Direction.FROM)
    np.testing.assert_array_equal(out.data, params.data)


def test_userdata_reaches_transformation():
    def scale(a, factor, **_):
        return {"a": a * factor}

    model = Pomp(userdata={"factor": 4.0}, partrans_to=PompFun(scale))
    out = partrans(model, {"a": 2.0}, "to")
    assert out.data[0] == pytest.approx(2.0 * 4.0)


def test_native_transformation():
    def double(p, idx):
        q = p.copy()
        q[idx[0]] *= 2
        return q

    model = Pomp(partrans_to=PompFun(double, FunMode.NATIVE, paramnames=("b",)))
    out = partrans(model, {"a": 1.0, "b": 3.0}, Direction.TO)
    np.testing.assert_allclose(out.data, [1.0, 6.0])


def test_native_wrong_length():
    model = Pomp(partrans_to=PompFun(lambda p, idx: p[:1], FunMode.NATIVE))
    with pytest.raises(ValueError, match="wrong length"):
        partrans(model, {"a": 1.0, "b": 3.0}, Direction.TO)


def test_unnamed_result():
    model = Pomp(partrans_to=PompFun(lambda a, **_: [a]))
    with pytest.raises(ValueError, match="named numeric vectors"):
        partrans(model, {"a": 1.0}, Direction.TO)


def test_unknown_name_in_result():
    model = Pomp(partrans_to=PompFun(lambda a, **_: {"z": a}))
    with pytest.raises(ValueError, match="not found among the parameters"):
        partrans(model, {"a": 1.0}, Direction.TO)


def test_invalid_direction(model):
    with pytest.raises(ValueError):
        partrans(model, {"a": 1.0, "b": 1.0}, "sideways")