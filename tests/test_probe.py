import numpy as np
import pytest

from pompkit.arrays import LabeledArray
from pompkit.probe import apply_probe_data


@pytest.fixture
def data():
    return np.array([[1.0, 2.0, 3.0, 4.0], [2.0, 2.0, 2.0, 2.0]])


def test_values_concatenated(data):
    probes = {
        "mean": lambda d: float(np.mean(d[0])),
        "rows": lambda d: d.sum(axis=1),
    }
    out = apply_probe_data(data, probes)
    np.testing.assert_allclose(out.data, [2.5, 10.0, 8.0])


def test_naming_rules(data):
    probes = {
        "m": lambda d: 1.0,
        "q": lambda d: {"a": 1.0, "b": 2.0},
        "v": lambda d: [1.0, 2.0],
        "l": lambda d: LabeledArray([3.0], ("x",)),
    }
    out = apply_probe_data(data, probes)
    assert out.rownames == ("m", "q.a", "q.b", "v1", "v2", "l.x")


def test_unnamed_probes_keep_inner_names(data):
    out = apply_probe_data(data, [lambda d: {"a": 5.0}, lambda d: 1.0])
    assert out.rownames == ("a", "")
    assert out.data.tolist() == [5.0, 1.0]


def test_non_numeric_result(data):
    with pytest.raises(TypeError, match="probe 2"):
        apply_probe_data(data, {"ok": lambda d: 1.0, "bad": lambda d: "text"})


def test_boolean_result_rejected(data):
    with pytest.raises(TypeError):
        apply_probe_data(data, {"flag": lambda d: True})


def test_probe_sees_data(data):
    seen = []
    apply_probe_data(data, {"p": lambda d: seen.append(d) or 0.0})
    assert seen[0] is data