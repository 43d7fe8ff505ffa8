import numpy as np
import pytest

from animator.core.interpolation import lerp, lerp_angle, lerp_array, lerp_tuple, step_at


def test_lerp_numbers():
    assert lerp(10.0, 20.0, 0.25) == 12.5
    assert lerp(10.0, 20.0, 1.5) == 25.0


def test_lerp_tuple_blends_componentwise():
    assert lerp_tuple((0, 0, 255), (255, 0, 0), 0.5) == (127.5, 0.0, 127.5)


def test_lerp_tuple_rejects_length_mismatch():
    with pytest.raises(ValueError):
        lerp_tuple((0, 0), (1, 1, 1), 0.5)


def test_lerp_array_returns_numpy_array():
    result = lerp_array([0.0, 2.0], np.array([4.0, 6.0]), 0.5)
    assert isinstance(result, np.ndarray)
    np.testing.assert_allclose(result, [2.0, 4.0])


def test_lerp_array_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        lerp_array([0.0, 1.0], [0.0, 1.0, 2.0], 0.5)


def test_lerp_angle_takes_shortest_arc():
    assert lerp_angle(350.0, 10.0, 0.5) == pytest.approx(360.0)
    assert lerp_angle(10.0, 350.0, 0.5) == pytest.approx(0.0)


def test_step_at_switches_on_threshold():
    step = step_at(0.5)
    assert step("off", "on", 0.49) == "off"
    assert step("off", "on", 0.5) == "on"
