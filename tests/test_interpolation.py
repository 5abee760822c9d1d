import math

import numpy as np
import pytest

from ficcore.errors import DomainError, ExtrapolationError, InvalidArgumentError
from ficcore.interpolation import (
    BackwardFlat,
    ForwardFlat,
    Linear,
    LogLinear,
    create_interpolator,
)


# ----------------------------------------------------------------------
# Linear
# ----------------------------------------------------------------------
def test_linear_values():
    f = Linear().interpolate([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    assert f(1.0) == pytest.approx(1.0)
    assert f(1.5) == pytest.approx(2.5)
    assert f(2.5) == pytest.approx(6.5)
    assert f(3.0) == pytest.approx(9.0)


def test_linear_extrapolation():
    f = Linear().interpolate([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    with pytest.raises(ExtrapolationError):
        f(4.0)
    assert f(4.0, True) == pytest.approx(14.0)
    assert f.value(0.0, allow_extrapolation=True) == pytest.approx(-2.0)
    f.enable_extrapolation()
    assert f(4.0) == pytest.approx(14.0)


def test_linear_primitive_and_derivative():
    f = Linear().interpolate([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    assert f.primitive(1.0) == pytest.approx(0.0)
    assert f.primitive(2.0) == pytest.approx(2.5)
    assert f.primitive(3.0) == pytest.approx(9.0)
    assert f.derivative(1.5) == pytest.approx(3.0)
    assert f.derivative(2.5) == pytest.approx(5.0)


def test_update_after_moving_a_node():
    x = np.array([1.0, 2.0, 3.0])
    y = np.array([1.0, 4.0, 9.0])
    f = Linear().interpolate(x, y)
    y[1] = 5.0
    f.update()
    assert f(1.5) == pytest.approx(3.0)
    assert f(2.5) == pytest.approx(7.0)


# ----------------------------------------------------------------------
# Log-linear
# ----------------------------------------------------------------------
def test_log_linear():
    y = [1.0, math.exp(-0.1), math.exp(-0.3)]
    f = LogLinear().interpolate([0.0, 1.0, 2.0], y)
    assert f(0.5) == pytest.approx(math.exp(-0.05))
    assert f(1.5) == pytest.approx(math.exp(-0.2))
    assert f.primitive(1.0) == pytest.approx((1.0 - math.exp(-0.1)) / 0.1)
    assert f.derivative(0.5) == pytest.approx(-0.1 * math.exp(-0.05))


def test_log_linear_flat_segment():
    f = LogLinear().interpolate([0.0, 1.0, 2.0], [2.0, 2.0, 1.0])
    assert f(0.5) == pytest.approx(2.0)
    assert f.primitive(1.0) == pytest.approx(2.0)


def test_log_linear_rejects_non_positive_values():
    with pytest.raises(DomainError):
        LogLinear().interpolate([0.0, 1.0], [1.0, 0.0])
    with pytest.raises(DomainError):
        LogLinear().interpolate([0.0, 1.0], [1.0, -0.5])


# ----------------------------------------------------------------------
# Step functions
# ----------------------------------------------------------------------
def test_backward_flat():
    f = BackwardFlat().interpolate([0.0, 1.0, 2.0], [5.0, 1.0, 2.0])
    assert f(0.0) == 5.0
    assert f(0.5) == 1.0
    assert f(1.0) == 1.0
    assert f(1.5) == 2.0
    assert f(2.0) == 2.0
    assert f(3.0, True) == 2.0
    assert f(-1.0, True) == 5.0
    assert f.primitive(1.5) == pytest.approx(2.0)
    assert f.derivative(0.5) == 0.0


def test_forward_flat():
    f = ForwardFlat().interpolate([0.0, 1.0, 2.0], [5.0, 1.0, 2.0])
    assert f(0.0) == 5.0
    assert f(0.5) == 5.0
    assert f(1.0) == 1.0
    assert f(1.5) == 1.0
    assert f(2.0) == 2.0
    assert f(3.0, True) == 2.0
    assert f.primitive(1.5) == pytest.approx(5.5)


# ----------------------------------------------------------------------
# Validation and registry
# ----------------------------------------------------------------------
@pytest.mark.parametrize("interpolator", [Linear(), LogLinear(), BackwardFlat(), ForwardFlat()])
def test_node_validation(interpolator):
    with pytest.raises(InvalidArgumentError):
        interpolator.interpolate([0.0, 1.0, 1.0], [1.0, 1.0, 1.0])
    with pytest.raises(InvalidArgumentError):
        interpolator.interpolate([0.0, 1.0], [1.0, 1.0, 1.0])
    with pytest.raises(InvalidArgumentError):
        interpolator.interpolate([0.0], [1.0])


def test_range_inspectors():
    f = Linear().interpolate([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    assert f.x_min == 1.0
    assert f.x_max == 3.0
    assert f.is_in_range(3.0)
    assert not f.is_in_range(3.1)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("linear", Linear),
        ("LOGLINEAR", LogLinear),
        ("log-linear", LogLinear),
        ("BACKWARD_FLAT", BackwardFlat),
        ("piecewise_constant", ForwardFlat),
    ],
)
def test_create_interpolator(name, expected):
    assert isinstance(create_interpolator(name), expected)


def test_create_interpolator_unknown():
    with pytest.raises(InvalidArgumentError, match="Unknown interpolation method"):
        create_interpolator("CUBIC")
