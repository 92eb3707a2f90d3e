"""Tests for the forward-mode gradient driver and the finite-difference checker."""

import numpy as np
import pytest
from hypothesis import given, strategies as st

from adcore import dual
from adcore.dual import Dual, MINUS
from adcore.gradient import gradient, value_and_gradient, directional_derivative
from adcore.gradcheck import check_gradient, fd_gradient


def sum_of_squares(xs):
    two = Dual(2.0)
    return dual.pow(xs[0], two) + dual.pow(xs[1], two) + dual.pow(xs[2], two)


def nested(xs):
    x, y, z = xs
    return ((x + y) * z + dual.log(x * dual.pow(x, y))
            + dual.exp(dual.sin(x) + dual.cos(y) + dual.tan(z))
            + dual.asin(dual.acos(dual.atan(x + y + z)))
            + dual.pow(x, dual.sin(y)))


def smooth_l1(ws, xs, ys):
    s = Dual(0.0)
    for w, x, y in zip(ws, xs, ys):
        s = s + w * x - y
    return dual.log(dual.exp(s) + dual.exp(MINUS * s))


class TestGradientDriver:

    def test_sum_of_squares(self):
        g = gradient(sum_of_squares, [0.5, 0.1, 0.6])
        np.testing.assert_allclose(g, [1.0, 0.2, 1.2], rtol=1e-12)

    def test_returns_array_of_input_length(self):
        g = gradient(nested, [0.5, 0.1, 0.6])
        assert isinstance(g, np.ndarray)
        assert g.shape == (3,)

    def test_empty_input(self):
        g = gradient(lambda xs: Dual(1.0), [])
        assert g.shape == (0,)

    def test_idempotent(self):
        x = [0.5, 0.1, 0.6]
        first = gradient(nested, x)
        second = gradient(nested, x)
        np.testing.assert_array_equal(first, second)

    def test_input_not_mutated(self):
        x = np.array([0.5, 0.1, 0.6])
        gradient(nested, x)
        np.testing.assert_array_equal(x, [0.5, 0.1, 0.6])

    def test_only_one_seed_active_per_sweep(self):
        seen = []

        def f(xs):
            seen.append([float(v.dual) for v in xs])
            return xs[0] + xs[1]

        gradient(f, [1.0, 2.0])
        assert seen == [[1.0, 0.0], [0.0, 1.0]]

    def test_plain_number_output_is_constant(self):
        g = gradient(lambda xs: 3.0, [1.0, 2.0])
        np.testing.assert_array_equal(g, [0.0, 0.0])

    def test_bad_output_type(self):
        with pytest.raises(TypeError):
            gradient(lambda xs: "nope", [1.0])

    def test_closure_over_data(self):
        xs = [Dual(0.5), Dual(-0.2), Dual(0.3)]
        ys = [Dual(0.1), Dual(0.0), Dual(0.2)]
        w = [1.0, 2.0, 3.0]
        g = gradient(lambda ws: smooth_l1(ws, xs, ys), w)
        s = sum(wi * float(x.real) - float(y.real) for wi, x, y in zip(w, xs, ys))
        expected = np.tanh(s) * np.array([0.5, -0.2, 0.3])
        np.testing.assert_allclose(g, expected, rtol=1e-10)

    @given(st.lists(st.floats(min_value=-5.0, max_value=5.0), min_size=1, max_size=6))
    def test_linear_function_gradient_is_coefficients(self, x):
        coeffs = np.arange(1.0, len(x) + 1.0)

        def f(xs):
            out = Dual(0.0)
            for c, v in zip(coeffs, xs):
                out = out + c * v
            return out

        np.testing.assert_allclose(gradient(f, x), coeffs)


class TestValueAndDirectional:

    def test_value_and_gradient(self):
        val, g = value_and_gradient(sum_of_squares, [0.5, 0.1, 0.6])
        assert val == pytest.approx(0.25 + 0.01 + 0.36)
        np.testing.assert_allclose(g, [1.0, 0.2, 1.2])

    def test_value_and_gradient_empty(self):
        val, g = value_and_gradient(lambda xs: Dual(4.0), [])
        assert val == 4.0
        assert g.shape == (0,)

    def test_directional_derivative_matches_gradient_dot(self):
        x = [0.5, 0.1, 0.6]
        v = [0.3, -1.0, 2.0]
        expected = float(np.dot(gradient(nested, x), v))
        assert directional_derivative(nested, x, v) == pytest.approx(expected, rel=1e-12)

    def test_directional_derivative_shape_mismatch(self):
        with pytest.raises(ValueError):
            directional_derivative(nested, [0.5, 0.1, 0.6], [1.0])


class TestGradCheck:

    def test_nested_agrees_with_finite_differences(self):
        ok, ad, fd = check_gradient(nested, [0.5, 0.1, 0.6], rtol=1e-6, atol=1e-7)
        assert ok, (ad, fd)

    def test_detects_wrong_derivative(self):
        def broken(xs):
            # value x^2 with derivative forced to 0
            return Dual(float((xs[0] * xs[0]).real), 0.0)

        ok, ad, fd = check_gradient(broken, [1.5])
        assert not ok
        assert ad[0] == 0.0
        assert fd[0] == pytest.approx(3.0, rel=1e-6)

    def test_fd_gradient_plain_function(self):
        g = fd_gradient(lambda v: v[0] * v[1], [3.0, 4.0])
        np.testing.assert_allclose(g, [4.0, 3.0], rtol=1e-8)
