"""Tests for the numeric error policy."""

import math
import warnings

import pytest

from adcore import dual
from adcore.config import NumericConfig, get_config, use_config
from adcore.dual import Dual
from adcore.graph import Div, Log, Constant, Parameter


def test_default_propagates_silently():
    assert get_config().on_domain_error == "ignore"
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        y = dual.log(Dual(0.0, 1.0))
    assert y.real == -math.inf


def test_raise_policy_dual():
    with use_config(on_domain_error="raise"):
        with pytest.raises(FloatingPointError):
            dual.log(Dual(0.0, 1.0))
    # restored on exit
    assert get_config().on_domain_error == "ignore"
    assert math.isnan(dual.log(Dual(-1.0)).real)


def test_raise_policy_graph():
    n = Div(Constant(1.0), Constant(0.0))
    with use_config(on_domain_error="raise"):
        with pytest.raises(FloatingPointError):
            n.evaluate()


def test_warn_policy():
    with use_config(on_domain_error="warn"):
        with pytest.warns(RuntimeWarning):
            Log(Parameter(-1.0)).evaluate()


def test_constant_exponent_never_forms_log_under_raise():
    with use_config(on_domain_error="raise"):
        y = dual.pow(Dual(-2.0, 1.0), 2)
    assert y.dual == pytest.approx(-4.0)


def test_use_config_with_explicit_config():
    cfg = NumericConfig(fd_eps=1e-4)
    with use_config(cfg) as active:
        assert active is cfg
        assert get_config().fd_eps == 1e-4
    assert get_config().fd_eps == 1e-6


def test_invalid_config():
    with pytest.raises(ValueError):
        NumericConfig(on_domain_error="explode")
    with pytest.raises(ValueError):
        NumericConfig(fd_eps=0.0)


def test_add_sub_follow_default_policy():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        s = Dual(1e308, 0.0) + Dual(1e308, 0.0)
        d = Dual(math.inf) - Dual(math.inf)
    assert s.real == math.inf
    assert math.isnan(d.real)


def test_add_sub_raise_policy():
    with use_config(on_domain_error="raise"):
        with pytest.raises(FloatingPointError):
            Dual(1e308, 0.0) + Dual(1e308, 0.0)
        with pytest.raises(FloatingPointError):
            Dual(math.inf) - Dual(math.inf)
        with pytest.raises(FloatingPointError):
            1e308 - Dual(-1e308)
