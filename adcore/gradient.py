# adcore/gradient.py

#-----------------------------------------------------------------------------
# Forward-mode gradient driver: one sweep of f per input dimension, seeding
# exactly one dual component (dx_i = 1) at a time.
#-----------------------------------------------------------------------------
from __future__ import annotations
import numbers
from typing import Callable, List, Sequence, Tuple

import numpy as np

from .dual import Dual

DualFunction = Callable[[List[Dual]], Dual]


def _as_output(y) -> Dual:
    """f may return a plain number; treat it as a constant."""
    if isinstance(y, Dual):
        return y
    if isinstance(y, numbers.Real):
        return Dual(y)
    raise TypeError(f"gradient expects f to return a Dual, got {type(y)}")


def _seed_vector(x: Sequence[float]) -> List[Dual]:
    return [Dual(float(xi), 0.0) for xi in np.asarray(x, dtype=np.float64).ravel()]


def gradient(f: DualFunction, x: Sequence[float]) -> np.ndarray:
    """
    Gradient of a scalar function y = f(xs) at x via forward-mode dual numbers.

    Cost is n evaluations of f (one per component); use the expression graph
    `backwards` sweep when n is large.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    gradient(f, [2.0, 4.0]) -> array([4., 3.])
    """
    dx = _seed_vector(x)
    grad = np.zeros(len(dx), dtype=np.float64)
    for i in range(len(dx)):
        dx[i] = Dual(dx[i].real, 1.0)
        grad[i] = _as_output(f(dx)).dual
        dx[i] = Dual(dx[i].real, 0.0)
    return grad


def value_and_gradient(f: DualFunction, x: Sequence[float]) -> Tuple[float, np.ndarray]:
    """Same as gradient(), also returning f(x). The value is taken from the first sweep."""
    dx = _seed_vector(x)
    if not dx:
        return float(_as_output(f(dx)).real), np.zeros(0, dtype=np.float64)
    grad = np.zeros(len(dx), dtype=np.float64)
    val = None
    for i in range(len(dx)):
        dx[i] = Dual(dx[i].real, 1.0)
        y = _as_output(f(dx))
        dx[i] = Dual(dx[i].real, 0.0)
        if val is None:
            val = float(y.real)
        grad[i] = y.dual
    return val, grad


def directional_derivative(f: DualFunction, x: Sequence[float], v: Sequence[float]) -> float:
    """grad f(x) . v in a single forward sweep."""
    xs = np.asarray(x, dtype=np.float64).ravel()
    vs = np.asarray(v, dtype=np.float64).ravel()
    if xs.shape != vs.shape:
        raise ValueError(f"direction has shape {vs.shape}, expected {xs.shape}")
    dx = [Dual(float(xi), float(vi)) for xi, vi in zip(xs, vs)]
    return float(_as_output(f(dx)).dual)
