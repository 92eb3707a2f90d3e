"""
Central finite-difference ("bumping") reference for AD gradients.

Formulas:
    df/dx_i ≈ [f(x + ε e_i) - f(x - ε e_i)] / (2ε)

Used to validate the dual-number driver; costs 2n evaluations of f.
"""

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .config import get_config
from .dual import Dual
from .gradient import gradient, DualFunction


def central_difference(f: Callable[[np.ndarray], float], x: Sequence[float], i: int,
                       eps: Optional[float] = None) -> float:
    """Centered difference of a plain-float function along coordinate i."""
    eps = get_config().fd_eps if eps is None else eps
    xp = np.array(x, dtype=np.float64)
    xm = xp.copy()
    xp[i] += eps
    xm[i] -= eps
    return float((f(xp) - f(xm)) / (2.0 * eps))


def fd_gradient(f: Callable[[np.ndarray], float], x: Sequence[float],
                eps: Optional[float] = None) -> np.ndarray:
    n = len(x)
    return np.array([central_difference(f, x, i, eps) for i in range(n)], dtype=np.float64)


def check_gradient(f: DualFunction, x: Sequence[float], eps: Optional[float] = None,
                   rtol: Optional[float] = None,
                   atol: Optional[float] = None) -> Tuple[bool, np.ndarray, np.ndarray]:
    """
    Compare the forward-mode gradient of f against central differences of its
    primal value.

    Returns:
        (ok, ad_grad, fd_grad)
    """
    cfg = get_config()
    rtol = cfg.fd_rtol if rtol is None else rtol
    atol = cfg.fd_atol if atol is None else atol

    def primal(xv: np.ndarray) -> float:
        y = f([Dual(float(v)) for v in xv])
        return float(y.real) if isinstance(y, Dual) else float(y)

    ad_grad = gradient(f, x)
    fd_grad = fd_gradient(primal, x, eps)
    ok = bool(np.allclose(ad_grad, fd_grad, rtol=rtol, atol=atol))
    return ok, ad_grad, fd_grad
