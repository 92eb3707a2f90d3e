# adcore/dual.py
# Forward-mode dual-number engine (independent from the expression graph)

from __future__ import annotations
import numbers
import numpy as np

from .config import numeric_context


class Dual:
    """
    First-order dual number:
    v = real + dual * eps,  eps^2 = 0
    real = primal value
    dual = directional derivative along the implicit seed direction

    Domain violations (x/0, log of x<=0, asin outside [-1, 1], ...) follow
    IEEE semantics and produce NaN/Inf unless the active NumericConfig says
    otherwise.
    """
    __slots__ = ("real", "dual")
    __array_ufunc__ = None  # numpy scalars defer to Dual.__r*__ instead of wrapping us

    def __init__(self, real=0.0, dual=0.0):
        if not isinstance(real, numbers.Real) or not isinstance(dual, numbers.Real):
            raise TypeError(
                f"Dual only accepts real numeric components, got {type(real)} and {type(dual)}"
            )
        self.real = np.float64(real)
        self.dual = np.float64(dual)

    def __repr__(self):
        return f"Dual({float(self.real)!r}, {float(self.dual)!r})"

    def __iter__(self):
        yield self.real
        yield self.dual

    def __eq__(a, b):
        if not isinstance(b, Dual):
            if isinstance(b, numbers.Real):
                b = Dual(b)
            else:
                return NotImplemented
        return bool(a.real == b.real and a.dual == b.dual)

    __hash__ = None

    def __add__(a, b):
        b = _as_dual(b)
        if b is NotImplemented:
            return b
        with numeric_context():
            return Dual(a.real + b.real, a.dual + b.dual)
    __radd__ = __add__

    def __sub__(a, b):
        b = _as_dual(b)
        if b is NotImplemented:
            return b
        with numeric_context():
            return Dual(a.real - b.real, a.dual - b.dual)

    def __rsub__(b, a):
        a = _as_dual(a)
        if a is NotImplemented:
            return a
        with numeric_context():
            return Dual(a.real - b.real, a.dual - b.dual)

    def __mul__(a, b):
        b = _as_dual(b)
        if b is NotImplemented:
            return b
        with numeric_context():
            return Dual(a.real * b.real, a.real * b.dual + a.dual * b.real)
    __rmul__ = __mul__

    def __truediv__(a, b):
        b = _as_dual(b)
        if b is NotImplemented:
            return b
        with numeric_context():
            return Dual(a.real / b.real,
                        (a.dual * b.real - a.real * b.dual) / (b.real * b.real))

    def __rtruediv__(b, a):
        a = _as_dual(a)
        if a is NotImplemented:
            return a
        return a.__truediv__(b)

    def __pow__(a, b):
        return pow(a, b)

    def __rpow__(b, a):
        return pow(a, b)

    def __neg__(a):
        with numeric_context():
            return Dual(-a.real, -a.dual)

    def __pos__(a):
        return a


def _as_dual(x):
    """Promote plain numbers to constant duals; leave unknown types to Python."""
    if isinstance(x, Dual):
        return x
    if isinstance(x, numbers.Real):
        return Dual(x)
    return NotImplemented


def _ensure(x) -> Dual:
    d = _as_dual(x)
    if d is NotImplemented:
        raise TypeError(f"expected Dual or real number, got {type(x)}")
    return d


ZERO = Dual(0.0, 0.0)
ONE = Dual(1.0, 0.0)
MINUS = Dual(-1.0, 0.0)


# ----- Elementary functions -----
def neg(a) -> Dual:
    return -_ensure(a)


def _chain(da, local) -> np.float64:
    """
    da * local(); a constant argument (da == 0) yields 0 without evaluating the
    local derivative, which may be Inf/NaN on a domain edge (sqrt(0), asin(1)).
    """
    if da == 0:
        return np.float64(0.0)
    return da * local()


def log(a) -> Dual:
    """Natural logarithm: (ln a, a'/a)."""
    a = _ensure(a)
    with numeric_context():
        return Dual(np.log(a.real), _chain(a.dual, lambda: 1.0 / a.real))


def exp(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        e = np.exp(a.real)
        return Dual(e, _chain(a.dual, lambda: e))


def sqrt(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        r = np.sqrt(a.real)
        return Dual(r, _chain(a.dual, lambda: 0.5 / r))


def pow(a, b) -> Dual:
    """
    Generalised power a^b.

    d(a^b) = b * a^(b-1) * a' + a^b * ln(a) * b'

    which equals a^b * (b' ln a + b a'/a) for a > 0. The ln(a) term is only
    formed when the exponent carries a derivative, so constant exponents
    work for a <= 0 as well (e.g. x**2 at x = 0 has derivative 0).
    """
    a = _ensure(a)
    b = _ensure(b)
    with numeric_context():
        p = np.power(a.real, b.real)
        d = _chain(a.dual, lambda: b.real * np.power(a.real, b.real - 1.0))
        if b.dual != 0:
            d = d + p * np.log(a.real) * b.dual
        return Dual(p, d)


def sin(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.sin(a.real), _chain(a.dual, lambda: np.cos(a.real)))


def cos(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.cos(a.real), _chain(a.dual, lambda: -np.sin(a.real)))


def tan(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.tan(a.real), _chain(a.dual, lambda: 1.0 / np.square(np.cos(a.real))))


def asin(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.arcsin(a.real),
                    _chain(a.dual, lambda: 1.0 / np.sqrt(1.0 - a.real * a.real)))


def acos(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.arccos(a.real),
                    _chain(a.dual, lambda: -1.0 / np.sqrt(1.0 - a.real * a.real)))


def atan(a) -> Dual:
    a = _ensure(a)
    with numeric_context():
        return Dual(np.arctan(a.real), _chain(a.dual, lambda: 1.0 / (1.0 + a.real * a.real)))
