# adcore/config.py
"""
Numeric configuration shared by the dual-number and graph engines.

There is no file or environment configuration: a single module-level
`NumericConfig` is active at a time and can be swapped temporarily with
`use_config(...)`, in the same way the tape can be swapped with `use_tape`.
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, replace

import numpy as np

_POLICIES = ("ignore", "warn", "raise", "print")


@dataclass(frozen=True)
class NumericConfig:
    """
    Attributes
    ----------
    on_domain_error : str
        What numpy does on divide-by-zero / invalid / overflow inside a kernel.
        "ignore" propagates NaN/Inf silently (IEEE semantics), "warn" emits a
        RuntimeWarning, "raise" raises FloatingPointError, "print" prints.
    fd_eps : float
        Step for central finite differences in `gradcheck`.
    fd_rtol, fd_atol : float
        Tolerances used when comparing AD and finite-difference gradients.
    """
    on_domain_error: str = "ignore"
    fd_eps: float = 1e-6
    fd_rtol: float = 1e-6
    fd_atol: float = 1e-8

    def __post_init__(self):
        if self.on_domain_error not in _POLICIES:
            raise ValueError(
                f"on_domain_error must be one of {_POLICIES}, got {self.on_domain_error!r}"
            )
        if self.fd_eps <= 0:
            raise ValueError("fd_eps must be positive")


# Active config (module global, replaced by use_config)
active_config = NumericConfig()


def get_config() -> NumericConfig:
    return active_config


@contextmanager
def use_config(config: NumericConfig | None = None, **overrides):
    """
    Temporarily switch the active numeric config:
        with use_config(on_domain_error="raise"):
            ... any NaN/Inf producing op now raises FloatingPointError ...
    """
    global active_config
    prev = active_config
    try:
        base = config or prev
        active_config = replace(base, **overrides) if overrides else base
        yield active_config
    finally:
        active_config = prev


def numeric_context():
    """numpy errstate matching the active domain-error policy."""
    return np.errstate(all=active_config.on_domain_error)
