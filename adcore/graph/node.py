# adcore/graph/node.py
from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class OpType(Enum):
    """Closed set of node kinds. The engine has one rule per member."""
    CONSTANT = "constant"
    PARAMETER = "parameter"
    ADD = "add"
    SUB = "sub"
    MULT = "mul"
    DIV = "div"
    POW = "pow"
    LOG = "log"
    EXP = "exp"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"


ARITY = {
    OpType.CONSTANT: 0, OpType.PARAMETER: 0,
    OpType.ADD: 2, OpType.SUB: 2, OpType.MULT: 2, OpType.DIV: 2, OpType.POW: 2,
    OpType.LOG: 1, OpType.EXP: 1, OpType.SIN: 1, OpType.COS: 1, OpType.TAN: 1,
}


class Node:
    """
    One node of an expression graph (a tagged variant over OpType).

    Attributes
    ----------
    op : OpType
        Node kind; selects the evaluation / chain-rule / adjoint rule.
    children : tuple[Node, ...]
        Operands, left to right. The same Node object may appear under several
        parents (a DAG); its fields are then shared by every traversal.
    value : np.float64 | None
        Primal value from the last evaluate()/forwards(). Leaves hold their
        value from construction; composites hold None until evaluated.
    derivative : np.float64
        Tangent from the last forwards(), or for Parameters the adjoint
        accumulated by backwards(). backwards() adds, it never overwrites:
        reset with zero_grad() between independent gradient computations.
    name : Optional[str]
        Optional debug/pretty-print name.
    """
    __slots__ = ("op", "children", "_value", "derivative", "name")
    __array_ufunc__ = None  # numpy scalars defer to the operators bound in ops.py

    def __init__(self, op: OpType, children: Tuple["Node", ...] = (), *,
                 value=None, name: Optional[str] = None):
        if not isinstance(op, OpType):
            raise TypeError(f"op must be an OpType, got {type(op)}")
        children = tuple(children)
        for c in children:
            if not isinstance(c, Node):
                raise TypeError(f"{op.value} node expects Node children, got {type(c)}")
        if len(children) != ARITY[op]:
            raise ValueError(
                f"{op.value} node takes {ARITY[op]} children, got {len(children)}"
            )
        if op in (OpType.CONSTANT, OpType.PARAMETER) and value is None:
            raise ValueError(f"{op.value} node needs a value")

        self.op = op
        self.children = children
        self._value = None
        self.value = value
        self.derivative = np.float64(0.0)
        self.name = name

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, v):
        self._value = None if v is None else np.float64(v)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self):
        label = f", name={self.name!r}" if self.name is not None else ""
        return f"Node({self.op.value}, value={self._value!r}, derivative={self.derivative!r}{label})"

    # Traversals (implemented in engine.py)
    def evaluate(self) -> None:
        from .engine import evaluate
        evaluate(self)

    def forwards(self, param: Optional["Node"]) -> None:
        from .engine import forwards
        forwards(self, param)

    def backwards(self, resid=1.0) -> None:
        from .engine import backwards
        backwards(self, resid)
