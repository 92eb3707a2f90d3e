# adcore/graph/engine.py
from __future__ import annotations
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from ..config import numeric_context
from .node import Node, OpType
from .graph_utils import walk, parameters, topological_order


class _Rule:
    """
    Value rule f(a[, b]) plus one local partial per child, ∂f/∂child(a[, b]).
    Partials are kept separate so an unused one (e.g. ∂(a^b)/∂b when b is a
    Constant) is never evaluated.
    """
    __slots__ = ("f", "partials")

    def __init__(self, f: Callable, *partials: Callable):
        self.f = f
        self.partials: Tuple[Callable, ...] = partials


_RULES: Dict[OpType, _Rule] = {
    OpType.ADD:  _Rule(lambda a, b: a + b,  lambda a, b: 1.0,     lambda a, b: 1.0),
    OpType.SUB:  _Rule(lambda a, b: a - b,  lambda a, b: 1.0,     lambda a, b: -1.0),
    OpType.MULT: _Rule(lambda a, b: a * b,  lambda a, b: b,       lambda a, b: a),
    OpType.DIV:  _Rule(lambda a, b: a / b,  lambda a, b: 1.0 / b, lambda a, b: -a / np.square(b)),
    OpType.POW:  _Rule(np.power,
                       lambda a, b: b * np.power(a, b - 1.0),
                       lambda a, b: np.power(a, b) * np.log(a)),
    OpType.LOG:  _Rule(np.log, lambda a: 1.0 / a),
    OpType.EXP:  _Rule(np.exp, np.exp),
    OpType.SIN:  _Rule(np.sin, np.cos),
    OpType.COS:  _Rule(np.cos, lambda a: -np.sin(a)),
    OpType.TAN:  _Rule(np.tan, lambda a: 1.0 / np.square(np.cos(a))),
}


def _rule(node: Node) -> _Rule:
    try:
        return _RULES[node.op]
    except KeyError:
        raise NotImplementedError(f"no differentiation rule for {node.op!r}") from None


def _child_values(node: Node):
    return [c.value for c in node.children]


# ----------------------------- evaluate ----------------------------- #
def evaluate(node: Node) -> None:
    """
    Post-order value computation; overwrites `value` on every visited node.
    Each distinct node is computed once, children before parents.
    """
    with numeric_context():
        for n in topological_order(node):
            if not n.is_leaf:
                n.value = _rule(n).f(*_child_values(n))


# ----------------------------- forwards ----------------------------- #
def forwards(node: Node, param: Optional[Node]) -> None:
    """
    One forward-mode sweep seeded at `param`:
      - Parameter: derivative = 1 if it *is* `param`, else 0
      - Constant : derivative = 0
      - composite: derivative = Σ_i ∂f/∂child_i * child_i.derivative
    Terms whose child derivative is exactly 0 are skipped, so a constant
    exponent never forms ln(base). Cost is linear in the number of distinct
    nodes.
    """
    if param is not None and (not isinstance(param, Node) or param.op is not OpType.PARAMETER):
        raise TypeError(f"forwards() seeds a Parameter node, got {param!r}")

    with numeric_context():
        for n in topological_order(node):
            if n.op is OpType.PARAMETER:
                n.derivative = np.float64(1.0 if n is param else 0.0)
                continue
            if n.op is OpType.CONSTANT:
                n.derivative = np.float64(0.0)
                continue

            rule = _rule(n)
            vals = _child_values(n)
            n.value = rule.f(*vals)
            d = np.float64(0.0)
            for partial, c in zip(rule.partials, n.children):
                if c.derivative != 0:
                    d = d + partial(*vals) * c.derivative
            n.derivative = np.float64(d)


# ----------------------------- backwards ---------------------------- #
def backwards(node: Node, resid=1.0) -> None:
    """
    Reverse sweep: seed `node` with the adjoint `resid` (∂out/∂node) and push
    adjoints to children with the local partials, parents before children.

    Adjoints of intermediate nodes live in a per-sweep table, so a shared node
    forwards the sum over all its parents exactly once. Parameters accumulate:
    p.derivative += adjoint. Calling this twice without zero_grad() in between
    sums both sweeps. Requires a prior evaluate() (or forwards()) of the whole
    graph, since partials read child values.
    """
    adj: Dict[int, np.float64] = {id(node): np.float64(resid)}
    for n in reversed(topological_order(node)):
        a = adj.pop(id(n), None)
        if a is None or n.op is OpType.CONSTANT:
            continue
        if n.op is OpType.PARAMETER:
            with numeric_context():
                n.derivative = n.derivative + a
            continue
        if n.value is None:
            raise RuntimeError(
                f"backwards() reached an unevaluated {n.op.value} node; call evaluate() first"
            )

        rule = _rule(n)
        vals = _child_values(n)
        for partial, c in zip(rule.partials, n.children):
            if c.op is OpType.CONSTANT:
                continue
            with numeric_context():
                contrib = a * partial(*vals)
                adj[id(c)] = adj[id(c)] + contrib if id(c) in adj else contrib


# ------------------------- explicit reset / drivers ------------------------- #
def zero_grad(root: Node) -> None:
    """Set `derivative` to 0 on every node reachable from root (shared nodes once)."""
    for n in walk(root):
        n.derivative = np.float64(0.0)


def differentiate(root: Node, params: Optional[Sequence[Node]] = None) -> np.ndarray:
    """
    Reverse-mode gradient of root w.r.t. params (default: all Parameters of the
    graph in first-visit order): evaluate, zero_grad, backwards(1).
    """
    params = parameters(root) if params is None else list(params)
    evaluate(root)
    zero_grad(root)
    for p in params:
        p.derivative = np.float64(0.0)
    backwards(root, 1.0)
    return np.array([p.derivative for p in params], dtype=np.float64)


def forward_gradient(root: Node, params: Optional[Sequence[Node]] = None) -> np.ndarray:
    """Same gradient as differentiate(), with one forwards() sweep per parameter."""
    params = parameters(root) if params is None else list(params)
    grad = np.zeros(len(params), dtype=np.float64)
    for i, p in enumerate(params):
        forwards(root, p)
        grad[i] = root.derivative
    return grad
