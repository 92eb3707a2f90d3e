# adcore/graph/__init__.py

"""
Expression-graph AD.

Graphs are built bottom-up from Constant/Parameter leaves and composite nodes
(Add, Sub, Mult, Div, Pow, Log, Exp, Sin, Cos, Tan), or with the Python
operators bound on Node. Every node supports:

    evaluate()          post-order value computation
    forwards(param)     one forward-mode sweep seeded at a Parameter
    backwards(resid)    reverse sweep; Parameters accumulate adjoints

Exports:
    Node, OpType                 : the node type and its closed set of kinds
    Constant ... Tan             : node constructors
    add ... tan, neg             : constructors that promote plain numbers
    evaluate, forwards, backwards: traversals as free functions
    zero_grad                    : explicit reset before a fresh backwards()
    differentiate                : evaluate + zero_grad + backwards(1) -> gradient
    forward_gradient             : gradient from one forwards() per parameter
    parameters, walk,
    topological_order            : graph traversal helpers
    print_graph_summary          : printed diagnostics
"""

from .node import Node, OpType
from .ops import (
    Constant, Parameter, Add, Sub, Mult, Div, Pow, Log, Exp, Sin, Cos, Tan,
    add, sub, mul, div, pow, log, exp, sin, cos, tan, neg,
)
from .engine import (
    evaluate, forwards, backwards, zero_grad, differentiate, forward_gradient,
)
from .graph_utils import walk, topological_order, parameters, get_graph_stats, print_graph_summary

__all__ = [
    "Node", "OpType",
    "Constant", "Parameter", "Add", "Sub", "Mult", "Div", "Pow",
    "Log", "Exp", "Sin", "Cos", "Tan",
    "add", "sub", "mul", "div", "pow", "log", "exp", "sin", "cos", "tan", "neg",
    "evaluate", "forwards", "backwards", "zero_grad",
    "differentiate", "forward_gradient",
    "walk", "topological_order", "parameters", "get_graph_stats", "print_graph_summary",
]
