# adcore/__init__.py
# Automatic differentiation: forward-mode dual numbers and expression graphs

from .config import NumericConfig, get_config, use_config
from .dual import Dual, ZERO, ONE, MINUS
from .gradient import gradient, value_and_gradient, directional_derivative
from .gradcheck import central_difference, fd_gradient, check_gradient

# Math functions stay namespaced: adcore.dual.sin(...) vs adcore.graph.sin(...)
from . import dual
from . import graph
from .graph import (
    Node, OpType,
    Constant, Parameter, Add, Sub, Mult, Div, Pow, Log, Exp, Sin, Cos, Tan,
    zero_grad, differentiate, forward_gradient, print_graph_summary,
)

__all__ = [
    # Config
    'NumericConfig',
    'get_config',
    'use_config',
    # Dual numbers
    'dual',
    'Dual',
    'ZERO',
    'ONE',
    'MINUS',
    'gradient',
    'value_and_gradient',
    'directional_derivative',
    # Finite differences
    'central_difference',
    'fd_gradient',
    'check_gradient',
    # Expression graph
    'graph',
    'Node',
    'OpType',
    'Constant',
    'Parameter',
    'Add',
    'Sub',
    'Mult',
    'Div',
    'Pow',
    'Log',
    'Exp',
    'Sin',
    'Cos',
    'Tan',
    'zero_grad',
    'differentiate',
    'forward_gradient',
    'print_graph_summary',
]
