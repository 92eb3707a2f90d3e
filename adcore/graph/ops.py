# adcore/graph/ops.py
import numbers

from .node import Node, OpType


def _as_node(x):
    """Ensure x is a Node; otherwise wrap a plain number as a Constant."""
    if isinstance(x, Node):
        return x
    if isinstance(x, numbers.Real):
        return Constant(x)
    raise TypeError(f"expected Node or real number, got {type(x)}")


# ----- Leaves -----
def Constant(value, name=None) -> Node:
    """Fixed value; derivative is always 0 and adjoints are ignored."""
    return Node(OpType.CONSTANT, value=value, name=name)


def Parameter(value, name=None) -> Node:
    """Independent variable; seeds forwards() and accumulates backwards()."""
    return Node(OpType.PARAMETER, value=value, name=name)


# ----- Composites (children must already be Nodes) -----
def Add(a, b):  return Node(OpType.ADD, (a, b))
def Sub(a, b):  return Node(OpType.SUB, (a, b))
def Mult(a, b): return Node(OpType.MULT, (a, b))
def Div(a, b):  return Node(OpType.DIV, (a, b))
def Pow(a, b):  return Node(OpType.POW, (a, b))
def Log(a):     return Node(OpType.LOG, (a,))
def Exp(a):     return Node(OpType.EXP, (a,))
def Sin(a):     return Node(OpType.SIN, (a,))
def Cos(a):     return Node(OpType.COS, (a,))
def Tan(a):     return Node(OpType.TAN, (a,))


# ----- Functional aliases (plain numbers promoted to Constant) -----
def add(a, b): return Add(_as_node(a), _as_node(b))
def sub(a, b): return Sub(_as_node(a), _as_node(b))
def mul(a, b): return Mult(_as_node(a), _as_node(b))
def div(a, b): return Div(_as_node(a), _as_node(b))
def pow(a, b): return Pow(_as_node(a), _as_node(b))
def log(a):    return Log(_as_node(a))
def exp(a):    return Exp(_as_node(a))
def sin(a):    return Sin(_as_node(a))
def cos(a):    return Cos(_as_node(a))
def tan(a):    return Tan(_as_node(a))


def neg(a):
    """-a, built as 0 - a."""
    return Sub(Constant(0.0), _as_node(a))


# Bind Python operators to Node
Node.__add__      = lambda self, other: add(self, other)
Node.__radd__     = lambda self, other: add(other, self)
Node.__sub__      = lambda self, other: sub(self, other)
Node.__rsub__     = lambda self, other: sub(other, self)
Node.__mul__      = lambda self, other: mul(self, other)
Node.__rmul__     = lambda self, other: mul(other, self)
Node.__truediv__  = lambda self, other: div(self, other)
Node.__rtruediv__ = lambda self, other: div(other, self)
Node.__pow__      = lambda self, other: pow(self, other)
Node.__rpow__     = lambda self, other: pow(other, self)
Node.__neg__      = lambda self: neg(self)
