"""
Graph utility functions.
Traversal helpers and a printed summary of an expression graph's structure.
"""

from typing import Dict, Iterator, List
from collections import Counter

import numpy as np

from .node import Node, OpType


def walk(root: Node) -> Iterator[Node]:
    """
    Yield every distinct node reachable from root once, depth-first, left to
    right (pre-order). Iterative, so deep graphs do not hit the recursion limit.
    """
    seen = set()
    stack = [root]
    while stack:
        n = stack.pop()
        if id(n) in seen:
            continue
        seen.add(id(n))
        yield n
        stack.extend(reversed(n.children))


def topological_order(root: Node) -> List[Node]:
    """
    Distinct nodes reachable from root, children before parents (iterative
    post-order). Reversed, every parent precedes all of its children.
    """
    order: List[Node] = []
    seen = set()
    stack = [(root, False)]
    while stack:
        n, expanded = stack.pop()
        if expanded:
            order.append(n)
            continue
        if id(n) in seen:
            continue
        seen.add(id(n))
        stack.append((n, True))
        stack.extend((c, False) for c in reversed(n.children))
    return order


def parameters(root: Node) -> List[Node]:
    """Distinct Parameter nodes of the graph, in first-visit order."""
    return [n for n in walk(root) if n.op is OpType.PARAMETER]


def fan_out(root: Node) -> Dict[int, int]:
    """Number of parent references per node (keyed by id); > 1 means shared."""
    counts: Dict[int, int] = {id(root): 0}
    for n in walk(root):
        for c in n.children:
            counts[id(c)] = counts.get(id(c), 0) + 1
    return counts


def depth(root: Node) -> int:
    """Longest root-to-leaf path, counted in nodes."""
    memo: Dict[int, int] = {}
    for n in topological_order(root):
        memo[id(n)] = 1 + max((memo[id(c)] for c in n.children), default=0)
    return memo[id(root)]


def get_graph_stats(root: Node) -> Dict:
    """
    Graph statistics (no printing).

    Returns:
        Dictionary with node/edge/parameter counts, shared-node count, depth,
        fan-in/fan-out figures and an op breakdown
    """
    nodes = list(walk(root))
    n_nodes = len(nodes)
    fan_ins = [len(n.children) for n in nodes]
    fan_outs = list(fan_out(root).values())

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'parameters': sum(1 for n in nodes if n.op is OpType.PARAMETER),
        'shared': sum(1 for v in fan_outs if v > 1),
        'depth': depth(root),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'operations': dict(Counter(n.op.value for n in nodes)),
    }


def print_graph_summary(root: Node, detailed: bool = False) -> Dict:
    """
    Print expression graph summary.

    Args:
        root: output node of the expression
        detailed: whether to print one line per node

    Returns:
        Same dictionary as get_graph_stats
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("EXPRESSION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Parameters:         {stats['parameters']:,}")
    print(f"Shared nodes:       {stats['shared']:,}")
    print(f"Depth:              {stats['depth']}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        nodes = list(walk(root))
        index = {id(n): i for i, n in enumerate(nodes)}
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for i, n in enumerate(nodes):
            child_info = ", ".join(f"Node{index[id(c)]}" for c in n.children)
            label = n.name if n.name is not None else ""
            print(f"Node {i:3d}: {n.op.value:10s} {label:8s} value={n.value!s:>12s} "
                  f"derivative={n.derivative!s:>12s} <- [{child_info}]")

    print("="*70 + "\n")

    return stats
