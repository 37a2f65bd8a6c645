"""
Tree Utility Functions

Traversal and inspection helpers shared by callers that need to look inside
an expression tree without touching node internals.
"""

from typing import List, Dict
from collections import Counter

from ..core.node import Node, OperationNode, ConstantNode, VariableNode
from ..core.operators import OPERATOR_MAP


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)

        if isinstance(current_node, OperationNode):
            nodes_to_visit.extend(current_node.operands)

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (recursive)"""
    nodes = [node]

    if isinstance(node, OperationNode):
        for operand in node.operands:
            nodes.extend(_depth_first_traversal(operand))

    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes and operations without operands have depth 1)
    """
    if isinstance(node, OperationNode) and node.operands:
        return 1 + max(calculate_tree_depth(operand) for operand in node.operands)
    return 1


def find_nodes_by_type(node: Node, node_type: type) -> List[Node]:
    """Find all nodes of a specific type in the tree, depth-first."""
    return [n for n in _depth_first_traversal(node) if isinstance(n, node_type)]


def find_nodes_by_operator(node: Node, symbol: str) -> List[OperationNode]:
    """Find all operation nodes whose symbol is `symbol`."""
    if symbol not in OPERATOR_MAP:
        raise ValueError(f"Unknown operation symbol: {symbol}")
    op_type = OPERATOR_MAP[symbol]
    return [n for n in find_nodes_by_type(node, OperationNode) if n.op_type == op_type]


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """Count how many times each variable occurs in the tree."""
    return dict(Counter(n.name for n in find_nodes_by_type(node, VariableNode)))


def get_constants(node: Node) -> List[float]:
    """Constant values in depth-first order."""
    return [n.value for n in find_nodes_by_type(node, ConstantNode)]


def get_variables(node: Node) -> List[str]:
    """Distinct variable names in order of first appearance."""
    seen = []
    for n in find_nodes_by_type(node, VariableNode):
        if n.name not in seen:
            seen.append(n.name)
    return seen
