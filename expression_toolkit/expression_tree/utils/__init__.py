"""Utilities for expression trees."""

from .sympy_utils import SymPyVerifier
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type, find_nodes_by_operator,
    get_variable_usage_counts, get_constants, get_variables
)

__all__ = [
    'SymPyVerifier',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type', 'find_nodes_by_operator',
    'get_variable_usage_counts', 'get_constants', 'get_variables'
]
