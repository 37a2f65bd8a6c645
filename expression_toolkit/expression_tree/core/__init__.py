"""Core expression tree components."""

from .node import (
    Node, VariableNode, ConstantNode, OperationNode, VARIABLES, format_constant,
    Const, Variable, Add, Subtract, Multiply, Divide, Negate, Abs, Iff, Mean, Var, Gauss
)
from .operators import (
    NodeType, OpType, OperatorSpec, OPERATOR_SPECS, OPERATOR_MAP, VARIABLE_INDICES,
    is_operator_symbol, get_operator_spec, evaluate_gauss
)
from .derivatives import DIFF_RULES

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'OperationNode', 'VARIABLES', 'format_constant',
    'Const', 'Variable', 'Add', 'Subtract', 'Multiply', 'Divide', 'Negate', 'Abs', 'Iff',
    'Mean', 'Var', 'Gauss',
    'NodeType', 'OpType', 'OperatorSpec', 'OPERATOR_SPECS', 'OPERATOR_MAP', 'VARIABLE_INDICES',
    'is_operator_symbol', 'get_operator_spec', 'evaluate_gauss',
    'DIFF_RULES'
]
