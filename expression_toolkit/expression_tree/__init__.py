"""Expression Tree Module

Core expression tree functionality: nodes, the operation table,
differentiation rules and the Expression wrapper.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    OperationNode,
    VARIABLES,
    Const, Variable, Add, Subtract, Multiply, Divide, Negate, Abs, Iff, Mean, Var, Gauss
)
from .core.operators import (
    NodeType,
    OpType,
    OperatorSpec,
    OPERATOR_SPECS,
    OPERATOR_MAP,
    VARIABLE_INDICES
)
from .core.derivatives import DIFF_RULES
from .utils import SymPyVerifier

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "OperationNode", "VARIABLES",
    "Const", "Variable", "Add", "Subtract", "Multiply", "Divide", "Negate", "Abs", "Iff",
    "Mean", "Var", "Gauss",
    "NodeType", "OpType", "OperatorSpec", "OPERATOR_SPECS", "OPERATOR_MAP", "VARIABLE_INDICES",
    "DIFF_RULES",
    "SymPyVerifier"
]
