# Python

"""Expression Toolkit

Parse, evaluate, differentiate and render arithmetic expression trees over
the variables x, y and z.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode, OperationNode, VARIABLES,
  Const, Variable, Add, Subtract, Multiply, Divide, Negate, Abs, Iff, Mean, Var, Gauss,
  OpType, OPERATOR_SPECS, OPERATOR_MAP, SymPyVerifier
)
from .parsing import Source, parse, BracketParser, ParseMode, parse_prefix, parse_postfix
from .errors import (
  ExpressionError, ParseError, TokenError, OperationError, ArgumentsError,
  ArgumentsCountError, EndOfFileError
)
from .logging_system import LogLevel, ExpressionLogger, get_logger, set_log_level, configure_logging

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode", "OperationNode", "VARIABLES",
  "Const", "Variable", "Add", "Subtract", "Multiply", "Divide", "Negate", "Abs", "Iff",
  "Mean", "Var", "Gauss",
  "OpType", "OPERATOR_SPECS", "OPERATOR_MAP", "SymPyVerifier",
  "Source", "parse", "BracketParser", "ParseMode", "parse_prefix", "parse_postfix",
  "ExpressionError", "ParseError", "TokenError", "OperationError", "ArgumentsError",
  "ArgumentsCountError", "EndOfFileError",
  "LogLevel", "ExpressionLogger", "get_logger", "set_log_level", "configure_logging"
]
