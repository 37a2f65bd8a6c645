"""Postfix token parser.

Builds a tree bottom-up from a whitespace separated token stream such as
``x 2 +``. Input is trusted: malformed streams fail with the built-in error
of whatever step breaks (``IndexError`` on stack underflow, ``ValueError``
on a word that is neither a variable, an operation nor a numeric literal)
rather than a positioned diagnostic. Literals are read by the same
``parse_number`` as the bracketed parser.
"""

from typing import List

from ..expression_tree.core.node import Node, ConstantNode, OperationNode, VARIABLES
from ..expression_tree.core.operators import OPERATOR_MAP, OPERATOR_SPECS
from .source import parse_number
from ..logging_system import log_debug, log_info, log_warning


def parse(expression: str) -> Node:
  tokens = [token for token in expression.split() if token]
  stack: List[Node] = []

  for token in tokens:
    if token in VARIABLES:
      stack.append(VARIABLES[token])
    elif token in OPERATOR_MAP:
      op_type = OPERATOR_MAP[token]
      spec = OPERATOR_SPECS[op_type]
      # Variadic operations take everything currently on the stack
      count = len(stack) if spec.is_variadic else spec.arity
      operands = [stack.pop() for _ in range(count)]
      operands.reverse()
      stack.append(OperationNode(op_type, *operands))
    else:
      value = parse_number(token)
      if value is None:
        raise ValueError(f"Unknown token '{token}' in postfix expression")
      stack.append(ConstantNode(value))

  result = stack.pop()
  if stack:
    log_warning(f"Postfix parse of '{expression}' left {len(stack)} unused operand(s) on the stack")
  log_info(f"Parsed postfix tokens '{expression}' into {result.size()} nodes")
  log_debug(f"Parsed postfix tokens '{expression}' -> {result.prefix()}")
  return result
