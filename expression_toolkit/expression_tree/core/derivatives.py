"""Differentiation rules keyed by operation type.

Each rule receives the differentiation variable followed by the operation's
unevaluated operands and builds a new tree; nothing is simplified.
"""

from typing import Callable, Dict
from .operators import OpType, OPERATOR_SPECS
from .node import (
  Node, ConstantNode,
  Add, Subtract, Multiply, Divide, Negate, Iff, Mean, Gauss
)


def _diff_add(variable: str, left: Node, right: Node) -> Node:
  return Add(left.diff(variable), right.diff(variable))


def _diff_subtract(variable: str, left: Node, right: Node) -> Node:
  return Subtract(left.diff(variable), right.diff(variable))


def _diff_multiply(variable: str, left: Node, right: Node) -> Node:
  # (f * g)' = f' * g + f * g'
  return Add(
    Multiply(left.diff(variable), right),
    Multiply(left, right.diff(variable))
  )


def _diff_divide(variable: str, left: Node, right: Node) -> Node:
  # (f / g)' = (f' * g - f * g') / (g * g)
  return Divide(
    Subtract(
      Multiply(left.diff(variable), right),
      Multiply(left, right.diff(variable))
    ),
    Multiply(right, right)
  )


def _diff_negate(variable: str, operand: Node) -> Node:
  return Negate(operand.diff(variable))


def _diff_abs(variable: str, operand: Node) -> Node:
  d_operand = operand.diff(variable)
  return Iff(operand, d_operand, Negate(d_operand))


def _diff_iff(variable: str, condition: Node, if_true: Node, if_false: Node) -> Node:
  return Iff(condition, if_true.diff(variable), if_false.diff(variable))


def _diff_mean(variable: str, *operands: Node) -> Node:
  return Mean(*[operand.diff(variable) for operand in operands])


def _diff_var(variable: str, *operands: Node) -> Node:
  terms = []
  for operand in operands:
    deviation = Subtract(operand, Mean(*operands))
    terms.append(Multiply(deviation, deviation).diff(variable))
  return Mean(*terms)


def _diff_gauss(variable: str, amplitude: Node, mean: Node, width: Node, position: Node) -> Node:
  """gauss(a, b, c, x)' = gauss(1, b, c, x) * (a' + a * (-(x - b)^2 / (2 * c^2))')"""
  exponent = Negate(Divide(
    Multiply(Subtract(position, mean), Subtract(position, mean)),
    Multiply(Multiply(width, width), ConstantNode.TWO)
  ))
  return Multiply(
    Gauss(ConstantNode.ONE, mean, width, position),
    Add(
      amplitude.diff(variable),
      Multiply(amplitude, exponent.diff(variable))
    )
  )


DIFF_RULES: Dict[OpType, Callable[..., Node]] = {
  OpType.ADD: _diff_add,
  OpType.SUBTRACT: _diff_subtract,
  OpType.MULTIPLY: _diff_multiply,
  OpType.DIVIDE: _diff_divide,
  OpType.NEGATE: _diff_negate,
  OpType.ABS: _diff_abs,
  OpType.IFF: _diff_iff,
  OpType.MEAN: _diff_mean,
  OpType.VAR: _diff_var,
  OpType.GAUSS: _diff_gauss,
}

if set(DIFF_RULES) != set(OPERATOR_SPECS):
  raise RuntimeError("every operation needs a differentiation rule")
