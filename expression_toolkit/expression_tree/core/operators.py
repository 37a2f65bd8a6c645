import numpy as np
import numba
from enum import IntEnum
from dataclasses import dataclass
from typing import Callable, Dict, Optional

class NodeType(IntEnum):
  VARIABLE = 0
  CONSTANT = 1
  OPERATION = 2

class OpType(IntEnum):
  ADD = 0
  SUBTRACT = 1
  MULTIPLY = 2
  DIVIDE = 3
  NEGATE = 4
  ABS = 5
  IFF = 6
  MEAN = 7
  VAR = 8
  GAUSS = 9

VARIABLE_INDICES: Dict[str, int] = {'x': 0, 'y': 1, 'z': 2}

@numba.njit(cache=True, error_model='numpy')
def evaluate_gauss(a, b, c, x):
  t = (x - b) / c
  return a * np.exp(-t * t / 2.0)

def evaluate_add(a, b):
  return a + b

def evaluate_subtract(a, b):
  return a - b

def evaluate_multiply(a, b):
  return a * b

def evaluate_divide(a, b):
  return np.divide(a, b)

def evaluate_negate(a):
  return -a

def evaluate_abs(a):
  return np.abs(a)

def evaluate_iff(cond, a, b):
  if np.ndim(cond) == 0 and np.ndim(a) == 0 and np.ndim(b) == 0:
    return a if cond >= 0 else b
  return np.where(cond >= 0, a, b)

def evaluate_mean(*values):
  if not values:
    return np.float64(0.0)
  total = values[0]
  for value in values[1:]:
    total = total + value
  return total / len(values)

def evaluate_var(*values):
  if not values:
    return np.float64(0.0)
  m = evaluate_mean(*values)
  return evaluate_mean(*[(v - m) * (v - m) for v in values])


@dataclass(frozen=True)
class OperatorSpec:
  op_type: OpType
  symbol: str
  arity: Optional[int]  # None means any operand count
  action: Callable

  @property
  def is_variadic(self) -> bool:
    return self.arity is None

  def accepts(self, count: int) -> bool:
    return self.arity is None or self.arity == count


OPERATOR_SPECS: Dict[OpType, OperatorSpec] = {
  OpType.ADD: OperatorSpec(OpType.ADD, '+', 2, evaluate_add),
  OpType.SUBTRACT: OperatorSpec(OpType.SUBTRACT, '-', 2, evaluate_subtract),
  OpType.MULTIPLY: OperatorSpec(OpType.MULTIPLY, '*', 2, evaluate_multiply),
  OpType.DIVIDE: OperatorSpec(OpType.DIVIDE, '/', 2, evaluate_divide),
  OpType.NEGATE: OperatorSpec(OpType.NEGATE, 'negate', 1, evaluate_negate),
  OpType.ABS: OperatorSpec(OpType.ABS, 'abs', 1, evaluate_abs),
  OpType.IFF: OperatorSpec(OpType.IFF, 'iff', 3, evaluate_iff),
  OpType.MEAN: OperatorSpec(OpType.MEAN, 'mean', None, evaluate_mean),
  OpType.VAR: OperatorSpec(OpType.VAR, 'var', None, evaluate_var),
  OpType.GAUSS: OperatorSpec(OpType.GAUSS, 'gauss', 4, evaluate_gauss),
}

# Symbol lookup shared by both parsers and the renderer
OPERATOR_MAP: Dict[str, OpType] = {spec.symbol: op for op, spec in OPERATOR_SPECS.items()}


def is_operator_symbol(token) -> bool:
  return isinstance(token, str) and token in OPERATOR_MAP


def get_operator_spec(symbol: str) -> OperatorSpec:
  return OPERATOR_SPECS[OPERATOR_MAP[symbol]]
