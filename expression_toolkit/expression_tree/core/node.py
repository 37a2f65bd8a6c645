import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from .operators import (
  NodeType, OpType, OPERATOR_SPECS, OPERATOR_MAP, VARIABLE_INDICES, OperatorSpec
)


def format_constant(value: float) -> str:
  """Render a constant the way the parsers read it back: `2`, `-0`, `2.5`, `inf`."""
  if value == 0 and np.signbit(value):
    return "-0"
  if np.isfinite(value) and float(value).is_integer() and abs(value) < 1e16:
    return str(int(value))
  return repr(float(value))


class Node(ABC):
  """Base node of an immutable expression tree"""

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, x: float, y: float, z: float):
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def prefix(self) -> str:
    pass

  @abstractmethod
  def postfix(self) -> str:
    pass

  @abstractmethod
  def diff(self, variable: str) -> 'Node':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = self._compute_size()
    return self._size_cache

  @abstractmethod
  def _compute_size(self) -> int:
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __str__(self) -> str:
    return self.to_string()


class VariableNode(Node):
  __slots__ = ('_name', '_index')

  def __init__(self, name: str):
    super().__init__()
    if name not in VARIABLE_INDICES:
      raise ValueError(f"Unknown variable '{name}', expected one of {sorted(VARIABLE_INDICES)}")
    self._name = name
    self._index = VARIABLE_INDICES[name]

  @property
  def name(self) -> str:
    return self._name

  @property
  def index(self) -> int:
    return self._index

  def evaluate(self, x, y, z):
    value = (x, y, z)[self._index]
    if np.ndim(value) == 0:
      return np.float64(value)
    return np.asarray(value, dtype=np.float64)

  def to_string(self) -> str:
    return self._name

  def prefix(self) -> str:
    return self._name

  def postfix(self) -> str:
    return self._name

  def diff(self, variable: str) -> Node:
    return ConstantNode.ONE if variable == self._name else ConstantNode.ZERO

  def to_sympy(self) -> sp.Expr:
    return sp.Symbol(self._name)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self._index))

  def __eq__(self, other) -> bool:
    return isinstance(other, VariableNode) and other._index == self._index

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"VariableNode({self._name!r})"


class ConstantNode(Node):
  __slots__ = ('_value',)

  ZERO: 'ConstantNode'
  ONE: 'ConstantNode'
  TWO: 'ConstantNode'

  def __init__(self, value: float):
    super().__init__()
    self._value = float(value)

  @property
  def value(self) -> float:
    return self._value

  def evaluate(self, x, y, z):
    return np.float64(self._value)

  def to_string(self) -> str:
    return format_constant(self._value)

  def prefix(self) -> str:
    return self.to_string()

  def postfix(self) -> str:
    return self.to_string()

  def diff(self, variable: str) -> Node:
    return ConstantNode.ZERO

  def to_sympy(self) -> sp.Expr:
    if np.isfinite(self._value) and self._value.is_integer():
      return sp.Integer(int(self._value))
    return sp.Float(self._value)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    # hashed by literal so that equal nan constants hash alike
    return hash((NodeType.CONSTANT, format_constant(self._value)))

  def __eq__(self, other) -> bool:
    if not isinstance(other, ConstantNode):
      return False
    # compared by literal: nan equals nan, -0 differs from 0
    return format_constant(other._value) == format_constant(self._value)

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"ConstantNode({self._value!r})"


ConstantNode.ZERO = ConstantNode(0)
ConstantNode.ONE = ConstantNode(1)
ConstantNode.TWO = ConstantNode(2)

# Shared leaves handed out by both parsers
VARIABLES = {name: VariableNode(name) for name in VARIABLE_INDICES}


class OperationNode(Node):
  __slots__ = ('_op_type', '_operands')

  def __init__(self, op_type: OpType, *operands: Node):
    super().__init__()
    if isinstance(op_type, str):
      op_type = OPERATOR_MAP[op_type]
    spec = OPERATOR_SPECS[op_type]
    if not spec.accepts(len(operands)):
      raise ValueError(
        f"Operation '{spec.symbol}' takes {spec.arity} operands, got {len(operands)}")
    for operand in operands:
      if not isinstance(operand, Node):
        raise TypeError(f"Operand of '{spec.symbol}' must be a Node, got {type(operand).__name__}")
    self._op_type = OpType(op_type)
    self._operands: Tuple[Node, ...] = tuple(operands)

  @property
  def op_type(self) -> OpType:
    return self._op_type

  @property
  def spec(self) -> OperatorSpec:
    return OPERATOR_SPECS[self._op_type]

  @property
  def symbol(self) -> str:
    return self.spec.symbol

  @property
  def operands(self) -> Tuple[Node, ...]:
    return self._operands

  def evaluate(self, x, y, z):
    values = [operand.evaluate(x, y, z) for operand in self._operands]
    with np.errstate(all='ignore'):
      return self.spec.action(*values)

  def to_string(self) -> str:
    return " ".join([operand.to_string() for operand in self._operands] + [self.symbol])

  def prefix(self) -> str:
    return "(" + " ".join([self.symbol] + [operand.prefix() for operand in self._operands]) + ")"

  def postfix(self) -> str:
    return "(" + " ".join([operand.postfix() for operand in self._operands] + [self.symbol]) + ")"

  def diff(self, variable: str) -> Node:
    from .derivatives import DIFF_RULES
    return DIFF_RULES[self._op_type](variable, *self._operands)

  def to_sympy(self) -> sp.Expr:
    args = [operand.to_sympy() for operand in self._operands]
    op = self._op_type
    if op == OpType.ADD:
      return sp.Add(args[0], args[1])
    elif op == OpType.SUBTRACT:
      return sp.Add(args[0], sp.Mul(-1, args[1]))
    elif op == OpType.MULTIPLY:
      return sp.Mul(args[0], args[1])
    elif op == OpType.DIVIDE:
      return sp.Mul(args[0], sp.Pow(args[1], -1))
    elif op == OpType.NEGATE:
      return -args[0]
    elif op == OpType.ABS:
      return sp.Abs(args[0])
    elif op == OpType.IFF:
      return sp.Piecewise((args[1], args[0] >= 0), (args[2], True))
    elif op == OpType.MEAN:
      return sp.Add(*args) / len(args) if args else sp.Integer(0)
    elif op == OpType.VAR:
      if not args:
        return sp.Integer(0)
      m = sp.Add(*args) / len(args)
      return sp.Add(*[(a - m) ** 2 for a in args]) / len(args)
    elif op == OpType.GAUSS:
      a, b, c, x = args
      return a * sp.exp(-((x - b) / c) ** 2 / 2)
    else:
      raise RuntimeWarning(f"to_sympy reached unexpected operation: {self.symbol}")

  def _compute_size(self) -> int:
    return 1 + sum(operand.size() for operand in self._operands)

  def _compute_hash(self) -> int:
    return hash((NodeType.OPERATION, self._op_type, tuple(hash(o) for o in self._operands)))

  def __eq__(self, other) -> bool:
    if not isinstance(other, OperationNode):
      return False
    return other._op_type == self._op_type and other._operands == self._operands

  __hash__ = Node.__hash__

  def __repr__(self) -> str:
    return f"OperationNode({self.symbol!r}, {', '.join(repr(o) for o in self._operands)})"


def Const(value: float) -> ConstantNode:
  return ConstantNode(value)

def Variable(name: str) -> VariableNode:
  return VARIABLES[name] if name in VARIABLES else VariableNode(name)

def Add(left: Node, right: Node) -> OperationNode:
  return OperationNode(OpType.ADD, left, right)

def Subtract(left: Node, right: Node) -> OperationNode:
  return OperationNode(OpType.SUBTRACT, left, right)

def Multiply(left: Node, right: Node) -> OperationNode:
  return OperationNode(OpType.MULTIPLY, left, right)

def Divide(left: Node, right: Node) -> OperationNode:
  return OperationNode(OpType.DIVIDE, left, right)

def Negate(operand: Node) -> OperationNode:
  return OperationNode(OpType.NEGATE, operand)

def Abs(operand: Node) -> OperationNode:
  return OperationNode(OpType.ABS, operand)

def Iff(condition: Node, if_true: Node, if_false: Node) -> OperationNode:
  return OperationNode(OpType.IFF, condition, if_true, if_false)

def Mean(*operands: Node) -> OperationNode:
  return OperationNode(OpType.MEAN, *operands)

def Var(*operands: Node) -> OperationNode:
  return OperationNode(OpType.VAR, *operands)

def Gauss(amplitude: Node, mean: Node, width: Node, position: Node) -> OperationNode:
  return OperationNode(OpType.GAUSS, amplitude, mean, width, position)
