import numpy as np
import sympy as sp
from typing import Optional, Sequence
from scipy.optimize import approx_fprime
from .core.node import Node
from .core.operators import VARIABLE_INDICES


class Expression:
  """Expression tree root with cached rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> float:
    return self.root.evaluate(x, y, z)

  def evaluate_batch(self, X: np.ndarray) -> np.ndarray:
    """Evaluate on every row of X; columns are x, y, z (missing ones bind to 0)."""
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1:
      X = X.reshape(-1, 1)
    n_samples, n_columns = X.shape
    if n_columns > len(VARIABLE_INDICES):
      raise ValueError(f"Expected at most {len(VARIABLE_INDICES)} columns, got {n_columns}")
    columns = [X[:, i] for i in range(n_columns)]
    columns += [np.zeros(n_samples)] * (len(VARIABLE_INDICES) - n_columns)
    result = np.asarray(self.root.evaluate(*columns), dtype=np.float64)
    return np.broadcast_to(result, (n_samples,)).copy()

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def prefix(self) -> str:
    return self.root.prefix()

  def postfix(self) -> str:
    return self.root.postfix()

  def diff(self, variable: str) -> 'Expression':
    return Expression(self.root.diff(variable))

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def numeric_gradient(self, point: Sequence[float], epsilon: Optional[float] = None) -> np.ndarray:
    """Forward-difference gradient with respect to (x, y, z) at `point`."""
    if epsilon is None:
      epsilon = np.sqrt(np.finfo(np.float64).eps)
    point = np.asarray(point, dtype=np.float64)
    if point.shape != (len(VARIABLE_INDICES),):
      raise ValueError(f"Expected a point (x, y, z), got shape {point.shape}")
    return approx_fprime(point, lambda v: float(self.root.evaluate(*v)), epsilon)

  def __hash__(self) -> int:
    return hash(self.root)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.root == other.root

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.prefix()!r})"

  @classmethod
  def from_postfix_tokens(cls, expr_str: str) -> 'Expression':
    from ..parsing.stack_parser import parse
    return cls(parse(expr_str))

  @classmethod
  def from_prefix(cls, expr_str: str) -> 'Expression':
    from ..parsing.bracket_parser import parse_prefix
    return cls(parse_prefix(expr_str))

  @classmethod
  def from_postfix(cls, expr_str: str) -> 'Expression':
    from ..parsing.bracket_parser import parse_postfix
    return cls(parse_postfix(expr_str))
