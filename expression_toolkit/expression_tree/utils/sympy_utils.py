import sympy as sp
from typing import Dict, Any
from ..core.node import Node
from ..core.operators import VARIABLE_INDICES


class SymPyVerifier:
  """SymPy-backed cross-checks for expression trees"""

  def __init__(self):
    self.symbols = {name: sp.Symbol(name) for name in VARIABLE_INDICES}

  def to_sympy(self, node: Node) -> sp.Expr:
    return node.to_sympy()

  def reference_derivative(self, node: Node, variable: str) -> sp.Expr:
    """Derivative computed by SymPy from the tree's own formula"""
    return sp.diff(node.to_sympy(), self.symbols[variable])

  def is_equivalent(self, left: Node, right: Node) -> bool:
    difference = sp.simplify(left.to_sympy() - right.to_sympy())
    return difference == 0

  def check_derivative(self, node: Node, variable: str) -> Dict[str, Any]:
    """
    Compare `node.diff(variable)` against SymPy's derivative of the same tree

    Returns:
        Dict with both derivatives and whether they agree
    """
    ours = node.diff(variable).to_sympy()
    reference = self.reference_derivative(node, variable)
    return {
      'derivative': ours,
      'reference': reference,
      'matches': sp.simplify(ours - reference) == 0
    }

  def latex_representation(self, node: Node) -> str:
    """Get LaTeX representation of the expression"""
    return sp.latex(node.to_sympy())
