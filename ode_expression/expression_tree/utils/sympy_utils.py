import sympy as sp
from typing import Dict, Optional

from ..core.node import Node, IntegralNode


def tree_to_sympy(node: Node, integrand_only: bool = False) -> sp.Expr:
  """Convert a tree to a SymPy expression; an integral root may be unwrapped."""
  if integrand_only and isinstance(node, IntegralNode):
    node = node.operand
  return node.to_sympy()


def evaluate_with_sympy(node: Node, values: Optional[Dict[str, float]] = None) -> float:
  """
  Evaluate a tree through SymPy substitution.

  Serves as an independent reference for the jitted evaluator.
  """
  values = values or {}
  sympy_expr = tree_to_sympy(node, integrand_only=True)
  substitutions = {sp.Symbol(name): value for name, value in values.items()}
  return float(sympy_expr.evalf(subs=substitutions))


def latex_representation(node: Node) -> str:
  """Get LaTeX representation of the tree"""
  return sp.latex(tree_to_sympy(node))
