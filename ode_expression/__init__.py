"""ODE Expression Package

Compiles text formulas into expression trees and evaluates them as the
right-hand side of a simulated ODE system, either raw or in the scaled mode
that emulates fixed-point headroom.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, UnaryOpNode, IntegralNode,
  lex, tokenize, to_postfix, build_tree
)
from .errors import (
  ExpressionError, ParseError, UndefinedVariableError,
  DivisionByZeroError, UnknownOperatorError, CalibrationError
)
from .variables import Var, GlobalVar, merge_bindings
from .system import OdeSystem, Equation
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode", "IntegralNode",
  "lex", "tokenize", "to_postfix", "build_tree",
  "ExpressionError", "ParseError", "UndefinedVariableError",
  "DivisionByZeroError", "UnknownOperatorError", "CalibrationError",
  "Var", "GlobalVar", "merge_bindings",
  "OdeSystem", "Equation",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
