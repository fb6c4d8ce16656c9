import math
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Dict
from .operators import (
  BINARY_OP_MAP, UNARY_OP_MAP,
  evaluate_binary_op, evaluate_unary_op
)
from ...errors import (
  UndefinedVariableError, DivisionByZeroError, UnknownOperatorError, message_for
)
from ...variables import Var


def _format_number(value: float) -> str:
  if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
    return str(int(value))
  return repr(value)


class Node(ABC):
  """Base node of an expression tree; children are owned exclusively by their parent."""

  __slots__ = ('_size_cache',)

  def __init__(self):
    self._size_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, bindings: Dict[str, Var]) -> float:
    """True real value of this subtree."""
    pass

  @abstractmethod
  def evaluate_scaled(self, bindings: Dict[str, Var], scale: float) -> float:
    """Value of this subtree in the frame of an expression calibrated with ``scale``."""
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def to_prefix(self) -> str:
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

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()})"


class VariableNode(Node):
  __slots__ = ('name',)

  def __init__(self, name: str):
    super().__init__()
    self.name = name

  def _lookup(self, bindings: Dict[str, Var]) -> Var:
    try:
      return bindings[self.name]
    except KeyError:
      raise UndefinedVariableError(message_for("2000", self.name), code="2000") from None

  def evaluate(self, bindings):
    return self._lookup(bindings).value

  def evaluate_scaled(self, bindings, scale):
    return self._lookup(bindings).unscaled()

  def to_string(self) -> str:
    return self.name

  def to_prefix(self) -> str:
    return self.name

  def to_sympy(self):
    return sp.Symbol(self.name)

  def _compute_size(self) -> int:
    return 1


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, bindings):
    return self.value

  def evaluate_scaled(self, bindings, scale):
    return self.value * scale

  def to_string(self) -> str:
    return _format_number(self.value)

  def to_prefix(self) -> str:
    return _format_number(self.value)

  def to_sympy(self):
    return sp.Float(self.value)

  def _compute_size(self) -> int:
    return 1


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    self.operator = operator
    self.left = left
    self.right = right

  def _apply(self, left_val: float, right_val: float) -> float:
    op_type = BINARY_OP_MAP.get(self.operator)
    if op_type is None:
      raise UnknownOperatorError(message_for("2002", self.operator), code="2002")
    if self.operator == '/' and right_val == 0.0:
      raise DivisionByZeroError(message_for("2001"), code="2001")
    return evaluate_binary_op(float(left_val), float(right_val), int(op_type))

  def evaluate(self, bindings):
    left_val = self.left.evaluate(bindings)
    right_val = self.right.evaluate(bindings)
    return self._apply(left_val, right_val)

  def evaluate_scaled(self, bindings, scale):
    left_val = self.left.evaluate_scaled(bindings, scale)
    right_val = self.right.evaluate_scaled(bindings, scale)
    return self._apply(left_val, right_val)

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def to_prefix(self) -> str:
    return f"{self.operator} {self.left.to_prefix()} {self.right.to_prefix()}"

  def to_sympy(self):
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.operator == '+':
      return sp.Add(left, right)
    elif self.operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif self.operator == '*':
      return sp.Mul(left, right)
    elif self.operator == '/':
      return sp.Mul(left, sp.Pow(right, -1))
    raise UnknownOperatorError(message_for("2002", self.operator), code="2002")

  def _compute_size(self) -> int:
    return 1 + self.left.size() + self.right.size()


class UnaryOpNode(Node):
  """sin/cos application; the argument is the single (right) child."""

  __slots__ = ('operator', 'operand')

  def __init__(self, operator: str, operand: Node):
    super().__init__()
    self.operator = operator
    self.operand = operand

  def _apply(self, operand_val: float) -> float:
    op_type = UNARY_OP_MAP.get(self.operator)
    if op_type is None:
      raise UnknownOperatorError(message_for("2002", self.operator), code="2002")
    return evaluate_unary_op(float(operand_val), int(op_type))

  def evaluate(self, bindings):
    return self._apply(self.operand.evaluate(bindings))

  def evaluate_scaled(self, bindings, scale):
    return self._apply(self.operand.evaluate_scaled(bindings, scale))

  def to_string(self) -> str:
    return f"{self.operator}({self.operand.to_string()})"

  def to_prefix(self) -> str:
    return f"{self.operator} {self.operand.to_prefix()}"

  def to_sympy(self):
    operand_sympy = self.operand.to_sympy()
    if self.operator == 'sin':
      return sp.sin(operand_sympy)
    elif self.operator == 'cos':
      return sp.cos(operand_sympy)
    raise UnknownOperatorError(message_for("2002", self.operator), code="2002")

  def _compute_size(self) -> int:
    return 1 + self.operand.size()


class IntegralNode(Node):
  """
  Marker wrapping a derivative expression.

  The integrated quantity itself is state owned by the integration loop, so
  evaluating this node yields the derivative, i.e. its operand's value.
  """

  __slots__ = ('operand',)

  def __init__(self, operand: Node):
    super().__init__()
    self.operand = operand

  def evaluate(self, bindings):
    return self.operand.evaluate(bindings)

  def evaluate_scaled(self, bindings, scale):
    return self.operand.evaluate_scaled(bindings, scale)

  def to_string(self) -> str:
    return f"integ({self.operand.to_string()})"

  def to_prefix(self) -> str:
    return f"Integrate: {self.operand.to_prefix()}"

  def to_sympy(self):
    return sp.Integral(self.operand.to_sympy(), sp.Symbol('t'))

  def _compute_size(self) -> int:
    return 1 + self.operand.size()
