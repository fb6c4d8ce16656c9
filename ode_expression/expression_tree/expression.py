import math
import re
import sympy as sp
from typing import Iterable, List, Optional, Tuple

from .core.node import Node, ConstantNode, IntegralNode
from .parsing import tokenize, build_tree
from .utils.tree_utils import calculate_tree_depth, get_variable_names
from .. import config
from ..errors import ExpressionError, ParseError, CalibrationError, message_for
from ..logging_system import log_debug, log_info, log_warning, LogLevel
from ..variables import Var, GlobalVar, merge_bindings

_NUMBER = r'[+-]?' + config.NUMBER_PATTERN

INTEGRAL_START_RE = re.compile(r'\s*' + config.INTEGRAL_MARKER + r'\s*\(')
INTEGRAL_CALL_RE = re.compile(
  r'\s*' + config.INTEGRAL_MARKER + r'\s*\(\s*([^,]+?)\s*,\s*(.*?)\s*\)\s*$'
)
NUMBER_RE = re.compile(_NUMBER)
LEADING_NUMBER_RE = re.compile(r'\s*(' + _NUMBER + r')')


def leading_number(text: str) -> float:
  """
  Numeric value of the literal ``text`` starts with, ``NaN`` when there is none.

  Mirrors C ``strtod`` prefix parsing: ``"2.5"`` -> 2.5, ``"2+3"`` -> 2.0.
  """
  match = LEADING_NUMBER_RE.match(text)
  if match is None:
    return math.nan
  return float(match.group(1))


class Expression:
  """
  Compiled right-hand side of one ODE equation.

  Built once from text via ``parse``, optionally calibrated once, then
  evaluated any number of times against externally supplied bindings. A
  scale of ``config.NEUTRAL_SCALE`` means uncalibrated (raw evaluation);
  any other scale selects scaled evaluation.
  """

  __slots__ = ('root', 'text', 'tokens', '_scale', '_initial_condition', '_string_cache')

  def __init__(self, root: Node, initial_condition: float = 0.0,
               text: Optional[str] = None, tokens: Optional[List[str]] = None):
    self.root = root
    self.text = text
    self.tokens: List[str] = list(tokens) if tokens else []
    self._scale = config.NEUTRAL_SCALE
    self._initial_condition = float(initial_condition)
    self._string_cache: Optional[str] = None

  @classmethod
  def parse(cls, text: str, max_depth: Optional[int] = None,
            require_initial: bool = True) -> 'Expression':
    """
    Compile ``integ(<expr>, <init>)`` or a bare expression.

    A bare expression's text doubles as its initial condition through its
    leading numeric literal; see ``leading_number``. Text without one raises
    ``ParseError`` unless ``require_initial`` is False, in which case the
    initial condition is ``NaN``.
    """
    if INTEGRAL_START_RE.match(text):
      match = INTEGRAL_CALL_RE.match(text)
      if match is None:
        raise ParseError(message_for("1005"), code="1005", expression=text)
      inner, init_text = match.group(1), match.group(2)
      if NUMBER_RE.fullmatch(init_text) is None:
        raise ParseError(message_for("1006", repr(init_text)), code="1006", expression=text)
      init = float(init_text)
      tokens = tokenize(inner)
      limit = (config.MAX_TREE_DEPTH if max_depth is None else max_depth) - 1
      root: Node = IntegralNode(build_tree(tokens, max_depth=limit, expression=text))
    else:
      init = leading_number(text)
      if math.isnan(init):
        if require_initial:
          raise ParseError(message_for("1006", repr(text)), code="1006", expression=text)
        log_debug(f"no numeric initial condition in {text!r}")
      tokens = tokenize(text)
      root = build_tree(tokens, max_depth=max_depth, expression=text)

    log_debug(f"parsed {text!r} -> postfix {' '.join(tokens)}")
    return cls(root, initial_condition=init, text=text, tokens=tokens)

  # Calibration

  def calibrate(self, bounds: Tuple[float, float], limit: Optional[float] = None) -> float:
    """
    Derive the scale factor from the expected value interval ``bounds``.

    ``scale = limit / max(|lower|, |upper|)``. The initial condition and a bare
    numeric root are multiplied by it; inner constants are left untouched.
    """
    if self.is_calibrated:
      log_warning(f"refusing to recalibrate {self.text!r}")
      raise CalibrationError(message_for("3000"), code="3000", expression=self.text)

    lower, upper = bounds
    magnitude = max(abs(lower), abs(upper))
    if magnitude == 0:
      raise CalibrationError(message_for("3001"), code="3001", expression=self.text)

    representable = config.REPRESENTABLE_LIMIT if limit is None else limit
    self._scale = representable / magnitude
    self._initial_condition *= self._scale

    if isinstance(self.root, ConstantNode):
      self.root.value *= self._scale
    self._string_cache = None

    log_info(f"calibrated {self.text!r}: bounds={bounds} scale={self._scale:.6g}",
             LogLevel.DETAILED)
    return self._scale

  # Evaluation

  def evaluate(self, constants: Iterable[Var] = (), variables: Iterable[Var] = (),
               global_vars: Iterable[GlobalVar] = ()) -> float:
    """
    Evaluate against merged bindings (constants, then variables, then globals).

    Uncalibrated expressions return the true value. Calibrated ones evaluate
    in scaled mode and return the result in this expression's scaled frame.
    """
    bindings = merge_bindings(constants, variables, global_vars)
    try:
      if self._scale == config.NEUTRAL_SCALE:
        return self.root.evaluate(bindings)
      return self.root.evaluate_scaled(bindings, self._scale) * self._scale
    except ExpressionError as e:
      if e.expression is None:
        e.expression = self.text
      raise

  # Accessors

  @property
  def scale(self) -> float:
    return self._scale

  @property
  def initial_condition(self) -> float:
    return self._initial_condition

  @property
  def is_calibrated(self) -> bool:
    return self._scale != config.NEUTRAL_SCALE

  @property
  def is_integral(self) -> bool:
    return isinstance(self.root, IntegralNode)

  @property
  def is_literal(self) -> bool:
    """True when the whole source text is one numeric literal, e.g. ``-2.5``"""
    return self.text is not None and NUMBER_RE.fullmatch(self.text.strip()) is not None

  def variables(self) -> List[str]:
    """Names referenced by the tree, in order of first appearance"""
    return get_variable_names(self.root)

  def size(self) -> int:
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_prefix(self) -> str:
    """Pre-order dump of the tree, e.g. ``Integrate: + x 1``"""
    return self.root.to_prefix()

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, init={self._initial_condition!r}, scale={self._scale!r})"
