import re
from typing import List, Optional, Sequence, Tuple

from ... import config
from ...errors import ParseError, message_for
from ..core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode

NUMBER_RE = re.compile(r'[+-]?' + config.NUMBER_PATTERN)
NAME_RE = re.compile(r'[A-Za-z_]\w*')


def _pop(stack: List[Tuple[Node, int]], token: str, expression: Optional[str]) -> Tuple[Node, int]:
  if not stack:
    raise ParseError(message_for("1003", repr(token)), code="1003", expression=expression)
  return stack.pop()


def build_tree(postfix: Sequence[str], max_depth: Optional[int] = None,
               expression: Optional[str] = None) -> Node:
  """
  Build an expression tree from a postfix token sequence.

  Operators pop their right operand first, then the left one. Each stack
  entry carries the depth of its subtree so the depth cap is enforced
  without a second walk.
  """
  limit = config.MAX_TREE_DEPTH if max_depth is None else max_depth
  stack: List[Tuple[Node, int]] = []

  for token in postfix:
    if not token:
      raise ParseError(message_for("1000"), code="1000", expression=expression)
    if token in ('(', ')'):
      raise ParseError(message_for("1009"), code="1009", expression=expression)

    if NUMBER_RE.fullmatch(token):
      node, depth = ConstantNode(float(token)), 1
    elif token in config.FUNCTION_NAMES:
      operand, operand_depth = _pop(stack, token, expression)
      node, depth = UnaryOpNode(token, operand), operand_depth + 1
    elif NAME_RE.fullmatch(token):
      node, depth = VariableNode(token), 1
    else:
      right, right_depth = _pop(stack, token, expression)
      left, left_depth = _pop(stack, token, expression)
      node, depth = BinaryOpNode(token, left, right), 1 + max(left_depth, right_depth)

    if depth > limit:
      raise ParseError(message_for("1007", limit), code="1007", expression=expression)
    stack.append((node, depth))

  if not stack:
    raise ParseError(message_for("1000"), code="1000", expression=expression)
  if len(stack) > 1:
    raise ParseError(message_for("1004"), code="1004", expression=expression)
  return stack[0][0]
