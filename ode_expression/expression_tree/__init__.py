"""Expression Tree Module

Compilation of formula text into evaluable trees.
"""

from .expression import Expression, leading_number
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode,
    IntegralNode
)
from .core.operators import (
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    evaluate_binary_op,
    evaluate_unary_op
)
from .parsing import lex, tokenize, to_postfix, build_tree

__all__ = [
    "Expression", "leading_number",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode", "IntegralNode",
    "OpType",
    "BINARY_OP_MAP", "UNARY_OP_MAP",
    "evaluate_binary_op", "evaluate_unary_op",
    "lex", "tokenize", "to_postfix", "build_tree"
]
