"""Infix to postfix reordering (shunting-yard) with two precedence tiers."""

from typing import List, Sequence

from ... import config

ADDITIVE = ('+', '-')
MULTIPLICATIVE = ('*', '/')


def to_postfix(tokens: Sequence[str]) -> List[str]:
    """
    Reorder an infix token sequence into postfix order.

    ``+ -`` sit below ``* /``; both tiers are left-associative. ``sin``/``cos``
    are held on the stack with their opening parenthesis and emitted right
    after the matching ``)``.
    """
    postfix: List[str] = []
    stack: List[str] = []

    for token in tokens:
        if token in ADDITIVE:
            while stack and stack[-1] in config.BINARY_OPERATORS:
                postfix.append(stack.pop())
            stack.append(token)
        elif token in MULTIPLICATIVE:
            while stack and stack[-1] in MULTIPLICATIVE:
                postfix.append(stack.pop())
            stack.append(token)
        elif token in config.FUNCTION_NAMES or token == '(':
            stack.append(token)
        elif token == ')':
            while stack and stack[-1] != '(':
                postfix.append(stack.pop())
            if stack:
                stack.pop()
            if stack and stack[-1] in config.FUNCTION_NAMES:
                postfix.append(stack.pop())
        else:
            postfix.append(token)

    while stack:
        postfix.append(stack.pop())

    return postfix
