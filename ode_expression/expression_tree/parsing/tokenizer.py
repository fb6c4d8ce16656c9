"""
Tokenizer

Splits formula text into lexical units and lowers unary signs. ``tokenize``
additionally reorders the units into postfix order, which is the form the
tree builder consumes.
"""

import re
from typing import List, Optional, Tuple

from ... import config
from ...errors import ParseError, message_for
from .shunting_yard import to_postfix

TOKEN_RE = re.compile(r"""
    (?P<number>""" + config.NUMBER_PATTERN + r""")
  | (?P<name>[A-Za-z_]\w*)
  | (?P<op>[-+*/])
  | (?P<paren>[()])
  | (?P<space>\s+)
  | (?P<mismatch>.)
""", re.VERBOSE)

NEGATIVE_ONE = '-1'

Lexeme = Tuple[str, str]


def _scan(text: str) -> List[Lexeme]:
    lexemes: List[Lexeme] = []
    for match in TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == 'space':
            continue
        if kind == 'mismatch':
            raise ParseError(message_for("1001", repr(match.group())), code="1001", expression=text)
        lexemes.append((kind, match.group()))
    return lexemes


def _is_unary_position(previous: Optional[Lexeme]) -> bool:
    return previous is None or previous[0] == 'op' or previous[1] == '('


def _starts_operand(lexeme: Optional[Lexeme]) -> bool:
    if lexeme is None:
        return False
    kind, text = lexeme
    return kind in ('number', 'name') or text == '(' or text in ('+', '-')


def lex(text: str) -> List[str]:
    """
    Produce the infix token sequence for ``text``.

    A sign in unary position is lowered: ``-`` becomes ``-1 *`` applied to the
    operand that follows, grouped in parentheses spanning exactly that operand
    (so ``a/-b`` still means ``-(a/b)``); ``+`` is dropped.

    Parentheses must balance and ``sin``/``cos`` must be followed by ``(``;
    either violation raises ``ParseError``.
    """
    lexemes = _scan(text)
    tokens: List[str] = []
    # paren depths at which an open "(-1 * ..." group has to be closed
    pending: List[int] = []
    depth = 0
    previous: Optional[Lexeme] = None

    for i, lexeme in enumerate(lexemes):
        kind, token = lexeme
        following = lexemes[i + 1] if i + 1 < len(lexemes) else None

        if token in config.FUNCTION_NAMES and (following is None or following[1] != '('):
            raise ParseError(message_for("1010", token), code="1010", expression=text)

        if kind == 'op' and token in ('+', '-') and _is_unary_position(previous):
            if not _starts_operand(following):
                raise ParseError(message_for("1002"), code="1002", expression=text)
            if token == '-':
                tokens.extend(['(', NEGATIVE_ONE, '*'])
                pending.append(depth)
            previous = lexeme
            continue

        tokens.append(token)
        previous = lexeme

        if token == '(':
            depth += 1
            continue
        if token == ')':
            depth -= 1
            if depth < 0:
                raise ParseError(message_for("1009"), code="1009", expression=text)
        elif kind == 'op' or token in config.FUNCTION_NAMES:
            continue

        while pending and pending[-1] == depth:
            tokens.append(')')
            pending.pop()

    if depth != 0:
        raise ParseError(message_for("1009"), code="1009", expression=text)
    return tokens


def tokenize(text: str) -> List[str]:
    """Lex ``text`` and return its tokens in postfix order."""
    if not text or not text.strip():
        raise ParseError(message_for("1000"), code="1000", expression=text)
    return to_postfix(lex(text))
