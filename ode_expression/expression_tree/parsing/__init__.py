"""Front end: text -> tokens -> postfix -> tree."""

from .tokenizer import lex, tokenize
from .shunting_yard import to_postfix
from .builder import build_tree

__all__ = ['lex', 'tokenize', 'to_postfix', 'build_tree']
