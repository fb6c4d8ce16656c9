"""
Process-wide settings for expression compilation and evaluation.

Values here are read at call time, so a host may override them once at
start-up (e.g. ``config.REPRESENTABLE_LIMIT = 10.0``) before calibrating.
"""

# Largest magnitude the target fixed-point representation can hold.
REPRESENTABLE_LIMIT: float = 1.0

# Scale factor of an expression or variable that has never been calibrated.
NEUTRAL_SCALE: float = 0.0

# Deepest tree the builder accepts; evaluation recurses once per level.
MAX_TREE_DEPTH: int = 256

FUNCTION_NAMES = ('sin', 'cos')
BINARY_OPERATORS = ('+', '-', '*', '/')
INTEGRAL_MARKER = 'integ'

# Unsigned decimal literal shared by the lexer, the tree builder and the
# initial-condition parser: ``2``, ``2.``, ``.5``, ``1.5e-3``.
NUMBER_PATTERN = r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
