"""
Property-based tests using Hypothesis.

Randomly generated infix formulas are compiled through the
tokenize -> postfix -> tree pipeline and checked against Python's own
evaluation of the same text, which shares the precedence and associativity
of the four operators.
"""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from ode_expression import Expression, Var, DivisionByZeroError

VALUES = {'x': 1.5, 'y': -2.25, 'z': 0.5}
BINDINGS = [Var(name, value) for name, value in VALUES.items()]
NAMESPACE = {'sin': math.sin, 'cos': math.cos, **VALUES}

leaves = st.one_of(
    st.integers(min_value=0, max_value=9).map(str),
    st.sampled_from(sorted(VALUES)),
)


def _extend(children):
    return st.one_of(
        st.tuples(children, st.sampled_from(['+', '-', '*', '/']), children).map(
            lambda t: f"{t[0]} {t[1]} {t[2]}"),
        children.map(lambda c: f"({c})"),
        children.map(lambda c: f"-{c}"),
        st.tuples(st.sampled_from(['sin', 'cos']), children).map(lambda t: f"{t[0]}({t[1]})"),
    )


formulas = st.recursive(leaves, _extend, max_leaves=12)
arithmetic_formulas = st.recursive(
    leaves,
    lambda children: st.tuples(children, st.sampled_from(['+', '-', '*', '/']), children).map(
        lambda t: f"{t[0]}{t[1]}{t[2]}"),
    max_leaves=10,
)


def _reference(text):
    try:
        return float(eval(text, {'__builtins__': {}}, NAMESPACE)), None
    except ZeroDivisionError as e:
        return None, e


class TestPrecedenceFidelity:
    @given(formulas)
    @settings(max_examples=200, deadline=None)
    def test_matches_python_evaluation(self, text: str) -> None:
        """Invariant: postfix evaluation equals direct infix evaluation."""
        expected, error = _reference(text)
        expr = Expression.parse(text, require_initial=False)
        if error is not None:
            try:
                expr.evaluate(variables=BINDINGS)
            except DivisionByZeroError:
                return
            raise AssertionError(f"{text!r} should divide by zero")
        assert math.isclose(expr.evaluate(variables=BINDINGS), expected, rel_tol=1e-9, abs_tol=1e-9)

    @given(arithmetic_formulas)
    @settings(max_examples=100, deadline=None)
    def test_mixed_tiers_without_spaces(self, text: str) -> None:
        """Invariant: precedence holds for compact text such as ``2+x*3-y/z``."""
        expected, error = _reference(text)
        expr = Expression.parse(text, require_initial=False)
        if error is not None:
            return
        assert math.isclose(expr.evaluate(variables=BINDINGS), expected, rel_tol=1e-9, abs_tol=1e-9)


class TestIdempotence:
    @given(formulas)
    @settings(max_examples=100, deadline=None)
    def test_repeated_evaluation_is_bit_identical(self, text: str) -> None:
        """Invariant: no hidden state changes a second evaluation."""
        expr = Expression.parse(text, require_initial=False)
        try:
            first = expr.evaluate(variables=BINDINGS)
        except DivisionByZeroError:
            return
        second = expr.evaluate(variables=BINDINGS)
        assert first == second or (math.isnan(first) and math.isnan(second))
