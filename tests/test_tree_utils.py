import pytest
import sympy as sp

from ode_expression import Expression, Var
from ode_expression.expression_tree import BinaryOpNode, ConstantNode, VariableNode
from ode_expression.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, get_constants, get_variable_names,
    validate_tree_structure, evaluate_with_sympy, latex_representation, tree_to_sympy
)


class TestTraversal:
    def test_orders(self):
        root = Expression.parse("a*b+c", require_initial=False).root
        breadth = get_all_nodes(root)
        depth = get_all_nodes(root, traversal_order='depth_first')
        assert [type(n) for n in breadth] == [BinaryOpNode, BinaryOpNode, VariableNode,
                                              VariableNode, VariableNode]
        assert [getattr(n, 'name', getattr(n, 'operator', None)) for n in depth] == ['+', '*', 'a', 'b', 'c']

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            get_all_nodes(ConstantNode(1.0), traversal_order='sideways')

    def test_depth(self):
        assert calculate_tree_depth(ConstantNode(1.0)) == 1
        assert calculate_tree_depth(Expression.parse("sin(x)*2", require_initial=False).root) == 3
        assert calculate_tree_depth(Expression.parse("integ(x, 0)").root) == 2

    def test_constants_and_names(self):
        root = Expression.parse("2*x + y/x - 3").root
        assert [c.value for c in get_constants(root)] == [2.0, 3.0]
        assert get_variable_names(root) == ['x', 'y']


class TestValidation:
    def test_parsed_tree_is_valid(self):
        assert validate_tree_structure(Expression.parse("integ(-x*cos(y), 1)").root)

    def test_shared_node_is_rejected(self):
        shared = VariableNode('x')
        assert not validate_tree_structure(BinaryOpNode('+', shared, shared))

    def test_missing_child_is_rejected(self):
        assert not validate_tree_structure(BinaryOpNode('+', ConstantNode(1.0), None))

    def test_nodes_are_identity_hashed(self):
        assert len({VariableNode('x'), VariableNode('x')}) == 2


class TestSympy:
    @pytest.mark.parametrize("text", [
        "2+3*4",
        "x*y - y/x",
        "-sin(x)*cos(y) + 0.5",
        "integ(x/2 - y, 0)",
    ])
    def test_matches_evaluator(self, text):
        values = {'x': 0.8, 'y': -1.7}
        expr = Expression.parse(text, require_initial=False)
        expected = expr.evaluate(variables=[Var(name, value) for name, value in values.items()])
        assert evaluate_with_sympy(expr.root, values) == pytest.approx(expected)

    def test_integral_rendering(self):
        root = Expression.parse("integ(x, 0)").root
        assert tree_to_sympy(root) == sp.Integral(sp.Symbol('x'), sp.Symbol('t'))
        assert tree_to_sympy(root, integrand_only=True) == sp.Symbol('x')

    def test_latex(self):
        assert latex_representation(Expression.parse("cos(x)", require_initial=False).root) == r"\cos{\left(x \right)}"
