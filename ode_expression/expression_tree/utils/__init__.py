"""Utilities for expression trees."""

from .sympy_utils import tree_to_sympy, evaluate_with_sympy, latex_representation
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_type,
    get_constants, get_variables, get_variable_names, validate_tree_structure
)

__all__ = [
    'tree_to_sympy', 'evaluate_with_sympy', 'latex_representation',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_type',
    'get_constants', 'get_variables', 'get_variable_names', 'validate_tree_structure'
]
