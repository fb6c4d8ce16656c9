"""
Tree Utility Functions

Traversal and structural checks shared by the Expression class, the ODE
system adapter and the tests.
"""

from typing import List, Type, TypeVar, cast

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, VariableNode, IntegralNode

T = TypeVar('T', bound=Node)


def _children(node: Node) -> List[Node]:
    if isinstance(node, BinaryOpNode):
        return [node.left, node.right]
    if isinstance(node, (UnaryOpNode, IntegralNode)):
        return [node.operand]
    return []


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)
        all_nodes.append(current_node)
        nodes_to_visit.extend(_children(current_node))

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Pre-order traversal with an explicit stack"""
    stack = [node]
    nodes = []

    while stack:
        current_node = stack.pop()
        nodes.append(current_node)
        stack.extend(reversed(_children(current_node)))

    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    depth = 0
    level = [node]
    while level:
        depth += 1
        level = [child for current in level for child in _children(current)]
    return depth


def find_nodes_by_type(node: Node, node_type: Type[T]) -> List[T]:
    """Find all nodes of a specific type in pre-order."""
    return [n for n in _depth_first_traversal(node) if isinstance(n, node_type)]


def get_constants(node: Node) -> List[ConstantNode]:
    """Get all constant nodes in the tree."""
    return cast(List[ConstantNode], find_nodes_by_type(node, ConstantNode))


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_type(node, VariableNode))


def get_variable_names(node: Node) -> List[str]:
    """Distinct variable names in order of first appearance."""
    names: List[str] = []
    for var in get_variables(node):
        if var.name not in names:
            names.append(var.name)
    return names


def validate_tree_structure(node: Node) -> bool:
    """
    Check the arity invariants and that no node is reachable twice.

    Returns:
        True if tree structure is valid, False otherwise
    """
    seen = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            return False
        seen.add(id(current))

        if isinstance(current, BinaryOpNode):
            if not isinstance(current.left, Node) or not isinstance(current.right, Node):
                return False
        elif isinstance(current, (UnaryOpNode, IntegralNode)):
            if not isinstance(current.operand, Node):
                return False
        elif not isinstance(current, (ConstantNode, VariableNode)):
            return False

        stack.extend(_children(current))

    return True
