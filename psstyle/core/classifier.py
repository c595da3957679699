"""
Context Classifier Module

Decides whether a parameter or named attribute argument belongs to a class
member signature. Script blocks and anonymous functions may be written
inside class source text (for instance as a property's default value), so
the reference classifier only accepts the exact ancestor shapes that class
members produce instead of walking up to any enclosing class.
"""

from enum import Enum
from typing import Iterator, Optional, Tuple

from .errors import InvalidArgumentError
from .syntax import NodeKind, SyntaxNode


class ClassifierStrategy(Enum):
    """Available class-context strategies."""
    SHAPE_MATCH = "shape"
    ANCESTRY = "ancestry"


# Expected kinds of parent, grandparent and great-grandparent. The last
# entry must also be a class-type definition.
CLASS_MEMBER_SHAPES = {
    NodeKind.NAMED_ARGUMENT: (
        NodeKind.ATTRIBUTE,
        NodeKind.PROPERTY_MEMBER,
        NodeKind.TYPE_DEFINITION,
    ),
    NodeKind.PARAMETER: (
        NodeKind.FUNCTION_DEFINITION,
        NodeKind.FUNCTION_MEMBER,
        NodeKind.TYPE_DEFINITION,
    ),
}


def _require_node(node: Optional[SyntaxNode]) -> SyntaxNode:
    if node is None:
        raise InvalidArgumentError("node must not be None")
    return node


def _matches_shape(node: SyntaxNode, shape: Tuple[NodeKind, ...]) -> bool:
    current = node
    for expected in shape:
        current = current.parent
        if current is None or current.kind != expected:
            return False
    return current.is_class_type


def is_in_class(node: SyntaxNode) -> bool:
    """
    Check whether ``node`` is part of a class property or method signature.

    A named argument must sit in an attribute of a class property, and a
    parameter must sit in the function definition of a class method. Nodes
    of any other kind are never in a class.

    Args:
        node: A NAMED_ARGUMENT or PARAMETER node

    Returns:
        True if the ancestors match a class member shape exactly

    Raises:
        InvalidArgumentError: If node is None
    """
    node = _require_node(node)
    shape = CLASS_MEMBER_SHAPES.get(node.kind)
    if shape is None:
        return False
    return _matches_shape(node, shape)


def is_in_class_by_ancestry(node: SyntaxNode) -> bool:
    """
    Legacy classifier: true if any ancestor is a class-type definition.

    Also true for parameters of script blocks nested in class members, e.g.
    a script block assigned as a property default value. Use is_in_class
    unless that behaviour is wanted.
    """
    node = _require_node(node)
    for ancestor in node.ancestors():
        if ancestor.kind == NodeKind.TYPE_DEFINITION and ancestor.is_class_type:
            return True
    return False


class ContextClassifier:
    """
    Class-context classifier bound to one strategy.

    This class provides:
    - The in-class check for a single node
    - Discovery of class member parameters and named arguments in a tree
    """

    def __init__(self, strategy: ClassifierStrategy = ClassifierStrategy.SHAPE_MATCH):
        """
        Initialize the classifier.

        Args:
            strategy: SHAPE_MATCH (reference) or ANCESTRY (legacy)
        """
        self.strategy = ClassifierStrategy(strategy)
        if self.strategy == ClassifierStrategy.SHAPE_MATCH:
            self._check = is_in_class
        else:
            self._check = is_in_class_by_ancestry

    def is_in_class(self, node: SyntaxNode) -> bool:
        """
        Check ``node`` with the configured strategy.

        Args:
            node: Node to classify

        Returns:
            True if the strategy places the node in a class

        Raises:
            InvalidArgumentError: If node is None
        """
        return self._check(node)

    def find_in_class(self, root: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield every parameter and named argument under ``root`` that is in a class."""
        root = _require_node(root)
        for node in root.walk():
            if node.kind in CLASS_MEMBER_SHAPES and self._check(node):
                yield node

    def __repr__(self):
        return f"ContextClassifier(strategy={self.strategy.value})"
