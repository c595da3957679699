"""
Syntax Model Module

This module defines the syntax tree nodes consumed by the analysis core.
Trees are built by an external parser (or loaded from a JSON document) and
are only read by the classifier: nodes own their children, while the
parent link is a weak back-reference used for lookups.
"""

import json
import logging
import weakref
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .errors import InvalidArgumentError, TreeFormatError

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Kinds of syntax nodes understood by the analyses."""
    NAMED_ARGUMENT = "NamedArgument"
    PARAMETER = "Parameter"
    PROPERTY_MEMBER = "PropertyMember"
    FUNCTION_MEMBER = "FunctionMember"
    TYPE_DEFINITION = "TypeDefinition"
    ATTRIBUTE = "Attribute"
    FUNCTION_DEFINITION = "FunctionDefinition"
    SCRIPT_BLOCK = "ScriptBlock"
    PARAM_BLOCK = "ParamBlock"
    STATEMENT = "Statement"
    EXPRESSION = "Expression"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> 'NodeKind':
        """Look up a kind by its value ('TypeDefinition') or name ('TYPE_DEFINITION')."""
        if isinstance(value, cls):
            return value
        for kind in cls:
            if value == kind.value or value == kind.name:
                return kind
        raise TreeFormatError(f"Unknown node kind: {value!r}")


class SyntaxNode:
    """
    A node of a syntax tree.

    ``children`` holds the nodes this node owns. ``parent`` is resolved
    through a weak reference, so a subtree detached from its root loses
    its parent link once the root is garbage collected.
    """

    def __init__(self, kind: NodeKind, is_class_type: bool = False,
                 name: Optional[str] = None, extent: Optional[str] = None):
        self.kind = kind
        self.name = name
        self.extent = extent
        self.children: List['SyntaxNode'] = []
        self._is_class_type = bool(is_class_type)
        self._parent_ref = None

    @property
    def is_class_type(self) -> bool:
        """True when this TypeDefinition declares a class rather than an enum."""
        return self._is_class_type

    @property
    def parent(self) -> Optional['SyntaxNode']:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def add_child(self, child: 'SyntaxNode') -> 'SyntaxNode':
        """
        Attach ``child`` under this node and return it.

        Raises:
            InvalidArgumentError: If child is None, already has a parent,
                or is an ancestor of this node
        """
        if child is None:
            raise InvalidArgumentError("child must not be None")
        if child.parent is not None:
            raise InvalidArgumentError("child already belongs to another node")
        if child is self or any(ancestor is child for ancestor in self.ancestors()):
            raise InvalidArgumentError("attaching child would create a cycle")

        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator['SyntaxNode']:
        """Yield the parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator['SyntaxNode']:
        """Yield this node and all of its descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self):
        label = f", name='{self.name}'" if self.name else ""
        if self.kind == NodeKind.TYPE_DEFINITION:
            label += f", is_class_type={self.is_class_type}"
        return f"SyntaxNode(kind={self.kind.value}{label})"


def build_tree(data: Dict[str, Any]) -> SyntaxNode:
    """
    Build a syntax tree from nested dictionaries.

    Each dictionary needs a ``kind`` and may carry ``is_class_type``,
    ``name``, ``extent`` and a ``children`` list.

    Args:
        data: Dictionary describing the root node

    Returns:
        The root SyntaxNode
    """
    if data is None:
        raise InvalidArgumentError("tree data must not be None")

    root = _build_node(data)
    pending = [(root, data)]

    while pending:
        node, node_data = pending.pop()
        children = node_data.get('children', [])
        if not isinstance(children, list):
            raise TreeFormatError(f"'children' must be a list, got {type(children).__name__}")
        for child_data in children:
            child = node.add_child(_build_node(child_data))
            pending.append((child, child_data))

    return root


def _build_node(data: Dict[str, Any]) -> SyntaxNode:
    """Create a single detached node from its dictionary form."""
    if not isinstance(data, dict):
        raise TreeFormatError(f"Node must be an object, got {type(data).__name__}")
    if 'kind' not in data:
        raise TreeFormatError("Node is missing required field 'kind'")

    is_class_type = data.get('is_class_type', False)
    if not isinstance(is_class_type, bool):
        raise TreeFormatError(f"'is_class_type' must be a boolean, got {is_class_type!r}")

    return SyntaxNode(
        NodeKind.parse(data['kind']),
        is_class_type=is_class_type,
        name=data.get('name'),
        extent=data.get('extent'),
    )


def load_tree(filepath: str) -> SyntaxNode:
    """
    Load a syntax tree from a JSON file.

    Args:
        filepath: Path to a JSON document in the ``build_tree`` format

    Returns:
        The root SyntaxNode
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TreeFormatError(f"Invalid JSON in {filepath}: {e}") from e

    root = build_tree(data)
    logger.debug(f"Loaded syntax tree from {filepath}: {sum(1 for _ in root.walk())} nodes")
    return root
