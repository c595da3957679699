"""
Core modules for class-context classification and brace layout checks.
"""

from .classifier import ClassifierStrategy, ContextClassifier, is_in_class, is_in_class_by_ancestry
from .layout import (
    split_into_rows,
    opening_brace_on_same_line,
    opening_brace_not_followed_by_new_line,
    opening_brace_followed_by_more_than_one_new_line,
)
from .syntax import NodeKind, SyntaxNode, build_tree, load_tree
from .locator import BlockLocator, StatementBlock
from .checker import BraceStyle, LayoutChecker, LayoutReport, LayoutSettings, Violation

__all__ = [
    'ClassifierStrategy',
    'ContextClassifier',
    'is_in_class',
    'is_in_class_by_ancestry',
    'split_into_rows',
    'opening_brace_on_same_line',
    'opening_brace_not_followed_by_new_line',
    'opening_brace_followed_by_more_than_one_new_line',
    'NodeKind',
    'SyntaxNode',
    'build_tree',
    'load_tree',
    'BlockLocator',
    'StatementBlock',
    'BraceStyle',
    'LayoutChecker',
    'LayoutReport',
    'LayoutSettings',
    'Violation',
]
