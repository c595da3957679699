"""
psstyle

Class-context classification and brace layout checks for a PowerShell
style checker.
"""

__version__ = "1.0.0"

from .core.classifier import ContextClassifier, is_in_class
from .core.checker import LayoutChecker, LayoutSettings
from .core.locator import BlockLocator
from .core.errors import InvalidArgumentError

__all__ = [
    'ContextClassifier',
    'is_in_class',
    'LayoutChecker',
    'LayoutSettings',
    'BlockLocator',
    'InvalidArgumentError',
]
