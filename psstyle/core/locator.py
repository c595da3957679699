"""
Block Locator Module

This module finds block-introducing statements in script text and carves
out their extents (keyword through matching closing brace) so they can be
handed to the layout checks. It is a brace-matching text scanner, not a
parser: it only knows about keywords, quotes, comments and brackets.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

BLOCK_KEYWORDS = (
    'if', 'elseif', 'else', 'switch', 'while', 'do',
    'for', 'foreach', 'try', 'catch', 'finally',
)

OPENERS = {'(': ')', '[': ']'}


@dataclass(frozen=True)
class StatementBlock:
    """A block statement found in a script."""
    keyword: str
    line: int
    extent: str
    # Offset of the opening brace within extent
    open_offset: Optional[int] = field(default=None, compare=False)

    @property
    def row_count(self) -> int:
        return self.extent.count('\n') + 1

    @property
    def brace_on_first_row(self) -> bool:
        """True when the opening brace is known to sit on the statement line."""
        if self.open_offset is None:
            return False
        return '\n' not in self.extent[:self.open_offset]


class BlockLocator:
    """
    Locate block statements in script text.

    Keywords are matched case-insensitively at the start of a line, after
    indentation and an optional closing brace (``} else {``).
    """

    def __init__(self, keywords: Iterable[str] = BLOCK_KEYWORDS):
        """
        Initialize the locator.

        Args:
            keywords: Statement keywords that introduce a braced block
        """
        self.keywords = tuple(k.lower() for k in keywords)
        alternatives = '|'.join(sorted((re.escape(k) for k in self.keywords), key=len, reverse=True))
        self._keyword_re = re.compile(
            r'^[ \t]*(?:\}[ \t]*)?(' + alternatives + r')(?![-\w])',
            re.IGNORECASE | re.MULTILINE,
        )

    def find_blocks(self, text: str) -> Iterator[StatementBlock]:
        """
        Yield every block statement in ``text`` in source order.

        Args:
            text: Script source; line endings are kept verbatim

        Returns:
            Iterator of StatementBlock objects
        """
        position = 0
        for match in self._keyword_re.finditer(text):
            start = match.start(1)
            position = _advance_past_skipped(text, position, start)
            if position > start:
                logger.debug(f"Ignoring keyword inside a string or comment at offset {start}")
                continue

            line = text.count('\n', 0, start) + 1
            keyword = match.group(1).lower()

            open_index = self._find_opening_brace(text, match.end(1))
            if open_index is None:
                logger.debug(f"No block follows '{keyword}' on line {line}")
                continue

            close_index = self._find_closing_brace(text, open_index)
            if close_index is None:
                logger.warning(f"Unbalanced braces in '{keyword}' block starting on line {line}")
                continue

            yield StatementBlock(keyword, line, text[start:close_index + 1], open_index - start)

    def find_all(self, text: str) -> List[StatementBlock]:
        return list(self.find_blocks(text))

    def _find_opening_brace(self, text: str, index: int) -> Optional[int]:
        """Find the '{' that opens the block of a statement header."""
        stack = []
        length = len(text)

        while index < length:
            skipped = _skip_quoted_or_comment(text, index)
            if skipped != index:
                index = skipped
                continue

            char = text[index]
            if char in OPENERS:
                stack.append(OPENERS[char])
            elif stack and char == stack[-1]:
                stack.pop()
            elif not stack:
                if char == '{':
                    return index
                if char == ';':
                    return None
                if char == '\n':
                    # Header ends here unless the next non-blank line starts the block
                    following = _next_significant(text, index + 1)
                    if following is None or text[following] != '{':
                        return None
                    return following
            index += 1

        return None

    def _find_closing_brace(self, text: str, open_index: int) -> Optional[int]:
        """Find the '}' matching the '{' at ``open_index``."""
        depth = 0
        index = open_index
        length = len(text)

        while index < length:
            skipped = _skip_quoted_or_comment(text, index)
            if skipped != index:
                index = skipped
                continue

            char = text[index]
            if char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    return index
            index += 1

        return None


def _advance_past_skipped(text: str, index: int, target: int) -> int:
    """
    Scan from ``index`` towards ``target``, jumping over strings and comments.

    The result is greater than ``target`` when ``target`` lies inside one.
    """
    while index < target:
        skipped = _skip_quoted_or_comment(text, index)
        index = skipped if skipped != index else index + 1
    return index


def _next_significant(text: str, index: int) -> Optional[int]:
    """Index of the next character that is not whitespace, or None."""
    while index < len(text):
        if not text[index].isspace():
            return index
        index += 1
    return None


def _skip_quoted_or_comment(text: str, index: int) -> int:
    """
    Return the index just past a string or comment starting at ``index``.

    Returns ``index`` unchanged when no string or comment starts there.
    """
    char = text[index]

    if text.startswith('<#', index):
        end = text.find('#>', index + 2)
        return len(text) if end == -1 else end + 2

    if char == '#':
        end = text.find('\n', index)
        return len(text) if end == -1 else end

    if text.startswith('@"', index) or text.startswith("@'", index):
        terminator = '\n' + text[index + 1] + '@'
        end = text.find(terminator, index + 2)
        return len(text) if end == -1 else end + len(terminator)

    if char == "'":
        end = text.find("'", index + 1)
        return len(text) if end == -1 else end + 1

    if char == '"':
        i = index + 1
        while i < len(text):
            if text[i] == '`':
                i += 2
                continue
            if text[i] == '"':
                return i + 1
            i += 1
        return len(text)

    return index
