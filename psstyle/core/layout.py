"""
Block Layout Module

Line-oriented checks of where the opening brace of a block statement is
placed. Every check takes the statement extent, from the keyword through
the closing brace, exactly as it appears in the source.
"""

import re
from typing import List

from .errors import require_text

BRACE_AT_END_RE = re.compile(r'\{\s*$')
BRACE_WITH_CONTENT_RE = re.compile(r'\{.+')


def split_into_rows(text: str) -> List[str]:
    """
    Split text into rows, treating '\\r\\n' and '\\n' the same way.

    Every carriage return is dropped before splitting on line feeds, so
    the result does not depend on the platform that wrote the text.
    """
    return text.replace('\r', '').split('\n')


def opening_brace_on_same_line(statement_block: str) -> bool:
    """
    Check whether the opening brace ends the statement's first line.

    Args:
        statement_block: Statement extent

    Returns:
        True if row 0 ends with '{' plus optional trailing whitespace

    Raises:
        InvalidArgumentError: If statement_block is None or empty
    """
    rows = split_into_rows(require_text(statement_block, 'statement_block'))
    if not rows:
        return False
    return BRACE_AT_END_RE.search(rows[0]) is not None


def opening_brace_not_followed_by_new_line(statement_block: str) -> bool:
    """
    Check for code sharing the line of an opening brace placed on row 1.

    True is the violation: row 1 holds '{' followed by at least one more
    character, as in ``"if ($x)\\n{ $y\\n}"``.

    Raises:
        InvalidArgumentError: If statement_block is None or empty
    """
    rows = split_into_rows(require_text(statement_block, 'statement_block'))
    if len(rows) < 2:
        return False
    return BRACE_WITH_CONTENT_RE.search(rows[1]) is not None


def opening_brace_followed_by_more_than_one_new_line(statement_block: str) -> bool:
    """
    Check for a blank line left after the opening brace.

    True when row 2 is empty or whitespace only.

    Raises:
        InvalidArgumentError: If statement_block is None or empty
    """
    rows = split_into_rows(require_text(statement_block, 'statement_block'))
    if len(rows) < 3:
        return False
    return not rows[2].strip()
