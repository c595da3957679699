"""
Unit tests for the block locator.

These tests cover:
- Extents from keyword through closing brace
- Nested blocks and else/elseif chains
- Braces inside strings, comments and conditions
- Statements that do not introduce a block
"""

import logging

import pytest

from psstyle.core.locator import BlockLocator, StatementBlock


class TestStatementBlock:
    """Test the StatementBlock dataclass."""

    def test_row_count(self):
        assert StatementBlock('if', 1, "if ($x) { 1 }").row_count == 1
        assert StatementBlock('if', 1, "if ($x)\r\n{\r\n 1\r\n}").row_count == 4


class TestBlockLocator:
    """Test the BlockLocator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.locator = BlockLocator()

    def test_brace_on_next_line(self):
        blocks = self.locator.find_all("if ($x)\n{\n    $y\n}\n")

        assert blocks == [StatementBlock('if', 1, "if ($x)\n{\n    $y\n}")]

    def test_brace_on_same_line(self):
        blocks = self.locator.find_all("$a = 1\nwhile ($a -lt 3) {\n    $a++\n}\n")

        assert len(blocks) == 1
        assert blocks[0].keyword == 'while'
        assert blocks[0].line == 2
        assert blocks[0].extent == "while ($a -lt 3) {\n    $a++\n}"

    def test_nested_blocks(self):
        text = "foreach ($i in $items) {\n    if ($i) {\n        $i\n    }\n}"

        blocks = self.locator.find_all(text)

        assert [(b.keyword, b.line) for b in blocks] == [('foreach', 1), ('if', 2)]
        assert blocks[0].extent == text
        assert blocks[1].extent == "if ($i) {\n        $i\n    }"

    def test_else_after_closing_brace(self):
        text = "if ($a) {\n    1\n} elseif ($b) {\n    2\n} else {\n    3\n}"

        blocks = self.locator.find_all(text)

        assert [b.keyword for b in blocks] == ['if', 'elseif', 'else']
        assert blocks[2].extent == "else {\n    3\n}"
        assert blocks[2].line == 5

    def test_try_catch_finally(self):
        text = "try\n{\n    Get-Item\n}\ncatch [System.IO.IOException]\n{\n    1\n}\nfinally\n{\n    2\n}"

        blocks = self.locator.find_all(text)

        assert [b.keyword for b in blocks] == ['try', 'catch', 'finally']
        assert blocks[1].extent == "catch [System.IO.IOException]\n{\n    1\n}"

    def test_do_while_tail_is_not_a_block(self):
        text = "do {\n    $i++\n} while ($i -lt 3)\n$next = 1\n"

        blocks = self.locator.find_all(text)

        assert [b.keyword for b in blocks] == ['do']

    def test_braces_in_strings_and_comments(self):
        text = "if ($x) {\n    Write-Host '}'\n    Write-Host \"`\"}\"\n    # }\n    <# } #>\n}"

        blocks = self.locator.find_all(text)

        assert len(blocks) == 1
        assert blocks[0].extent == text

    def test_hashtable_in_condition(self):
        text = "if ($h -eq @{ a = 1 }) {\n    1\n}"

        blocks = self.locator.find_all(text)

        assert blocks[0].extent == text

    def test_case_insensitive_keywords(self):
        blocks = self.locator.find_all("ForEach ($i in 1..3)\n{\n    $i\n}")

        assert blocks[0].keyword == 'foreach'

    def test_cmdlet_names_are_not_keywords(self):
        assert self.locator.find_all("ForEach-Object {\n    $_\n}") == []
        assert self.locator.find_all("$items | foreach {\n    $_\n}") == []

    def test_crlf_preserved_in_extent(self):
        text = "if ($x)\r\n{\r\n    $y\r\n}\r\n"

        blocks = self.locator.find_all(text)

        assert blocks[0].extent == "if ($x)\r\n{\r\n    $y\r\n}"

    def test_statement_terminator(self):
        assert self.locator.find_all("if ($x) ; { 1 }") == []

    def test_unbalanced_block_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger='psstyle.core.locator'):
            blocks = self.locator.find_all("if ($x) {\n    1\n")

        assert blocks == []
        assert "Unbalanced braces" in caplog.text

    def test_custom_keywords(self):
        locator = BlockLocator(keywords=['switch'])

        blocks = locator.find_all("if ($x) {\n 1\n}\nswitch ($x) {\n    1 { 'one' }\n}")

        assert [b.keyword for b in blocks] == ['switch']

    def test_keyword_inside_here_string_is_ignored(self):
        assert self.locator.find_all("$t = @'\nif ($x) {\n  1\n}\n'@\n") == []

    def test_keyword_inside_block_comment_is_ignored(self):
        assert self.locator.find_all("<#\n.DESCRIPTION\nif ($x) { see docs\n}\n#>\n") == []

    def test_block_after_comment_based_help(self):
        text = "<#\n.EXAMPLE\nforeach ($i in $a) {\n}\n#>\nif ($x)\n{\n    1\n}\n"

        blocks = self.locator.find_all(text)

        assert [(b.keyword, b.line) for b in blocks] == [('if', 6)]

    def test_open_offset(self):
        own_line, same_line = self.locator.find_all("if ($x)\n{\n 1\n}\nwhile ($y) { 2\n}")

        assert own_line.open_offset == 8
        assert own_line.brace_on_first_row is False
        assert same_line.open_offset == 11
        assert same_line.brace_on_first_row is True

    def test_open_offset_unknown(self):
        assert StatementBlock('if', 1, "if ($x) { 1\n}").brace_on_first_row is False

    @pytest.mark.parametrize('text', ["", "\n\n", "$x = 1", "if"])
    def test_no_blocks(self, text):
        assert self.locator.find_all(text) == []
