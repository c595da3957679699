"""
Layout Checker Module

This module turns the block layout checks into diagnostics. It applies a
brace style to every block statement found in a script, and scans single
files or whole directories of PowerShell sources.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .layout import (
    opening_brace_followed_by_more_than_one_new_line,
    opening_brace_not_followed_by_new_line,
    opening_brace_on_same_line,
)
from .locator import BlockLocator, StatementBlock

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = ('.ps1', '.psm1', '.psd1')


class BraceStyle(Enum):
    """Where the opening brace of a block belongs."""
    SAME_LINE = "same-line"
    NEW_LINE = "new-line"


class Severity(Enum):
    """Diagnostic severity levels."""
    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


RULES = {
    'BRACE_SHOULD_EOL': {
        'severity': Severity.WARNING,
        'message': 'Opening brace should be on the same line as the statement',
    },
    'BRACE_SHOULD_NEWLINE': {
        'severity': Severity.WARNING,
        'message': 'Opening brace should be on its own line',
    },
    'BRACE_NEWLINE': {
        'severity': Severity.WARNING,
        'message': 'Opening brace should be followed by a new line',
    },
    'CONSECUTIVE_NEWLINES': {
        'severity': Severity.INFORMATION,
        'message': 'Opening brace should not be followed by an empty line',
    },
}


@dataclass(frozen=True)
class LayoutSettings:
    """Brace layout configuration."""
    brace_style: BraceStyle = BraceStyle.NEW_LINE
    check_new_line_after: bool = True
    check_extra_new_line: bool = True
    ignore_one_line_block: bool = True


@dataclass
class Violation:
    """A single brace layout diagnostic."""
    rule: str
    line: int
    keyword: str
    message: str
    severity: Severity

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['severity'] = self.severity.value
        return data


@dataclass
class LayoutReport:
    """Result of checking a single file or source text."""
    filepath: str
    status: str
    violations: List[Violation] = field(default_factory=list)
    message: str = ""

    @property
    def error_count(self) -> int:
        return len(self.violations)

    def to_dict(self) -> Dict:
        return {
            'filepath': self.filepath,
            'status': self.status,
            'error_count': self.error_count,
            'message': self.message,
            'violations': [v.to_dict() for v in self.violations],
        }


class LayoutChecker:
    """
    Checker applying brace layout rules to PowerShell sources.

    This class provides:
    - Per-block diagnostics under a configurable brace style
    - Checking of source text, single files and directories
    - Summary statistics for the last directory run
    """

    def __init__(self, settings: Optional[LayoutSettings] = None,
                 locator: Optional[BlockLocator] = None):
        """
        Initialize the checker.

        Args:
            settings: Brace layout configuration (defaults to LayoutSettings())
            locator: Block locator used to find statements in source text
        """
        self.settings = settings or LayoutSettings()
        self.locator = locator or BlockLocator()
        self.reports: List[LayoutReport] = []

    def _violation(self, rule: str, block: StatementBlock) -> Violation:
        info = RULES[rule]
        return Violation(
            rule=rule,
            line=block.line,
            keyword=block.keyword,
            message=info['message'],
            severity=info['severity'],
        )

    def check_block(self, block: StatementBlock) -> List[Violation]:
        """
        Check a single block statement.

        Args:
            block: Statement block with its extent

        Returns:
            List of violations, empty when the block is well formed
        """
        if self.settings.ignore_one_line_block and block.row_count == 1:
            return []

        violations = []
        on_same_line = opening_brace_on_same_line(block.extent)

        if self.settings.brace_style == BraceStyle.SAME_LINE:
            if not on_same_line:
                violations.append(self._violation('BRACE_SHOULD_EOL', block))
            return violations

        if on_same_line or block.brace_on_first_row:
            violations.append(self._violation('BRACE_SHOULD_NEWLINE', block))
            return violations

        if self.settings.check_new_line_after and opening_brace_not_followed_by_new_line(block.extent):
            violations.append(self._violation('BRACE_NEWLINE', block))

        if self.settings.check_extra_new_line and opening_brace_followed_by_more_than_one_new_line(block.extent):
            violations.append(self._violation('CONSECUTIVE_NEWLINES', block))

        return violations

    def check_source(self, text: str, filepath: str = "<string>") -> LayoutReport:
        """
        Check every block statement in ``text``.

        Args:
            text: Script source
            filepath: Name reported for the source

        Returns:
            LayoutReport with all violations in source order
        """
        violations = []
        for block in self.locator.find_blocks(text):
            violations.extend(self.check_block(block))

        status = "Error" if violations else "OK"
        return LayoutReport(filepath, status, violations)

    def check_file(self, filepath: str) -> LayoutReport:
        """
        Check a single script file.

        Args:
            filepath: Path to the script

        Returns:
            LayoutReport; unreadable files get status 'Error' and a message
        """
        try:
            with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read file {filepath}: {e}")
            return LayoutReport(filepath, "Error", message=str(e))

        report = self.check_source(text, filepath)
        logger.debug(f"Checked {filepath}: {report.error_count} violations")
        return report

    def check_directory(self, directory: str, recursive: bool = True) -> List[LayoutReport]:
        """
        Check all script files in a directory.

        Args:
            directory: Path to the directory
            recursive: Whether to check subdirectories

        Returns:
            List of LayoutReport objects, one per script file
        """
        path = Path(directory)
        if not path.is_dir():
            logger.error(f"Directory not found: {directory}")
            self.reports = []
            return self.reports

        script_files = []
        for extension in SCRIPT_EXTENSIONS:
            pattern = f"**/*{extension}" if recursive else f"*{extension}"
            script_files.extend(path.glob(pattern))

        logger.info(f"Found {len(script_files)} script files to check")

        self.reports = [self.check_file(str(p)) for p in sorted(script_files)]
        return self.reports

    def get_summary(self) -> Dict:
        """
        Get summary statistics of the last directory run.

        Returns:
            Dictionary with summary statistics
        """
        if not self.reports:
            return {}

        total_files = len(self.reports)
        ok_files = len([r for r in self.reports if r.status == "OK"])
        total_violations = sum(r.error_count for r in self.reports)

        rule_counts = {}
        for report in self.reports:
            for violation in report.violations:
                rule_counts[violation.rule] = rule_counts.get(violation.rule, 0) + 1

        return {
            'total_files': total_files,
            'ok_files': ok_files,
            'error_files': total_files - ok_files,
            'total_violations': total_violations,
            'rule_counts': rule_counts,
            'success_rate': ok_files / total_files * 100,
        }
