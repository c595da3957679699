"""
Command-line interface for psstyle.

This module provides CLI commands for checking brace layout in PowerShell
scripts and for inspecting the class context of syntax tree nodes.
"""

import json
import logging
import os
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..core.checker import BraceStyle, LayoutChecker, LayoutSettings
from ..core.classifier import ClassifierStrategy, ContextClassifier, CLASS_MEMBER_SHAPES
from ..core.errors import PsStyleError
from ..core.syntax import load_tree

console = Console()

logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose):
    """psstyle - brace layout and class context checks for PowerShell sources."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--recursive/--no-recursive', default=True, help='Check directories recursively')
@click.option('--style', type=click.Choice([s.value for s in BraceStyle]),
              default=BraceStyle.NEW_LINE.value, help='Required opening brace placement')
@click.option('--no-new-line-check', is_flag=True, help='Allow code on the opening brace line')
@click.option('--no-extra-line-check', is_flag=True, help='Allow empty lines after the opening brace')
@click.option('--output', '-o', type=click.Path(), help='Output file for results (JSON format)')
@click.option('--show-details', is_flag=True, help='Show every violation')
def braces(path, recursive, style, no_new_line_check, no_extra_line_check, output, show_details):
    """Check brace layout of block statements in a file or directory."""
    settings = LayoutSettings(
        brace_style=BraceStyle(style),
        check_new_line_after=not no_new_line_check,
        check_extra_new_line=not no_extra_line_check,
    )
    checker = LayoutChecker(settings)

    if os.path.isfile(path):
        reports = [checker.check_file(path)]
        checker.reports = reports
    else:
        reports = checker.check_directory(path, recursive=recursive)

    if not reports:
        console.print("[yellow]No PowerShell files found[/yellow]")
        return

    display_layout_results(checker.get_summary(), reports, show_details)

    if output:
        with open(output, 'w') as f:
            json.dump({
                'summary': checker.get_summary(),
                'files': [r.to_dict() for r in reports],
            }, f, indent=2)
        console.print(f"[green]Results saved to {output}[/green]")

    if any(r.status != "OK" for r in reports):
        sys.exit(1)


@main.command()
@click.argument('tree_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--strategy', type=click.Choice([s.value for s in ClassifierStrategy]),
              default=ClassifierStrategy.SHAPE_MATCH.value, help='Class context strategy')
def context(tree_file, strategy):
    """Show which parameters and named arguments of a JSON syntax tree are in a class."""
    classifier = ContextClassifier(ClassifierStrategy(strategy))

    try:
        root = load_tree(tree_file)
    except (OSError, PsStyleError) as e:
        console.print(f"[red]Error loading syntax tree: {e}[/red]")
        sys.exit(1)

    table = Table(title=f"Class context ({classifier.strategy.value})")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Parent", style="dim")
    table.add_column("In class", justify="center")

    for node in root.walk():
        if node.kind not in CLASS_MEMBER_SHAPES:
            continue
        in_class = classifier.is_in_class(node)
        verdict = "[green]yes[/green]" if in_class else "[dim]no[/dim]"
        parent = node.parent.kind.value if node.parent is not None else "-"
        table.add_row(node.kind.value, node.name or "-", parent, verdict)

    console.print(table)


def display_layout_results(summary, reports, show_details):
    """Display brace layout results in a summary panel and tables."""
    summary_text = f"""
Total Files: {summary['total_files']}
OK Files: {summary['ok_files']}
Error Files: {summary['error_files']}
Success Rate: {summary['success_rate']:.1f}%
Total Violations: {summary['total_violations']}
    """.strip()

    console.print(Panel(summary_text, title="Brace Layout Summary", border_style="blue"))

    table = Table(title="Files")
    table.add_column("File", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Violations", justify="center")

    for report in reports:
        status_style = "green" if report.status == "OK" else "red"
        table.add_row(
            report.filepath,
            f"[{status_style}]{report.status}[/{status_style}]",
            str(report.error_count),
        )

    console.print(table)

    if not show_details:
        return

    for report in reports:
        if report.message:
            console.print(f"[red]{report.filepath}: {report.message}[/red]")
        for violation in report.violations:
            console.print(
                f"{report.filepath}:{violation.line}: [yellow]{violation.rule}[/yellow] "
                f"({violation.keyword}) {violation.message}"
            )


if __name__ == '__main__':
    main()
