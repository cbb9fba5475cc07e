"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/incmark/cli/output.py
import argparse
import sys
from typing import TextIO

from incmark.autoclose import UnclosedReport


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND either --force-rich is set OR the stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        return False

    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except ValueError:
            return False

    return False


def render_report_rich(report: UnclosedReport) -> None:
    """Print an unclosed-syntax report as Rich tables.

    Parameters
    ----------
    report : UnclosedReport
        Detector result to display

    """
    from rich.console import Console
    from rich.table import Table

    console = Console()

    if not report.has_unclosed:
        console.print("[green][OK] Nothing unclosed[/green]")
        return

    if report.unclosed_components:
        table = Table(title="Open Components")
        table.add_column("Depth", style="yellow", justify="right")
        table.add_column("Name", style="cyan")
        for component in report.unclosed_components:
            table.add_row(str(component.depth), component.name or "-")
        console.print(table)

    if report.unclosed_inline:
        console.print("[bold yellow]Open inline markup:[/bold yellow]")
        for label in report.unclosed_inline:
            console.print(f"  [red][X] {label}[/red]")


__all__ = ["check_rich_available", "should_use_rich_output", "render_report_rich"]
