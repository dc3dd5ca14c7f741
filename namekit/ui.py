#!/usr/bin/env python3
"""
Harvest UI
==========
Rich-based terminal output for the CLI.

Provides:
- Progress bar while harvesting (accepted / target, attempts, pass rate)
- Summary table of rejection reasons
- Tables for transition distributions and model statistics

Usage:
    from namekit.ui import get_ui

    with get_ui(target=20) as ui:
        result = harvester.harvest(count=20, on_progress=ui.update)
    ui.print_summary(result)
"""

import sys
from typing import Any, Dict, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TextColumn, TimeElapsedColumn
from rich.table import Table

from .harvest import HarvestResult


def _symbol_label(symbol: Any) -> str:
    if symbol is None:
        return "<END>"
    if symbol == " ":
        return "<space>"
    return str(symbol)


class HarvestUI:
    """
    Live progress display for a harvest run.

    Example:
        with HarvestUI(target=20) as ui:
            harvester.harvest(count=20, on_progress=ui.update)
    """

    def __init__(self, target: int = 0, console: Optional[Console] = None):
        self.target = target
        self.console = console or Console()
        self.progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def __enter__(self):
        self.progress = Progress(
            TextColumn("[bold]Harvesting"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total} names"),
            TextColumn("[dim]{task.fields[attempts]} attempts"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self.progress.__enter__()
        self._task = self.progress.add_task("harvest", total=self.target, attempts=0)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.progress:
            self.progress.__exit__(exc_type, exc_val, exc_tb)
        return False

    def update(self, result: HarvestResult):
        if self.progress is not None and self._task is not None:
            self.progress.update(self._task, completed=result.accepted, attempts=result.attempts)

    def print_corpus(self, names: List[str]):
        self.console.print(f"[bold]Training corpus[/bold] ({len(names)} names)")
        self.console.print(", ".join(names), style="dim")
        self.console.print()

    def print_names(self, names: List[str]):
        for name in names:
            self.console.print(name, style="bold green")

    def print_summary(self, result: HarvestResult):
        """Print final tally and rejection breakdown."""
        self.console.print()
        self.console.print(f"Attempts:  {result.attempts}")
        self.console.print(f"Accepted:  {result.accepted}", style="bold green")
        self.console.print(f"Pass rate: {result.pass_rate:.1f}%")

        if result.rejections:
            table = Table(title="Rejections", box=box.SIMPLE)
            table.add_column("Reason")
            table.add_column("Count", justify="right")
            for reason, count in result.rejections.most_common():
                table.add_row(reason, str(count))
            self.console.print(table)

    def print_distribution(self, context: str, rows: List[Tuple[Any, float]]):
        table = Table(title=f"After {context!r}" if context else "Start symbols", box=box.SIMPLE)
        table.add_column("Next", style="bold")
        table.add_column("Probability", justify="right")
        for symbol, weight in rows:
            table.add_row(_symbol_label(symbol), f"{weight:.1f}%")
        self.console.print(table)

    def print_stats(self, stats: Dict[str, Any]):
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value", justify="right")
        for key, value in stats.items():
            table.add_row(key, str(value))
        self.console.print(table)


class SimpleUI:
    """Plain-text fallback for non-TTY output or --quiet."""

    def __init__(self, target: int = 0, quiet: bool = False):
        self.target = target
        self.quiet = quiet

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def update(self, result: HarvestResult):
        pass

    def print_corpus(self, names: List[str]):
        if self.quiet:
            return
        for name in names:
            print(name)
        print()

    def print_names(self, names: List[str]):
        # Names are the payload; printed even in quiet mode.
        for name in names:
            print(name)

    def print_summary(self, result: HarvestResult):
        if self.quiet:
            return
        print()
        print(f"Attempts:  {result.attempts}")
        print(f"Accepted:  {result.accepted}")
        print(f"Pass rate: {result.pass_rate:.1f}%")
        for reason, count in result.rejections.most_common():
            print(f"  REJECTED {reason}: {count}")

    def print_distribution(self, context: str, rows: List[Tuple[Any, float]]):
        for symbol, weight in rows:
            print(f"{_symbol_label(symbol)}\t{weight:.1f}%")

    def print_stats(self, stats: Dict[str, Any]):
        for key, value in stats.items():
            print(f"{key}: {value}")


def get_ui(target: int = 0, quiet: bool = False):
    """Get appropriate UI based on environment."""
    if quiet or not sys.stdout.isatty():
        return SimpleUI(target=target, quiet=quiet)
    return HarvestUI(target=target)


__all__ = ['HarvestUI', 'SimpleUI', 'get_ui']
