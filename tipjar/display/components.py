"""Reusable UI components for tipjar."""

from typing import Any, Callable, Optional

from rich.console import Console
from rich.table import Table

from tipjar.display.colors import COLORS, TIPJAR_THEME
from tipjar.tips.engine import TipRenderer
from tipjar.tips.models import TipDescriptor

console = Console(theme=TIPJAR_THEME)

LOGO_MINIMAL = "◆ tipjar"


def print_header(title: str):
    """Print a styled header."""
    console.print()
    console.print(f"  [{COLORS['primary']}]{LOGO_MINIMAL}[/] {title}")
    console.print(f"  [dim]{'─' * 45}[/dim]")
    console.print()


def print_success(message: str):
    """Print a success message."""
    console.print(f"  [{COLORS['success']}]✓[/] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"  [{COLORS['error']}]✗[/] {message}")


def format_number(n: int) -> str:
    """Format a number with commas."""
    return f"{n:,}"


def stats_table(rows) -> Table:
    """Table of per-tip counters. ``rows`` yields (id, shown, dismissed, contexts, status)."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Tip")
    table.add_column("Shown", justify="right")
    table.add_column("Dismissed", justify="right")
    table.add_column("Contexts")
    table.add_column("Status")
    for tip_id, shown, dismissed, contexts, status in rows:
        table.add_row(tip_id, format_number(shown), format_number(dismissed), contexts, status)
    return table


class ConsoleTipRenderer(TipRenderer):
    """Prints tips to the terminal and keeps the dismiss/action hooks.

    The terminal has no buttons, so callers route user commands to
    ``dismiss()`` and ``action()``, which invoke the hooks handed over by the
    engine.
    """

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console
        self.tip: Optional[TipDescriptor] = None
        self._on_dismiss: Optional[Callable[[], Any]] = None
        self._on_action: Optional[Callable[[], Any]] = None

    def show(self, tip, on_dismiss, on_action):
        self.tip = tip
        self._on_dismiss = on_dismiss
        self._on_action = on_action

        self.console.print(f"  [{COLORS['tip']}]💡[/] [dim]Tip:[/dim] {tip.text}")
        hints = []
        if tip.action_button and on_action:
            hints.append(f"[{COLORS['accent']}]/action[/] {tip.action_button.text}")
        if on_dismiss:
            hints.append(f"[{COLORS['muted']}]/dismiss[/]")
        if hints:
            self.console.print(f"     {'  '.join(hints)}")

    def show_empty(self):
        self._clear()
        self.console.print("  [dim]No tip to show right now.[/dim]")

    def hide(self):
        self._clear()

    def _clear(self):
        self.tip = None
        self._on_dismiss = None
        self._on_action = None

    @property
    def can_dismiss(self) -> bool:
        return self._on_dismiss is not None

    def dismiss(self) -> bool:
        """Forward a dismiss gesture. Returns False if the tip can't be dismissed."""
        if self._on_dismiss is None:
            return False
        return bool(self._on_dismiss())

    def action(self) -> Any:
        """Forward an action gesture. Errors from the action propagate."""
        if self._on_action is None:
            return None
        return self._on_action()
