"""Show command - show one tip right away."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tipjar.config import get_settings
from tipjar.display.components import ConsoleTipRenderer, print_error
from tipjar.services.tips import open_engine
from tipjar.tips import TipError

console = Console()


async def _show_once(catalog: Optional[Path], context: Optional[str], trigger: bool):
    engine = await open_engine(get_settings(), ConsoleTipRenderer(console), catalog, context)
    try:
        tip = engine.maybe_show_tip() if trigger else engine.show_tip()
    finally:
        await engine.close()
    return tip


def show(
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Tip catalog (JSON)."),
    context: Optional[str] = typer.Option(None, "--context", help="Context name for this display."),
    trigger: bool = typer.Option(False, "--trigger", "-t", help="Count a trigger and only show with the configured probability."),
):
    """Show an eligible tip."""
    try:
        asyncio.run(_show_once(catalog, context, trigger))
    except TipError as e:
        print_error(str(e))
        raise typer.Exit(1)
