"""Chat command - interactive session that triggers tips."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tipjar.commands.stats import print_stats
from tipjar.config import get_settings
from tipjar.display.colors import COLORS
from tipjar.display.components import ConsoleTipRenderer, print_error, print_header
from tipjar.services.tips import open_engine
from tipjar.tips import TipEngine, TipError

console = Console()

CHAT_HELP = [
    ("/tip", "Show a tip now"),
    ("/dismiss", "Dismiss the current tip"),
    ("/action", "Run the current tip's action"),
    ("/context NAME", "Switch context (no name clears it)"),
    ("/stats", "Show tip counters"),
    ("/help", "Show this help"),
    ("quit", "Leave the session"),
]


def _print_help():
    for command, description in CHAT_HELP:
        console.print(f"  [{COLORS['accent']}]{command:<15}[/] [dim]{description}[/dim]")
    console.print()


def _handle_slash_command(query: str, engine: TipEngine, renderer: ConsoleTipRenderer) -> bool:
    """Handle a slash command. Returns True if command was handled."""
    parts = query.split(None, 1)
    command = parts[0].lower()
    args = parts[1].strip() if len(parts) > 1 else ""

    if command == "/help":
        _print_help()
        return True

    elif command == "/tip":
        engine.show_tip()
        console.print()
        return True

    elif command == "/dismiss":
        if renderer.tip is None:
            console.print("  [dim]No tip is shown.[/dim]")
        elif not renderer.dismiss():
            console.print("  [dim]This tip can't be dismissed.[/dim]")
        else:
            console.print("  [dim]Tip dismissed.[/dim]")
        console.print()
        return True

    elif command == "/action":
        if renderer.tip is None or renderer.tip.action_button is None:
            console.print("  [dim]The current tip has no action.[/dim]")
        else:
            try:
                renderer.action()
            except Exception as e:
                print_error(f"Action failed: {e}")
        console.print()
        return True

    elif command == "/context":
        engine.set_context(args or None)
        label = args if args else "none"
        console.print(f"  [dim]Context: {label}[/dim]")
        console.print()
        return True

    elif command == "/stats":
        print_stats(engine.store, engine.catalog, engine.session.context)
        console.print()
        return True

    elif command.startswith("/"):
        console.print(f"  [dim]Unknown command: {command}. Type /help for available commands.[/dim]")
        console.print()
        return True

    return False


async def _chat_loop(catalog: Optional[Path], context: Optional[str]):
    settings = get_settings()
    renderer = ConsoleTipRenderer(console)
    engine = await open_engine(settings, renderer, catalog, context)

    console.print(f"  [dim]{len(engine.catalog)} tips loaded, "
                  f"{engine.store.triggered_open} triggers so far.[/dim]")
    console.print("  [dim]Type anything to trigger a tip, /help for commands, or 'quit' to exit.[/dim]")
    console.print()

    try:
        while True:
            try:
                query = (await asyncio.to_thread(console.input, f"  [{COLORS['primary']}]>[/] ")).strip()
            except (KeyboardInterrupt, EOFError):
                console.print()
                break

            if not query:
                continue

            if query.lower() in ["quit", "exit", "q"]:
                console.print("  [dim]Goodbye![/dim]")
                break

            if query.startswith("/"):
                _handle_slash_command(query, engine, renderer)
                continue

            if engine.maybe_show_tip() is not None:
                console.print()
    finally:
        if not await engine.close():
            print_error("Could not save tip counters.")


def chat(
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Tip catalog (JSON)."),
    context: Optional[str] = typer.Option(None, "--context", help="Initial context name."),
):
    """Start an interactive session that shows tips as you go."""
    print_header("Chat")
    try:
        asyncio.run(_chat_loop(catalog, context))
    except TipError as e:
        print_error(str(e))
        raise typer.Exit(1)
