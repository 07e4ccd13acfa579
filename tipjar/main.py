"""tipjar CLI - Main application entry point."""

import typer
from rich.console import Console

from tipjar import __version__
from tipjar.config import get_settings
from tipjar.config.logging import setup_logging
from tipjar.display.colors import COLORS

app = typer.Typer(
    name="tipjar",
    help="Contextual tips with persisted show and dismiss limits.",
    no_args_is_help=False,
    add_completion=True,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"tipjar version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to the console."),
):
    """tipjar - contextual tips."""
    settings = get_settings()
    setup_logging(settings.log_dir, settings.log_level, verbose)

    if ctx.invoked_subcommand is None:
        A = COLORS["accent"]
        console.print()
        console.print(f"  [{A}]Tips[/]")
        console.print("    chat       Interactive session that triggers tips")
        console.print("    show       Show one eligible tip now")
        console.print()
        console.print(f"  [{A}]Manage[/]")
        console.print("    stats      Show/dismiss counters per tip")
        console.print("    reset      Forget all counters")
        console.print()
        console.print("  [dim]Run 'tipjar <command> --help' for details.[/dim]")


# Import and register commands
from tipjar.commands import chat, show, stats, reset

app.command("chat")(chat.chat)
app.command()(show.show)
app.command()(stats.stats)
app.command()(reset.reset)


if __name__ == "__main__":
    app()
