"""Reset command - forget all recorded tip counters."""

import asyncio

import typer

from tipjar.config import get_settings
from tipjar.display.components import print_success
from tipjar.services.tips import get_storage


def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation."),
):
    """Clear the persisted show/dismiss counters."""
    settings = get_settings()
    if not yes and not typer.confirm("  Forget all tip counters?", default=False):
        raise typer.Exit()

    asyncio.run(get_storage(settings).delete(settings.storage_key))
    print_success("Tip counters cleared")
