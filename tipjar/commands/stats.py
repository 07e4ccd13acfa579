"""Stats command - show persisted tip counters."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tipjar.config import get_settings
from tipjar.display.components import format_number, print_error, print_header, stats_table
from tipjar.services.tips import get_storage, load_tips
from tipjar.tips import TipCatalog, TipError
from tipjar.tips.eligibility import failed_gate
from tipjar.tips.stats import StatsStore

console = Console()

GATE_LABELS = {
    "trigger_gate": "waiting for triggers",
    "show_count_gate": "shown enough",
    "maximum_dismiss_gate": "dismissed too often",
    "context_whitelist_gate": "other context",
    "context_cap_gate": "context limit reached",
}


def _status(tip, store: StatsStore, context: Optional[str]) -> str:
    # Randomization is ignored here; it only decides at display time.
    gate = failed_gate(tip, store.get(tip.id), store.triggered_open, context, random=lambda: 0.0)
    if gate is None:
        return "[green]eligible[/green]"
    return f"[dim]{GATE_LABELS.get(gate, gate)}[/dim]"


def print_stats(store: StatsStore, catalog: Optional[TipCatalog] = None, context: Optional[str] = None):
    """Print counters for catalog tips plus any other tips found in storage."""
    console.print(f"  Triggers: [bold]{format_number(store.triggered_open)}[/bold]")
    console.print()

    tip_ids = list(catalog.ids) if catalog is not None else []
    tip_ids += sorted(tip_id for tip_id in store.tips if tip_id not in tip_ids)
    if not tip_ids:
        console.print("  [dim]No tips recorded yet.[/dim]")
        return

    rows = []
    for tip_id in tip_ids:
        stats = store.get(tip_id)
        contexts = ", ".join(f"{name}={count}" for name, count in sorted(stats.shown_context.items()))
        tip = catalog.get(tip_id) if catalog is not None else None
        status = _status(tip, store, context) if tip is not None else "[dim]not in catalog[/dim]"
        rows.append((tip_id, stats.shown_count, stats.dismissed_count, contexts, status))

    console.print(stats_table(rows))


async def _load_store() -> StatsStore:
    settings = get_settings()
    store = StatsStore(get_storage(settings), settings.storage_key)
    await store.load()
    return store


def stats(
    catalog: Optional[Path] = typer.Option(None, "--catalog", "-c", help="Tip catalog (JSON) to check eligibility against."),
    context: Optional[str] = typer.Option(None, "--context", help="Context used for the eligibility column."),
):
    """Show how often each tip was shown and dismissed."""
    print_header("Stats")
    settings = get_settings()

    tips = None
    if catalog is not None or settings.catalog_path.exists():
        try:
            tips = load_tips(settings, catalog)
        except TipError as e:
            print_error(str(e))
            raise typer.Exit(1)

    store = asyncio.run(_load_store())
    print_stats(store, tips, context)
    console.print()
