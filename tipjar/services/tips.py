"""Wiring between settings, storage and the tip engine for CLI commands."""

from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional

import typer

from tipjar.config import Settings
from tipjar.services.storage import SqliteStorage
from tipjar.tips import CatalogError, TipCatalog, TipEngine, TipRenderer, load_catalog


def url_action(target: Any) -> Callable[[], Any]:
    """Turn an action read from a JSON catalog into a callable that opens it."""
    if not isinstance(target, str) or not target:
        raise CatalogError(f"Unsupported tip action: {target!r}")
    return partial(typer.launch, target)


def load_tips(settings: Settings, catalog_path: Optional[Path] = None) -> TipCatalog:
    """Load the catalog from ``catalog_path`` or the configured location."""
    return load_catalog(catalog_path or settings.catalog_path, resolve_action=url_action)


def get_storage(settings: Settings) -> SqliteStorage:
    return SqliteStorage(settings.db_path)


async def open_engine(
    settings: Settings,
    renderer: Optional[TipRenderer] = None,
    catalog_path: Optional[Path] = None,
    context: Optional[str] = None,
) -> TipEngine:
    """Create an initialized engine backed by the SQLite settings store."""
    engine = TipEngine.from_settings(settings, get_storage(settings), renderer)
    await engine.initialize(load_tips(settings, catalog_path))
    if context:
        engine.set_context(context)
    return engine
