"""Tip selection, eligibility rules and stats tracking."""

from tipjar.tips.catalog import TipCatalog, load_catalog
from tipjar.tips.engine import TipEngine, TipRenderer
from tipjar.tips.errors import CatalogError, NotInitializedError, TipError
from tipjar.tips.models import ActionButton, TipDescriptor, TipSession, TipStats

__all__ = [
    "ActionButton",
    "CatalogError",
    "NotInitializedError",
    "TipCatalog",
    "TipDescriptor",
    "TipEngine",
    "TipError",
    "TipRenderer",
    "TipSession",
    "TipStats",
    "load_catalog",
]
