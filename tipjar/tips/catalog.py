"""Tip catalog: the immutable list of tips the engine chooses from."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Tuple, Union

from tipjar.tips.errors import CatalogError
from tipjar.tips.models import TipDescriptor

logger = logging.getLogger(__name__)


class TipCatalog:
    """Ordered, read-only collection of tips with unique ids."""

    def __init__(self, tips: Iterable[Union[TipDescriptor, Mapping[str, Any]]] = ()):
        parsed = []
        seen = set()
        for tip in tips:
            if not isinstance(tip, TipDescriptor):
                tip = TipDescriptor.from_dict(tip)
            if tip.id in seen:
                raise CatalogError(f"Duplicate tip id in catalog: {tip.id!r}")
            seen.add(tip.id)
            parsed.append(tip)
        self._tips: Tuple[TipDescriptor, ...] = tuple(parsed)

    def __iter__(self) -> Iterator[TipDescriptor]:
        return iter(self._tips)

    def __len__(self) -> int:
        return len(self._tips)

    def get(self, tip_id: str) -> Optional[TipDescriptor]:
        for tip in self._tips:
            if tip.id == tip_id:
                return tip
        return None

    @property
    def ids(self) -> list[str]:
        return [tip.id for tip in self._tips]


def load_catalog(
    path: Path,
    resolve_action: Optional[Callable[[Any], Callable[[], Any]]] = None,
) -> TipCatalog:
    """Load a catalog from a JSON file holding a list of tip mappings."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise CatalogError(f"Tip catalog not found: {path}")
    except json.JSONDecodeError as e:
        raise CatalogError(f"Tip catalog {path} is not valid JSON: {e}")

    if isinstance(data, Mapping):
        data = data.get("tips", [])
    if not isinstance(data, list):
        raise CatalogError(f"Tip catalog {path} must contain a list of tips")

    catalog = TipCatalog(TipDescriptor.from_dict(item, resolve_action) for item in data)
    logger.debug(f"Loaded {len(catalog)} tips from {path}")
    return catalog
