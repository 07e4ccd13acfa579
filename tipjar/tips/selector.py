"""Uniform selection among eligible tips."""

import random as _random
from typing import List, Optional

from tipjar.tips.catalog import TipCatalog
from tipjar.tips.eligibility import RandomSource, is_eligible
from tipjar.tips.models import TipDescriptor
from tipjar.tips.stats import StatsStore


def eligible_tips(
    catalog: TipCatalog,
    store: StatsStore,
    context: Optional[str],
    random: RandomSource = _random.random,
) -> List[TipDescriptor]:
    return [
        tip for tip in catalog
        if is_eligible(tip, store.get(tip.id), store.triggered_open, context, random)
    ]


def select_tip(
    catalog: TipCatalog,
    store: StatsStore,
    context: Optional[str],
    random: RandomSource = _random.random,
) -> Optional[TipDescriptor]:
    """Pick one eligible tip with equal probability, or None if none qualifies."""
    candidates = eligible_tips(catalog, store, context, random)
    if not candidates:
        return None
    index = min(int(random() * len(candidates)), len(candidates) - 1)
    return candidates[index]
