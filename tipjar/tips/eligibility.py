"""Eligibility rules deciding whether a tip may be shown right now.

Each gate is a plain predicate. A tip is eligible only when every gate passes.
Gates run in a fixed order and stop at the first failure, so the randomization
gate only consumes a random draw when all other gates passed.
"""

import random as _random
from typing import Callable, Optional

from tipjar.tips.models import TipDescriptor, TipStats

RandomSource = Callable[[], float]

# Chance used when a tip sets randomizeDisplay to plain True.
DEFAULT_RANDOMIZE = 0.5


def trigger_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                 context: Optional[str], random: RandomSource) -> bool:
    return triggered_open >= tip.required_triggers


def show_count_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                    context: Optional[str], random: RandomSource) -> bool:
    if tip.required_show_count is None:
        return True
    # A numeric requireDismiss only acts as a flag.
    if tip.require_dismiss:
        return stats.dismissed_count < tip.required_show_count
    return stats.shown_count < tip.required_show_count


def maximum_dismiss_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                         context: Optional[str], random: RandomSource) -> bool:
    if tip.maximum_dismiss is None:
        return True
    return stats.dismissed_count < tip.maximum_dismiss


def context_whitelist_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                           context: Optional[str], random: RandomSource) -> bool:
    if tip.show_in_context is None:
        return True
    if context is None or context not in tip.show_in_context:
        return False
    return stats.shown_context.get(context, 0) < tip.show_in_context[context]


def context_cap_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                     context: Optional[str], random: RandomSource) -> bool:
    if tip.maximum_in_context is None or context is None or context not in tip.maximum_in_context:
        return True
    return stats.shown_context.get(context, 0) < tip.maximum_in_context[context]


def randomize_gate(tip: TipDescriptor, stats: TipStats, triggered_open: int,
                   context: Optional[str], random: RandomSource) -> bool:
    if not tip.randomize_display:
        return True
    if tip.randomize_display is True:
        return random() < DEFAULT_RANDOMIZE
    return random() < tip.randomize_display


GATES = (
    trigger_gate,
    show_count_gate,
    maximum_dismiss_gate,
    context_whitelist_gate,
    context_cap_gate,
    randomize_gate,
)


def is_eligible(
    tip: TipDescriptor,
    stats: TipStats,
    triggered_open: int,
    context: Optional[str],
    random: RandomSource = _random.random,
) -> bool:
    """Check whether ``tip`` passes every gate for the given stats and context."""
    return all(gate(tip, stats, triggered_open, context, random) for gate in GATES)


def failed_gate(
    tip: TipDescriptor,
    stats: TipStats,
    triggered_open: int,
    context: Optional[str],
    random: RandomSource = _random.random,
) -> Optional[str]:
    """Name of the first gate that blocks ``tip``, or None when it is eligible."""
    for gate in GATES:
        if not gate(tip, stats, triggered_open, context, random):
            return gate.__name__
    return None
