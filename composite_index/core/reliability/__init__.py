r"""
Reliability estimation for composite indices.

Cronbach's alpha estimates how much of an index's variance comes from the
construct its items share rather than from item-specific error.

Usage Example
-------------
Score an item set and inspect problem items:

    from composite_index.core.item_set import select_items
    from composite_index.core.reliability import (
        calculate_cronbachs_alpha,
        get_negative_item_correlations,
    )

    items = select_items(states, ["life_exp", "murder", "illiteracy"])
    result = calculate_cronbachs_alpha(items)

    print(f"Cronbach's alpha: {result.raw_alpha:.4f} ({result.interpretation})")
    print(f"Reverse-scored: {result.reversed_items}")

    for item in get_negative_item_correlations(result.item_rest_correlations, 0.15):
        print(f"  {item['item']}: r = {item['correlation']:.3f}")
"""

from ._constants import (
    ALPHA_THRESHOLDS,
    LOW_ITEM_CORRELATION_THRESHOLD,
    ProblematicItem,
)
from ._types import ReliabilityResult
from .cronbach import (
    calculate_cronbachs_alpha,
    detect_reversed_items,
    get_negative_item_correlations,
    _get_interpretation,
)

__all__ = [
    "ALPHA_THRESHOLDS",
    "LOW_ITEM_CORRELATION_THRESHOLD",
    "ProblematicItem",
    "ReliabilityResult",
    "calculate_cronbachs_alpha",
    "detect_reversed_items",
    "get_negative_item_correlations",
    "_get_interpretation",
]
