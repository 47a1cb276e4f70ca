"""
Result types for reliability calculations.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ReliabilityResult:
    """
    Result of a Cronbach's alpha calculation for one item set.

    Fields:
        item_set: Name of the item set that was scored.
        raw_alpha: Covariance-based alpha, k/(k-1) × (1 - Σσ²ᵢ/σ²ₜ). Not
            clamped: it is at most 1 and can be any negative number when the
            items disagree. It weights items by their variances, so it
            changes when individual items are rescaled or standardized
            (scaling every item by the same factor leaves it unchanged).
        standardized_alpha: Alpha computed from the correlation matrix of
            the sign-corrected items, k·r̄ / (1 + (k-1)·r̄). Unchanged by
            rescaling or standardizing individual items.
        num_items: Number of items (k).
        num_observations: Number of rows used.
        reversed_items: Items that were reverse-scored, in the order the
            flips were made. Empty when auto-reverse is off or nothing was
            flipped.
        signs: Mapping of item name to +1 or -1 as used for scoring.
        item_rest_correlations: Correlation of each (signed) item with the
            sum of the other (signed) items.
        alpha_if_item_deleted: Raw alpha of the set without each item. None
            for 2-item sets, where dropping an item leaves nothing to score.
        interpretation: "excellent", "good", "acceptable", "questionable",
            "poor" or "unacceptable".
        meets_threshold: Whether raw_alpha reaches the threshold used.
        threshold: The threshold raw_alpha was compared against.
    """

    item_set: str
    raw_alpha: float
    standardized_alpha: float
    num_items: int
    num_observations: int
    reversed_items: Tuple[str, ...]
    signs: Dict[str, int]
    item_rest_correlations: Dict[str, float]
    alpha_if_item_deleted: Optional[Dict[str, float]]
    interpretation: str
    meets_threshold: bool
    threshold: float = field(default=0.60)

    @property
    def any_reversed(self) -> bool:
        """Whether any item was reverse-scored."""
        return bool(self.reversed_items)
