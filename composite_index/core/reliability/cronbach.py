r"""
Cronbach's alpha calculation for internal consistency.

Cronbach's alpha indicates how closely related a set of items are as a group:
the share of the composite's variance that comes from the construct the items
have in common rather than from item-specific error. Adding an item that
correlates only weakly with the rest lowers alpha, even though the item adds
information, because it adds more error variance than shared variance.

Formula:
    α = (k / (k-1)) × (1 - Σσ²ᵢ / σ²ₜ)

Where:
    k = number of items
    σ²ᵢ = sample variance of item i
    σ²ₜ = sample variance of the row-wise total

Items that measure the construct in the opposite direction (e.g. murder rate
in a quality-of-life index) must be reverse-scored first. With
``auto_reverse`` on, items are flipped one at a time, always the item whose
correlation with the rest of the set is the most negative, until no item is
anti-correlated with the rest. The flipped items are reported on the result.

Usage Example:
    from composite_index.core.item_set import select_items
    from composite_index.core.reliability import calculate_cronbachs_alpha

    items = select_items(states, ["life_exp", "murder", "hs_grad"])
    result = calculate_cronbachs_alpha(items)

    print(f"Cronbach's alpha: {result.raw_alpha:.4f}")
    print(f"Interpretation: {result.interpretation}")
    print(f"Reverse-scored: {result.reversed_items}")
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from composite_index.core.config import settings
from composite_index.core.errors import InsufficientItemsError, ZeroVarianceError
from composite_index.core.item_set import ItemSet
from ._constants import ALPHA_THRESHOLDS, ProblematicItem
from ._types import ReliabilityResult

logger = logging.getLogger(__name__)


def _get_interpretation(alpha: float) -> str:
    """
    Get interpretation string for a Cronbach's alpha value.

    Args:
        alpha: Cronbach's alpha coefficient

    Returns:
        Interpretation: "excellent", "good", "acceptable", "questionable",
                       "poor", or "unacceptable"
    """
    if alpha >= ALPHA_THRESHOLDS["excellent"]:
        return "excellent"
    elif alpha >= ALPHA_THRESHOLDS["good"]:
        return "good"
    elif alpha >= ALPHA_THRESHOLDS["acceptable"]:
        return "acceptable"
    elif alpha >= ALPHA_THRESHOLDS["questionable"]:
        return "questionable"
    elif alpha >= ALPHA_THRESHOLDS["poor"]:
        return "poor"
    else:
        return "unacceptable"


def _raw_alpha(matrix: np.ndarray) -> float:
    """
    Covariance-based alpha for an observations × items matrix.

    Raises:
        ZeroVarianceError: If the row-wise total has zero variance.
    """
    k = matrix.shape[1]
    sum_item_variances = float(matrix.var(axis=0, ddof=1).sum())
    total_variance = float(matrix.sum(axis=1).var(ddof=1))

    if total_variance == 0:
        raise ZeroVarianceError(
            "Zero variance in total scores - cannot calculate alpha",
            context={"num_items": k},
        )

    return (k / (k - 1)) * (1 - sum_item_variances / total_variance)


def _standardized_alpha(matrix: np.ndarray) -> float:
    """Alpha from the mean inter-item correlation."""
    k = matrix.shape[1]
    corr = np.corrcoef(matrix, rowvar=False)
    mean_r = (corr.sum() - k) / (k * (k - 1))
    denominator = 1 + (k - 1) * mean_r
    if denominator == 0:
        return float("nan")
    return float(k * mean_r / denominator)


def _item_rest_correlations(matrix: np.ndarray) -> np.ndarray:
    """
    Correlation of each item with the sum of the other items.

    The item is left out of its own total so the correlation isn't inflated
    by part-whole overlap. Undefined correlations (constant rest score) are
    reported as 0.0.
    """
    total = matrix.sum(axis=1)
    correlations = np.zeros(matrix.shape[1])
    for i in range(matrix.shape[1]):
        item = matrix[:, i]
        rest = total - item
        item_sd = item.std(ddof=1)
        rest_sd = rest.std(ddof=1)
        if item_sd == 0 or rest_sd == 0:
            continue
        covariance = np.cov(item, rest, ddof=1)[0, 1]
        r = covariance / (item_sd * rest_sd)
        # Clamp to valid range (floating point errors may cause slight exceeding)
        correlations[i] = max(-1.0, min(1.0, r))
    return correlations


def detect_reversed_items(
    item_set: ItemSet,
) -> Tuple[Dict[str, int], Tuple[str, ...]]:
    """
    Decide which items must be reverse-scored so all point the same way.

    Repeatedly flips the item with the most negative item-rest correlation
    until every item correlates non-negatively with the rest of the set.
    Each flip strictly increases the sum of signed inter-item covariances,
    so the loop ends in exact arithmetic. Rounding noise around zero
    correlations could still make it cycle, so it stops after k * k flips
    and logs a warning.

    Flipping only the worst item per round matters: in a set like
    (life expectancy, murder rate, graduation rate) both murder and
    graduation correlate negatively with the rest at first, but only murder
    needs reversing.

    Args:
        item_set: Items to inspect.

    Returns:
        (signs, reversed_items): item name → +1/-1, and the names of items
        whose final sign is -1 in the order they were flipped.
    """
    matrix = item_set.matrix()
    signs = np.ones(item_set.k)
    flipped: List[str] = []
    max_flips = item_set.k * item_set.k

    for flips in range(max_flips + 1):
        correlations = _item_rest_correlations(matrix * signs)
        # Ties go to the later item so the first item anchors the direction
        worst = len(correlations) - 1 - int(np.argmin(correlations[::-1]))
        if correlations[worst] >= 0:
            break
        if flips == max_flips:
            logger.warning(
                f"Stopped reverse-scoring {item_set.name!r} after {max_flips} "
                f"flips; item-rest r for {item_set.columns[worst]!r} is still "
                f"{correlations[worst]:.4f}"
            )
            break

        name = item_set.columns[worst]
        signs[worst] *= -1
        if name in flipped:
            flipped.remove(name)
        else:
            flipped.append(name)
        logger.debug(
            f"Reverse-scoring {name!r} in {item_set.name!r} "
            f"(item-rest r = {correlations[worst]:.4f})"
        )

    return (
        {name: int(sign) for name, sign in zip(item_set.columns, signs)},
        tuple(flipped),
    )


def calculate_cronbachs_alpha(
    item_set: ItemSet,
    auto_reverse: Optional[bool] = None,
    threshold: Optional[float] = None,
) -> ReliabilityResult:
    """
    Calculate Cronbach's alpha for an item set.

    Args:
        item_set: Two or more items measured on the same observations.
        auto_reverse: Reverse-score items anti-correlated with the rest of
            the set before scoring (default: settings.AUTO_REVERSE).
        threshold: Minimum alpha for ``meets_threshold``
            (default: settings.ALPHA_THRESHOLD).

    Returns:
        ReliabilityResult with raw and standardized alpha, the reverse-scored
        items and per-item diagnostics.

    Raises:
        InsufficientItemsError: Fewer than 2 items.
        ZeroVarianceError: An item, or the total score, has zero variance.
    """
    if auto_reverse is None:
        auto_reverse = settings.AUTO_REVERSE
    if threshold is None:
        threshold = settings.ALPHA_THRESHOLD

    k = item_set.k
    n = item_set.n_observations

    if k < 2:
        raise InsufficientItemsError(
            "Need at least 2 items for Cronbach's alpha calculation",
            context={"item_set": item_set.name, "num_items": k},
        )

    if n < 2:
        raise ZeroVarianceError(
            "Need at least 2 observations for Cronbach's alpha calculation",
            context={"item_set": item_set.name, "num_observations": n},
        )

    matrix = item_set.matrix()
    item_variances = matrix.var(axis=0, ddof=1)
    constant = [
        name for name, variance in zip(item_set.columns, item_variances) if variance == 0
    ]
    if constant:
        raise ZeroVarianceError(
            "Items with zero variance cannot be scored",
            context={"item_set": item_set.name, "items": constant},
        )

    if auto_reverse:
        signs, reversed_items = detect_reversed_items(item_set)
    else:
        signs, reversed_items = {name: 1 for name in item_set.columns}, ()

    signed = matrix * np.array([signs[name] for name in item_set.columns])

    alpha = _raw_alpha(signed)
    item_rest = _item_rest_correlations(signed)

    alpha_if_deleted: Optional[Dict[str, float]] = None
    if k >= 3:
        alpha_if_deleted = {}
        for i, name in enumerate(item_set.columns):
            try:
                alpha_if_deleted[name] = round(
                    _raw_alpha(np.delete(signed, i, axis=1)), 4
                )
            except ZeroVarianceError:
                alpha_if_deleted[name] = float("nan")

    result = ReliabilityResult(
        item_set=item_set.name,
        raw_alpha=float(alpha),
        standardized_alpha=_standardized_alpha(signed),
        num_items=k,
        num_observations=n,
        reversed_items=reversed_items,
        signs=signs,
        item_rest_correlations={
            name: round(float(r), 4) for name, r in zip(item_set.columns, item_rest)
        },
        alpha_if_item_deleted=alpha_if_deleted,
        interpretation=_get_interpretation(alpha),
        meets_threshold=bool(alpha >= threshold),
        threshold=threshold,
    )

    logger.info(
        f"Cronbach's alpha calculated for {item_set.name!r}: α = {alpha:.4f} "
        f"({result.interpretation}) from {n} observations and {k} items. "
        f"Reversed: {list(reversed_items) or 'none'}. "
        f"Meets threshold: {result.meets_threshold}",
        extra={"item_set": item_set.name, "num_items": k, "alpha": round(alpha, 4)},
    )

    return result


def get_negative_item_correlations(
    item_rest_correlations: Dict[str, float],
    threshold: float = 0.0,
) -> List[ProblematicItem]:
    """
    Identify items with negative or low item-rest correlations.

    Items with negative correlations actively harm internal consistency
    and should be reverse-scored, reviewed or dropped.

    Args:
        item_rest_correlations: Dict mapping item name to correlation
        threshold: Correlation threshold below which items are flagged

    Returns:
        List of ProblematicItem TypedDicts, most negative first.
    """
    problematic: List[ProblematicItem] = []

    for name, corr in item_rest_correlations.items():
        if corr < threshold:
            if corr < 0:
                recommendation = (
                    "Negative correlation indicates this item runs against "
                    "the rest of the set. Reverse-score it or drop it."
                )
            else:
                recommendation = (
                    f"Low correlation ({corr:.3f}) suggests weak contribution "
                    "to internal consistency. Consider dropping the item."
                )

            problematic.append(
                {
                    "item": name,
                    "correlation": corr,
                    "recommendation": recommendation,
                }
            )

    problematic.sort(key=lambda x: x["correlation"])

    return problematic
