"""
Composite index construction.

``combine_items`` sums signed, pre-transformed columns row by row. It does
not rescale anything: items left on their raw scales are weighted by their
variance, so the column with the widest spread dominates the composite.
Run each item through ``rescale`` or ``standardize`` first.

``build_index`` is the end-to-end path: score the item set's reliability,
transform every item, reverse-score the items the reliability check flipped
and add them up.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from composite_index.core.errors import InsufficientItemsError, MismatchedLengthError
from composite_index.core.item_set import ItemSet, validate_column
from composite_index.core.reliability import ReliabilityResult, calculate_cronbachs_alpha
from composite_index.core.transforms import rescale, standardize

logger = logging.getLogger(__name__)

TransformMethod = Literal["rescale", "standardize"]

VALID_SIGNS = (1, -1)


@dataclass(frozen=True)
class IndexReport:
    """
    Result of building a composite index from an item set.

    Attributes:
        composite: The index score per observation, named after the item set.
        reliability: Cronbach's alpha result for the item set, including the
            reverse-scored items.
        transformed: Item columns after rescaling/standardizing, before the
            signs were applied.
        signs: Sign applied to each transformed item when combining.
        method: Transform used on every item.
    """

    composite: pd.Series
    reliability: ReliabilityResult
    transformed: pd.DataFrame
    signs: Dict[str, int]
    method: str


def combine_items(
    pairs: Sequence[Tuple[object, int]],
    name: str = "index",
) -> pd.Series:
    """
    Sum signed columns into one composite score.

    Args:
        pairs: Ordered (column, sign) pairs. Every column must have the same
            length; signs must be +1 or -1. Rows are aligned by position.
        name: Name of the resulting Series.

    Returns:
        New Series holding Σ sign_i × column_i. Uses the index of the first
        column when it is a Series.

    Raises:
        InsufficientItemsError: ``pairs`` is empty.
        MismatchedLengthError: Columns differ in length.
        ValueError: A sign is not +1 or -1.
    """
    if not pairs:
        raise InsufficientItemsError(
            "Need at least one column to combine",
            context={"index": name},
        )

    columns = []
    for position, (values, sign) in enumerate(pairs):
        if sign not in VALID_SIGNS:
            raise ValueError(f"Sign must be +1 or -1, got {sign!r} at position {position}")
        columns.append((validate_column(values), int(sign)))

    lengths = [len(column) for column, _ in columns]
    if len(set(lengths)) > 1:
        raise MismatchedLengthError(
            "All columns must have the same length to be combined",
            context={"index": name, "lengths": lengths},
        )

    total = np.zeros(lengths[0])
    for column, sign in columns:
        total = total + sign * column.to_numpy()

    return pd.Series(total, index=columns[0][0].index, name=name)


def build_index(
    item_set: ItemSet,
    method: TransformMethod = "rescale",
    auto_reverse: Optional[bool] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> IndexReport:
    """
    Build a composite index from an item set.

    Steps:
        1. Score internal consistency (and decide reverse-scoring).
        2. Rescale or standardize each item.
        3. Apply the signs from step 1 and sum.

    Args:
        item_set: Items to combine.
        method: "rescale" (each item onto [lower, upper]) or "standardize".
        auto_reverse: Passed to calculate_cronbachs_alpha.
        lower: Rescale lower bound (ignored for "standardize").
        upper: Rescale upper bound (ignored for "standardize").

    Raises:
        ValueError: Unknown method.
        ZeroVarianceError / ConstantInputError: An item has no spread.
    """
    if method not in ("rescale", "standardize"):
        raise ValueError(f"method must be 'rescale' or 'standardize', got {method!r}")

    reliability = calculate_cronbachs_alpha(item_set, auto_reverse=auto_reverse)

    if method == "rescale":
        transformed = pd.DataFrame(
            {name: rescale(item_set.data[name], lower, upper) for name in item_set.columns},
            index=item_set.data.index,
        )
    else:
        transformed = pd.DataFrame(
            {name: standardize(item_set.data[name]) for name in item_set.columns},
            index=item_set.data.index,
        )

    composite = combine_items(
        [(transformed[name], reliability.signs[name]) for name in item_set.columns],
        name=item_set.name,
    )

    logger.info(
        f"Built index {item_set.name!r} from {item_set.k} {method}d items "
        f"(alpha = {reliability.raw_alpha:.4f}, "
        f"reversed: {list(reliability.reversed_items) or 'none'})",
        extra={"item_set": item_set.name, "num_items": item_set.k},
    )

    return IndexReport(
        composite=composite,
        reliability=reliability,
        transformed=transformed,
        signs=dict(reliability.signs),
        method=method,
    )
