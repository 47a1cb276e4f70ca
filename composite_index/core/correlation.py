"""
Pairwise correlation summaries for an item set.

Produces, for every unordered pair of items, the Pearson correlation rounded
for display plus a significance marker from the two-sided test p-value. The
result is the data contract consumed by scatterplot-matrix style reports:

    {"x_column": ..., "y_column": ..., "r": ..., "significance_marker": ...}

Significance markers follow the usual R convention:
    p < 0.001 → "***"
    p < 0.01  → "**"
    p < 0.05  → "*"
    p < 0.1   → "."
    otherwise → " "
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from composite_index.core.config import settings
from composite_index.core.item_set import ItemSet

logger = logging.getLogger(__name__)

# Ordered (cutoff, marker) pairs; first cutoff the p-value falls under wins.
SIGNIFICANCE_LEVELS: Tuple[Tuple[float, str], ...] = (
    (0.001, "***"),
    (0.01, "**"),
    (0.05, "*"),
    (0.1, "."),
)
NOT_SIGNIFICANT_MARKER = " "


@dataclass(frozen=True)
class PairwiseCorrelation:
    """Correlation between two items of a set."""

    x_column: str
    y_column: str
    r: float
    p_value: float
    significance_marker: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x_column": self.x_column,
            "y_column": self.y_column,
            "r": self.r,
            "p_value": self.p_value,
            "significance_marker": self.significance_marker,
        }


def significance_marker(p_value: float) -> str:
    """
    Bucket a p-value into a significance marker.

    Raises:
        ValueError: If p_value is not within [0, 1].
    """
    if not 0.0 <= p_value <= 1.0:
        raise ValueError(f"p-value must be within [0, 1], got {p_value}")
    for cutoff, marker in SIGNIFICANCE_LEVELS:
        if p_value < cutoff:
            return marker
    return NOT_SIGNIFICANT_MARKER


def summarize_correlations(
    item_set: ItemSet,
    decimals: Optional[int] = None,
) -> List[PairwiseCorrelation]:
    """
    Summarize the correlation of every unordered pair of items.

    Args:
        item_set: Items to correlate.
        decimals: Rounding for r (default: settings.CORRELATION_DECIMALS).
            The significance marker is always derived from the unrounded
            statistic.

    Returns:
        One PairwiseCorrelation per pair (i, j) with i before j in item
        order; the diagonal is omitted. Pairs involving a constant item get
        r = nan and marker " ".
    """
    if decimals is None:
        decimals = settings.CORRELATION_DECIMALS

    summary: List[PairwiseCorrelation] = []
    columns = item_set.columns
    for i, x_name in enumerate(columns):
        x = item_set.data[x_name].to_numpy()
        for y_name in columns[i + 1 :]:
            y = item_set.data[y_name].to_numpy()

            if np.ptp(x) == 0 or np.ptp(y) == 0:
                logger.warning(
                    f"Correlation undefined for constant item in pair "
                    f"({x_name!r}, {y_name!r})"
                )
                r, p = float("nan"), float("nan")
                marker = NOT_SIGNIFICANT_MARKER
            else:
                result = stats.pearsonr(x, y)
                r, p = float(result.statistic), float(result.pvalue)
                marker = significance_marker(p)

            summary.append(
                PairwiseCorrelation(
                    x_column=x_name,
                    y_column=y_name,
                    r=round(r, decimals),
                    p_value=p,
                    significance_marker=marker,
                )
            )

    return summary


def correlation_matrix(item_set: ItemSet) -> pd.DataFrame:
    """
    Full symmetric Pearson correlation matrix with an undefined (NaN) diagonal.
    """
    matrix = item_set.data.corr(method="pearson")
    values = matrix.to_numpy(copy=True)
    np.fill_diagonal(values, np.nan)
    return pd.DataFrame(values, index=matrix.index, columns=matrix.columns)
