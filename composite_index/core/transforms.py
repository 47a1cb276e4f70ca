"""
Column transformations used before items are combined into an index.

- rescale: linear map of a column's observed range onto a target interval
- standardize: z-scores with the sample (N-1) standard deviation
- truncate: top/bottom coding of extreme values
- log_transform: natural log, for compressing long right tails

All functions return a new ``pandas.Series`` with the input's index and name
and never modify their input.

Rescaling is sensitive to outliers: a single extreme value stretches the
observed range, so the remaining observations end up squeezed into a narrow
band near one end of the target interval. Truncate or log-transform such
columns first if that matters for the index.

Linear transforms preserve pairwise correlations, so they never change which
items an item set reverse-scores, nor its standardized alpha.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd

from composite_index.core.config import settings
from composite_index.core.errors import ConstantInputError, InvalidRangeError
from composite_index.core.item_set import validate_column

logger = logging.getLogger(__name__)


def rescale(
    x,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> pd.Series:
    """
    Map a column linearly onto the interval [lower, upper].

    Formula:
        y = lower + (upper - lower) × (x - min(x)) / (max(x) - min(x))

    The observed minimum maps exactly to ``lower`` and the observed maximum
    exactly to ``upper``; order is preserved everywhere in between.

    Args:
        x: Numeric column.
        lower: Target lower bound (default: settings.RESCALE_MIN).
        upper: Target upper bound (default: settings.RESCALE_MAX).

    Returns:
        Rescaled column.

    Raises:
        InvalidRangeError: If lower >= upper.
        ConstantInputError: If the column has a single distinct value.
        MissingValuesError: If the column has missing or non-numeric values.
        InsufficientObservationsError: If the column is empty.

    Example:
        >>> rescale(pd.Series([67.0, 70.0, 73.0]), 0, 100).tolist()
        [0.0, 50.0, 100.0]
    """
    lower = settings.RESCALE_MIN if lower is None else float(lower)
    upper = settings.RESCALE_MAX if upper is None else float(upper)
    if not lower < upper:
        raise InvalidRangeError(
            "Target interval must satisfy lower < upper",
            context={"lower": lower, "upper": upper},
        )

    column = validate_column(x)
    lo = column.min()
    hi = column.max()
    if hi == lo:
        raise ConstantInputError(
            "Cannot rescale a constant column",
            context={"column": column.name, "value": lo},
        )

    scaled = lower + (upper - lower) * (column - lo) / (hi - lo)
    # Pin the endpoints so min/max land exactly on the bounds
    values = scaled.to_numpy(copy=True)
    values[column.to_numpy() == lo] = lower
    values[column.to_numpy() == hi] = upper
    return pd.Series(values, index=column.index, name=column.name)


def standardize(x) -> pd.Series:
    """
    Convert a column to z-scores.

    Formula:
        z = (x - mean(x)) / sd(x)    with sd using the N-1 divisor

    Raises:
        ConstantInputError: If the standard deviation is zero.
        MissingValuesError: If the column has missing or non-numeric values.
        InsufficientObservationsError: If the column is empty.
    """
    column = validate_column(x)
    sd = column.std(ddof=1)
    if not sd > 0:
        raise ConstantInputError(
            "Cannot standardize a column with zero standard deviation",
            context={"column": column.name, "n": len(column)},
        )
    return (column - column.mean()) / sd


def truncate(
    x,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    lower_quantile: Optional[float] = None,
    upper_quantile: Optional[float] = None,
) -> pd.Series:
    """
    Top- and/or bottom-code a column.

    Values below the lower bound are set to the lower bound and values above
    the upper bound to the upper bound. Each bound can be given directly or
    as a quantile of the column (e.g. ``upper_quantile=0.95``), not both.

    Raises:
        ValueError: If a side gets both a value and a quantile, or a quantile
            lies outside [0, 1].
        InvalidRangeError: If the resolved lower bound exceeds the upper bound.
    """
    if lower is not None and lower_quantile is not None:
        raise ValueError("Pass either lower or lower_quantile, not both")
    if upper is not None and upper_quantile is not None:
        raise ValueError("Pass either upper or upper_quantile, not both")
    for q in (lower_quantile, upper_quantile):
        if q is not None and not 0.0 <= q <= 1.0:
            raise ValueError(f"Quantiles must be within [0, 1], got {q}")

    column = validate_column(x)
    if lower_quantile is not None:
        lower = float(column.quantile(lower_quantile))
    if upper_quantile is not None:
        upper = float(column.quantile(upper_quantile))

    if lower is not None and upper is not None and lower > upper:
        raise InvalidRangeError(
            "Truncation bounds are reversed",
            context={"column": column.name, "lower": lower, "upper": upper},
        )

    clipped = column.clip(lower=lower, upper=upper)
    n_changed = int((clipped != column).sum())
    if n_changed:
        logger.debug(
            f"Truncated {n_changed} value(s) of {column.name!r} to [{lower}, {upper}]"
        )
    return clipped


def log_transform(x, offset: float = 0.0) -> pd.Series:
    """
    Natural log of ``x + offset``.

    Use a positive ``offset`` for columns that contain zeros.

    Raises:
        InvalidRangeError: If any shifted value is zero or negative.
    """
    column = validate_column(x)
    shifted = column + offset
    if (shifted <= 0).any():
        raise InvalidRangeError(
            "Log transform requires strictly positive values",
            context={
                "column": column.name,
                "offset": offset,
                "min_shifted": float(shifted.min()),
            },
        )
    return pd.Series(np.log(shifted.to_numpy()), index=column.index, name=column.name)
