"""
Item sets: the named groups of columns a candidate index is built from.

A table is a ``pandas.DataFrame`` whose rows are observational units and whose
columns are numeric measurements. An item set selects two or more of those
columns as imperfect measurements of one latent construct.

Item sets are immutable. Every operation in the toolkit reads them and
returns new objects; none writes back into the source table.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from composite_index.core.errors import (
    DuplicateItemError,
    InsufficientItemsError,
    InsufficientObservationsError,
    MismatchedLengthError,
    MissingValuesError,
    UnknownColumnError,
)

# Type alias for numpy array typing
try:
    from numpy.typing import NDArray
except ImportError:
    NDArray = np.ndarray  # type: ignore

logger = logging.getLogger(__name__)

MIN_ITEMS = 2


def validate_column(values, name: Optional[str] = None) -> pd.Series:
    """
    Coerce a column to a float Series and fail fast on unusable values.

    Args:
        values: A pandas Series, numpy array or any 1-D sequence of numbers.
        name: Name to attach when ``values`` isn't already a named Series.

    Returns:
        A new float64 Series. The original index and name are kept when
        ``values`` is a Series.

    Raises:
        MissingValuesError: If the column holds non-numeric, missing or
            infinite values, or isn't one-dimensional.
        InsufficientObservationsError: If the column is empty.
    """
    if isinstance(values, pd.Series):
        series = values
    else:
        array = np.asarray(values)
        if array.ndim != 1:
            raise MissingValuesError(
                "Column must be one-dimensional",
                context={"column": name, "ndim": array.ndim},
            )
        series = pd.Series(array, name=name)

    label = series.name if series.name is not None else name

    try:
        numeric = pd.to_numeric(series, errors="raise").astype("float64")
    except (TypeError, ValueError) as exc:
        raise MissingValuesError(
            "Column contains non-numeric values",
            context={"column": label, "dtype": series.dtype},
        ) from exc

    if numeric.empty:
        raise InsufficientObservationsError(
            "Column has no observations",
            context={"column": label},
        )

    bad = ~np.isfinite(numeric.to_numpy())
    if bad.any():
        raise MissingValuesError(
            "Column contains missing or infinite values",
            context={"column": label, "count": int(bad.sum())},
        )

    if numeric.name is None and name is not None:
        numeric = numeric.rename(name)
    return numeric


@dataclass(frozen=True)
class ItemSet:
    """
    A named, ordered collection of 2+ items drawn from one table.

    Attributes:
        name: Label of the candidate index (e.g. "quality_of_life").
        columns: Item names, in the order they were selected.
        data: Float DataFrame holding only the selected columns. Treat as
            read-only; it is a private copy of the source table's columns.
    """

    name: str
    columns: Tuple[str, ...]
    data: pd.DataFrame

    def __post_init__(self) -> None:
        if len(self.columns) < MIN_ITEMS:
            raise InsufficientItemsError(
                f"An item set needs at least {MIN_ITEMS} items",
                context={"item_set": self.name, "num_items": len(self.columns)},
            )
        duplicates = sorted({c for c in self.columns if self.columns.count(c) > 1})
        if duplicates:
            raise DuplicateItemError(
                "Item names must be unique within an item set",
                context={"item_set": self.name, "duplicates": duplicates},
            )
        if list(self.data.columns) != list(self.columns):
            raise UnknownColumnError(
                "Item set data columns do not match its item names",
                context={
                    "item_set": self.name,
                    "columns": list(self.columns),
                    "data_columns": list(self.data.columns),
                },
            )
        if len(self.data) == 0:
            raise InsufficientObservationsError(
                "An item set needs at least one observation",
                context={"item_set": self.name},
            )

    @classmethod
    def from_columns(cls, name: str, columns: Dict[str, Iterable[float]]) -> "ItemSet":
        """
        Build an item set from loose columns.

        Columns must all have the same length; Series indexes are ignored
        and rows are aligned by position.

        Raises:
            InsufficientItemsError: Fewer than 2 columns.
            MismatchedLengthError: Columns differ in length.
            MissingValuesError: A column holds missing or non-numeric values.
            InsufficientObservationsError: The columns are empty.
        """
        validated = {
            label: validate_column(values, name=label).to_numpy()
            for label, values in columns.items()
        }
        if len(validated) < MIN_ITEMS:
            raise InsufficientItemsError(
                f"An item set needs at least {MIN_ITEMS} items",
                context={"item_set": name, "num_items": len(validated)},
            )

        lengths = {label: len(values) for label, values in validated.items()}
        if len(set(lengths.values())) > 1:
            raise MismatchedLengthError(
                "All items in a set must have the same number of observations",
                context={"item_set": name, "lengths": lengths},
            )

        return cls(
            name=name,
            columns=tuple(validated),
            data=pd.DataFrame(validated),
        )

    @property
    def k(self) -> int:
        """Number of items in the set."""
        return len(self.columns)

    @property
    def n_observations(self) -> int:
        """Number of observational units (rows)."""
        return len(self.data)

    def column(self, name: str) -> pd.Series:
        """Return a copy of one item column."""
        if name not in self.columns:
            raise UnknownColumnError(
                "Item is not part of this item set",
                context={"item_set": self.name, "column": name},
            )
        return self.data[name].copy()

    def matrix(self) -> "NDArray[np.float64]":
        """Observations × items matrix as a fresh float array."""
        return self.data.to_numpy(dtype="float64", copy=True)


def select_items(
    table: pd.DataFrame,
    columns: Sequence[str],
    name: str = "index",
) -> ItemSet:
    """
    Select a set of items from a table.

    Args:
        table: Source table (rows = observational units).
        columns: Names of the columns to use as items, in order.
        name: Label for the candidate index.

    Returns:
        ItemSet holding a validated float copy of the selected columns.

    Raises:
        UnknownColumnError: A requested column isn't in ``table``.
        InsufficientItemsError: Fewer than 2 columns requested.
        DuplicateItemError: A column is requested more than once.
        MissingValuesError: A selected column has missing or non-numeric values.
        InsufficientObservationsError: The table has no rows.

    Example:
        >>> quality = select_items(states, ["life_exp", "murder", "hs_grad"],
        ...                        name="quality_of_life")
        >>> quality.k
        3
    """
    columns = list(columns)
    missing = [c for c in columns if c not in table.columns]
    if missing:
        raise UnknownColumnError(
            "Columns not found in table",
            context={"item_set": name, "missing": missing},
        )

    if len(columns) < MIN_ITEMS:
        raise InsufficientItemsError(
            f"An item set needs at least {MIN_ITEMS} items",
            context={"item_set": name, "num_items": len(columns)},
        )

    data = pd.DataFrame(
        {column: validate_column(table[column], name=column) for column in columns},
        index=table.index,
    )

    logger.debug(
        f"Selected item set {name!r}: {len(columns)} items x {len(data)} observations"
    )
    return ItemSet(name=name, columns=tuple(columns), data=data)
