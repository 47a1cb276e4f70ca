"""
Composite index construction: correlation summaries, Cronbach's alpha,
rescaling, standardization and item combination over a numeric table.
"""
from composite_index.core.correlation import (
    PairwiseCorrelation,
    correlation_matrix,
    significance_marker,
    summarize_correlations,
)
from composite_index.core.errors import (
    ConstantInputError,
    DuplicateItemError,
    IndexConstructionError,
    InsufficientItemsError,
    InsufficientObservationsError,
    InvalidRangeError,
    MismatchedLengthError,
    MissingValuesError,
    UnknownColumnError,
    ZeroVarianceError,
)
from composite_index.core.index import IndexReport, build_index, combine_items
from composite_index.core.item_set import ItemSet, select_items, validate_column
from composite_index.core.reliability import (
    ReliabilityResult,
    calculate_cronbachs_alpha,
    detect_reversed_items,
    get_negative_item_correlations,
)
from composite_index.core.transforms import log_transform, rescale, standardize, truncate

__version__ = "0.1.0"

__all__ = [
    "ConstantInputError",
    "DuplicateItemError",
    "IndexConstructionError",
    "IndexReport",
    "InsufficientItemsError",
    "InsufficientObservationsError",
    "InvalidRangeError",
    "ItemSet",
    "MismatchedLengthError",
    "MissingValuesError",
    "PairwiseCorrelation",
    "ReliabilityResult",
    "UnknownColumnError",
    "ZeroVarianceError",
    "build_index",
    "calculate_cronbachs_alpha",
    "combine_items",
    "correlation_matrix",
    "detect_reversed_items",
    "get_negative_item_correlations",
    "log_transform",
    "rescale",
    "select_items",
    "significance_marker",
    "standardize",
    "summarize_correlations",
    "truncate",
    "validate_column",
]
