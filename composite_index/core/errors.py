"""
Exceptions raised by the index-construction toolkit.

Every operation validates its input synchronously and raises one of these
errors at the point of computation. Nothing here retries: the operations are
deterministic, so the caller has to fix the input (drop a constant column,
pick a valid target interval, etc.) and call again.
"""

from typing import Any, Dict, Optional


class IndexConstructionError(Exception):
    """Base exception for index-construction errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the failing input (column names,
            observed values, sizes)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg = f"{msg} (context: {ctx_str})"
        return msg


class InsufficientItemsError(IndexConstructionError):
    """An item set has fewer items than the operation needs (at least 2)."""


class ZeroVarianceError(IndexConstructionError):
    """An item or the total score has no spread, so a variance ratio is undefined."""


class ConstantInputError(ZeroVarianceError):
    """A column passed to a transform is constant (max == min, or sd == 0)."""


class InvalidRangeError(IndexConstructionError):
    """A target interval or truncation bound is reversed or degenerate."""


class MismatchedLengthError(IndexConstructionError):
    """Columns that must align row-by-row have different lengths."""


class MissingValuesError(IndexConstructionError):
    """A column contains missing, infinite or non-numeric values."""


class UnknownColumnError(IndexConstructionError):
    """A requested column does not exist in the source table."""


class DuplicateItemError(IndexConstructionError):
    """The same column was named more than once in one item set."""


class InsufficientObservationsError(IndexConstructionError):
    """A column has no observations to compute with."""
