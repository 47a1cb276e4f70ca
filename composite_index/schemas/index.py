"""
Pydantic schemas for serializing index-construction results.

These are the output contract handed to reporting layers (JSON summaries,
dashboards). The core computations return dataclasses; these models validate
and serialize them.
"""
import math
from enum import Enum
from typing import Dict, List, Optional, Self

from pydantic import BaseModel, Field, model_validator

from composite_index.core.correlation import PairwiseCorrelation
from composite_index.core.index import IndexReport
from composite_index.core.reliability import ReliabilityResult


class ReliabilityInterpretation(str, Enum):
    """Interpretation of reliability coefficient values.

    - excellent: >= 0.90
    - good: >= 0.80
    - acceptable: >= 0.70
    - questionable: >= 0.60
    - poor: >= 0.50
    - unacceptable: < 0.50
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    QUESTIONABLE = "questionable"
    POOR = "poor"
    UNACCEPTABLE = "unacceptable"


class PairwiseCorrelationSchema(BaseModel):
    """Correlation between two items, with its significance marker."""

    x_column: str
    y_column: str
    r: Optional[float] = Field(
        None,
        ge=-1.0,
        le=1.0,
        description="Pearson correlation rounded for display. None if undefined.",
    )
    p_value: Optional[float] = Field(None, ge=0.0, le=1.0)
    significance_marker: str = Field(
        ...,
        description='One of "***", "**", "*", ".", " "',
    )

    @classmethod
    def from_pair(cls, pair: PairwiseCorrelation) -> "PairwiseCorrelationSchema":
        return cls(
            x_column=pair.x_column,
            y_column=pair.y_column,
            r=None if math.isnan(pair.r) else pair.r,
            p_value=None if math.isnan(pair.p_value) else pair.p_value,
            significance_marker=pair.significance_marker,
        )


class ReliabilitySummary(BaseModel):
    """
    Cronbach's alpha for one item set.

    Raw alpha is at most 1 and has no lower bound; strongly disagreeing
    items produce large negative values.
    """

    item_set: str
    raw_alpha: float = Field(..., le=1.0 + 1e-9)
    standardized_alpha: Optional[float] = None
    interpretation: ReliabilityInterpretation
    meets_threshold: bool
    threshold: float = Field(..., ge=0.0, le=1.0)
    num_items: int = Field(..., ge=2)
    num_observations: int = Field(..., ge=2)
    reversed_items: List[str] = Field(
        default_factory=list,
        description="Items reverse-scored before computing alpha, in flip order",
    )
    item_rest_correlations: Dict[str, float] = Field(default_factory=dict)
    alpha_if_item_deleted: Optional[Dict[str, Optional[float]]] = None

    @model_validator(mode="after")
    def validate_meets_threshold_consistency(self) -> Self:
        """Ensure meets_threshold agrees with raw_alpha and threshold."""
        if self.meets_threshold != (self.raw_alpha >= self.threshold):
            raise ValueError(
                f"meets_threshold={self.meets_threshold} is inconsistent with "
                f"raw_alpha={self.raw_alpha} and threshold={self.threshold}"
            )
        return self

    @classmethod
    def from_result(cls, result: ReliabilityResult) -> "ReliabilitySummary":
        deleted = None
        if result.alpha_if_item_deleted is not None:
            deleted = {
                name: None if math.isnan(value) else value
                for name, value in result.alpha_if_item_deleted.items()
            }
        return cls(
            item_set=result.item_set,
            raw_alpha=result.raw_alpha,
            standardized_alpha=(
                None
                if math.isnan(result.standardized_alpha)
                else result.standardized_alpha
            ),
            interpretation=ReliabilityInterpretation(result.interpretation),
            meets_threshold=result.meets_threshold,
            threshold=result.threshold,
            num_items=result.num_items,
            num_observations=result.num_observations,
            reversed_items=list(result.reversed_items),
            item_rest_correlations=dict(result.item_rest_correlations),
            alpha_if_item_deleted=deleted,
        )


class IndexSummary(BaseModel):
    """Summary of a built composite index (without the per-row scores)."""

    name: str
    method: str
    signs: Dict[str, int]
    reliability: ReliabilitySummary
    correlations: List[PairwiseCorrelationSchema] = Field(default_factory=list)
    composite_min: float
    composite_max: float
    composite_mean: float

    @classmethod
    def from_report(
        cls,
        report: IndexReport,
        correlations: Optional[List[PairwiseCorrelation]] = None,
    ) -> "IndexSummary":
        composite = report.composite
        return cls(
            name=str(composite.name),
            method=report.method,
            signs=dict(report.signs),
            reliability=ReliabilitySummary.from_result(report.reliability),
            correlations=[
                PairwiseCorrelationSchema.from_pair(pair) for pair in correlations or []
            ],
            composite_min=float(composite.min()),
            composite_max=float(composite.max()),
            composite_mean=float(composite.mean()),
        )
