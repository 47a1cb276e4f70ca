"""
Pydantic schemas for serializing index-construction results.
"""
from .index import (
    IndexSummary,
    PairwiseCorrelationSchema,
    ReliabilityInterpretation,
    ReliabilitySummary,
)

__all__ = [
    "IndexSummary",
    "PairwiseCorrelationSchema",
    "ReliabilityInterpretation",
    "ReliabilitySummary",
]
