"""
Shared constants for reliability estimation.

This module contains threshold constants and type definitions used across
the reliability submodules.
"""

from typing import TypedDict


# =============================================================================
# TYPE DEFINITIONS
# =============================================================================


class ProblematicItem(TypedDict):
    """
    Type definition for items with negative or low item-rest correlations.

    Used by get_negative_item_correlations() to provide type-safe return values.
    """

    item: str
    correlation: float
    recommendation: str


# =============================================================================
# CRONBACH'S ALPHA THRESHOLDS
# =============================================================================
# Standard psychometric thresholds for reliability interpretation.

ALPHA_THRESHOLDS = {
    "excellent": 0.90,  # α ≥ 0.90: Excellent internal consistency
    "good": 0.80,  # α ≥ 0.80: Good internal consistency
    "acceptable": 0.70,  # α ≥ 0.70: Acceptable internal consistency
    "questionable": 0.60,  # α ≥ 0.60: Questionable internal consistency
    "poor": 0.50,  # α ≥ 0.50: Poor internal consistency
    # α < 0.50: Unacceptable
}


# =============================================================================
# ITEM QUALITY THRESHOLDS
# =============================================================================

# Threshold below which item-rest correlations are considered "very low".
# Items between 0 and this value still pull in the same direction as the
# rest of the set but add mostly error variance.
LOW_ITEM_CORRELATION_THRESHOLD = 0.15
