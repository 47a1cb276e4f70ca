"""
Tests for column transforms: rescale, standardize, truncate, log_transform.
"""
import numpy as np
import pandas as pd
import pytest

from composite_index.core.errors import (
    ConstantInputError,
    InsufficientObservationsError,
    InvalidRangeError,
    MissingValuesError,
    ZeroVarianceError,
)
from composite_index.core.transforms import log_transform, rescale, standardize, truncate


class TestRescale:
    """Tests for rescale."""

    def test_endpoints_map_to_bounds(self):
        """Observed min and max land exactly on the target bounds."""
        x = pd.Series([67.0, 73.0, 70.0, 68.5], name="life_exp")

        y = rescale(x, 0, 100)

        assert y.iloc[0] == 0.0
        assert y.iloc[1] == 100.0
        assert y.iloc[2] == pytest.approx(50.0)
        assert y.iloc[3] == pytest.approx(25.0)

    def test_midpoint_maps_linearly(self):
        """A value 1/3 of the way through the range lands 1/3 of the way through the target."""
        y = rescale([67.0, 69.0, 73.0], 0, 100)

        assert y.tolist() == pytest.approx([0.0, 100 / 3, 100.0])

    def test_arbitrary_interval(self):
        y = rescale([1.0, 2.0, 3.0], -1, 1)

        assert y.tolist() == pytest.approx([-1.0, 0.0, 1.0])

    def test_preserves_order(self, states):
        y = rescale(states["murder"], 0, 10)

        assert (y.rank() == states["murder"].rank()).all()

    def test_preserves_index_and_name(self, states):
        y = rescale(states["income"], 0, 100)

        assert y.name == "income"
        assert list(y.index) == list(states.index)

    def test_does_not_mutate_input(self):
        x = pd.Series([3.0, 1.0, 2.0])
        before = x.copy()

        rescale(x, 0, 100)

        pd.testing.assert_series_equal(x, before)

    def test_idempotent(self, states):
        """Rescaling an already-rescaled column to the same interval is a no-op."""
        once = rescale(states["life_exp"], 0, 100)
        twice = rescale(once, 0, 100)

        np.testing.assert_allclose(twice.to_numpy(), once.to_numpy())

    def test_default_interval_from_settings(self):
        from composite_index.core.config import settings

        y = rescale([5.0, 10.0])

        assert y.tolist() == [settings.RESCALE_MIN, settings.RESCALE_MAX]

    @pytest.mark.parametrize("lower,upper", [(100, 0), (5, 5)])
    def test_invalid_range(self, lower, upper):
        with pytest.raises(InvalidRangeError):
            rescale([1.0, 2.0, 3.0], lower, upper)

    @pytest.mark.parametrize("transform", [rescale, standardize, log_transform])
    def test_empty_column(self, transform):
        with pytest.raises(InsufficientObservationsError):
            transform([])

    def test_constant_input(self):
        with pytest.raises(ConstantInputError):
            rescale([4.0, 4.0, 4.0], 0, 100)

    def test_constant_input_is_zero_variance(self):
        """ConstantInputError can be caught as a ZeroVarianceError."""
        with pytest.raises(ZeroVarianceError):
            rescale([4.0, 4.0], 0, 100)

    def test_missing_values_fail_fast(self):
        with pytest.raises(MissingValuesError):
            rescale([1.0, np.nan, 3.0], 0, 100)

    def test_non_numeric_fails_fast(self):
        with pytest.raises(MissingValuesError):
            rescale(pd.Series(["a", "b", "c"]), 0, 100)

    def test_outlier_compresses_remaining_values(self, states):
        """
        One extreme value squeezes everything else into a narrow band at the
        bottom of the target interval.
        """
        life_exp = states["life_exp"]
        with_outlier = pd.concat(
            [life_exp, pd.Series([200.0], index=["Outlier"])]
        ).rename("life_exp")

        y = rescale(with_outlier, 0, 100)
        regular = y.drop("Outlier")

        assert y["Outlier"] == 100.0
        assert (regular <= 10.0).mean() >= 0.9

    def test_truncation_before_rescaling_restores_spread(self, states):
        """Top-coding the outlier first spreads the regular values again."""
        life_exp = states["life_exp"]
        with_outlier = pd.concat(
            [life_exp, pd.Series([200.0], index=["Outlier"])]
        ).rename("life_exp")

        y = rescale(truncate(with_outlier, upper=life_exp.max()), 0, 100)

        assert y.drop("Outlier").max() == 100.0
        assert y.drop("Outlier").min() == 0.0


class TestStandardize:
    """Tests for standardize."""

    def test_zero_mean_unit_sd(self, states):
        z = standardize(states["income"])

        assert z.mean() == pytest.approx(0.0, abs=1e-12)
        assert z.std(ddof=1) == pytest.approx(1.0)

    def test_uses_sample_standard_deviation(self):
        # mean 2.5, sample sd = sqrt(5/3)
        z = standardize([1.0, 2.0, 3.0, 4.0])

        assert z.iloc[0] == pytest.approx(-1.5 / np.sqrt(5 / 3))

    def test_idempotent(self, states):
        once = standardize(states["hs_grad"])
        twice = standardize(once)

        np.testing.assert_allclose(twice.to_numpy(), once.to_numpy(), atol=1e-12)

    def test_preserves_correlations(self, states):
        r_before = states["murder"].corr(states["life_exp"])
        r_after = standardize(states["murder"]).corr(rescale(states["life_exp"], 0, 100))

        assert r_after == pytest.approx(r_before)

    def test_constant_input(self):
        with pytest.raises(ConstantInputError):
            standardize([2.0, 2.0, 2.0])

    def test_single_value(self):
        """One observation has no sample standard deviation."""
        with pytest.raises(ConstantInputError):
            standardize([2.0])


class TestTruncate:
    """Tests for truncate (top/bottom coding)."""

    def test_value_bounds(self):
        y = truncate([1.0, 5.0, 10.0, 50.0], lower=2.0, upper=20.0)

        assert y.tolist() == [2.0, 5.0, 10.0, 20.0]

    def test_one_sided(self):
        y = truncate([1.0, 5.0, 50.0], upper=10.0)

        assert y.tolist() == [1.0, 5.0, 10.0]

    def test_quantile_bounds(self):
        x = pd.Series(np.arange(101, dtype=float))

        y = truncate(x, lower_quantile=0.05, upper_quantile=0.95)

        assert y.min() == pytest.approx(5.0)
        assert y.max() == pytest.approx(95.0)

    def test_value_and_quantile_for_same_side(self):
        with pytest.raises(ValueError):
            truncate([1.0, 2.0], upper=1.0, upper_quantile=0.9)

    def test_quantile_out_of_range(self):
        with pytest.raises(ValueError):
            truncate([1.0, 2.0], lower_quantile=-0.1)

    def test_reversed_bounds(self):
        with pytest.raises(InvalidRangeError):
            truncate([1.0, 2.0, 3.0], lower=3.0, upper=1.0)

    def test_no_bounds_returns_copy(self):
        x = pd.Series([3.0, 1.0])

        y = truncate(x)

        pd.testing.assert_series_equal(y, x)
        assert y is not x


class TestLogTransform:
    """Tests for log_transform."""

    def test_natural_log(self):
        y = log_transform([1.0, np.e, np.e**2])

        assert y.tolist() == pytest.approx([0.0, 1.0, 2.0])

    def test_offset_handles_zeros(self):
        y = log_transform([0.0, 9.0], offset=1.0)

        assert y.tolist() == pytest.approx([0.0, np.log(10.0)])

    def test_non_positive_values(self):
        with pytest.raises(InvalidRangeError):
            log_transform([0.0, 1.0])

    def test_reduces_outlier_compression(self, states):
        """Logging a long-tailed column spreads its bulk over more of [0, 100]."""
        area = states["area"]

        raw = rescale(area, 0, 100)
        logged = rescale(log_transform(area), 0, 100)

        assert logged.median() > raw.median()
