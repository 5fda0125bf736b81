"""Tests for shared descriptive statistics."""

import pandas as pd
import pytest

from storepulse.shared.stats import grouped_spread, lower_quartiles


class TestGroupedSpread:
    """Tests for per-group mean, population std and CV."""

    def test_known_values(self) -> None:
        """Test population (not sample) standard deviation per group."""
        frame = pd.DataFrame(
            {
                "store": [1] * 8 + [2, 2],
                "amount": [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0, 10.0, 10.0],
            }
        )

        result = grouped_spread(frame, "store", "amount")

        assert result.loc[1, "mean"] == pytest.approx(5.0)
        assert result.loc[1, "std_dev"] == pytest.approx(2.0)
        assert result.loc[1, "cv"] == pytest.approx(40.0)
        assert result.loc[2, "cv"] == 0.0

    def test_single_row_group_has_zero_std(self) -> None:
        """Test one observation gives std 0, not NaN."""
        frame = pd.DataFrame({"store": [3], "amount": [42.0]})

        result = grouped_spread(frame, "store", "amount")

        assert result.loc[3, "std_dev"] == 0.0
        assert result.loc[3, "cv"] == 0.0

    @pytest.mark.parametrize("values", [[0.0, 0.0], [-10.0, 10.0], [-5.0, -15.0]])
    def test_non_positive_mean_has_zero_cv(self, values) -> None:
        """Test CV falls back to 0 when the mean is not positive."""
        frame = pd.DataFrame({"store": [1, 1], "amount": values})

        assert grouped_spread(frame, "store", "amount").loc[1, "cv"] == 0.0


class TestLowerQuartiles:
    """Tests for the floor(n * p) quartile convention."""

    def test_twelve_values(self) -> None:
        """Test n=12 picks sorted[3], sorted[6] and sorted[9]."""
        q = lower_quartiles([12.0, 1.0, 11.0, 2.0, 10.0, 3.0, 9.0, 4.0, 8.0, 5.0, 7.0, 6.0])

        assert (q.q1, q.median, q.q3) == (4.0, 7.0, 10.0)
        assert q.iqr == 6.0

    def test_single_value(self) -> None:
        """Test one observation has zero IQR."""
        q = lower_quartiles([42.0])

        assert q.iqr == 0.0
        assert q.median == 42.0

    def test_empty_raises(self) -> None:
        """Test quartiles of nothing are undefined."""
        with pytest.raises(ValueError, match="empty"):
            lower_quartiles([])
