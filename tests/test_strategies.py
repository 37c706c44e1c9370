"""
Unit tests for hash strategies and the strategy registry.
"""

import pytest
from imagecomparator.exceptions import PreconditionViolation, UnknownStrategyError
from imagecomparator.hashing import (
    AverageHashStrategy,
    MedianHashStrategy,
    DifferenceHashStrategy,
    DctHashStrategy,
    HashStrategy,
    register_strategy,
    get_strategy,
    available_strategies,
)
from imagecomparator.hashing import strategies


REFERENCE_PIXELS = [116, 109, 83, 85, 103, 123, 115, 81, 86, 109, 118, 83, 95, 98, 104, 78]


class TestAverageHashStrategy:
    """Test the default average hash."""

    def test_reference_vector(self):
        """Test the known reference pixels hash to the known fingerprint."""
        expected = [1, 1, 0, 0, 1, 1, 1, 0, 0, 1, 1, 0, 0, 0, 1, 0]
        assert AverageHashStrategy().hash(REFERENCE_PIXELS) == expected

    def test_value_equal_to_mean_is_set(self):
        """Test that intensities equal to the mean produce 1."""
        assert AverageHashStrategy().hash([10, 20, 30]) == [0, 1, 1]

    def test_uniform_input(self):
        """Test a flat image hashes to all ones."""
        assert AverageHashStrategy().hash([50] * 9) == [1] * 9

    def test_empty_input(self):
        """Test that hashing nothing is rejected."""
        with pytest.raises(PreconditionViolation):
            AverageHashStrategy().hash([])


class TestOtherStrategies:
    """Test median, difference and DCT strategies."""

    def test_median(self):
        """Test thresholding strictly above the median."""
        assert MedianHashStrategy().hash([1, 2, 3, 4]) == [0, 0, 1, 1]

    def test_difference_wraps_last_column(self):
        """Test gradient bits including the wrap-around column."""
        # [[1, 2],
        #  [4, 3]]
        assert DifferenceHashStrategy().hash([1, 2, 4, 3]) == [0, 1, 1, 0]

    def test_difference_requires_square(self):
        """Test non-square input is rejected."""
        with pytest.raises(PreconditionViolation):
            DifferenceHashStrategy().hash([1, 2, 3])

    def test_dct_length_and_bits(self):
        """Test DCT hash keeps one bit per cell."""
        fp = DctHashStrategy().hash(REFERENCE_PIXELS)
        assert len(fp) == len(REFERENCE_PIXELS)
        assert set(fp) <= {0, 1}
        assert fp == DctHashStrategy().hash(REFERENCE_PIXELS)

    def test_dct_dc_term_set_for_bright_grid(self):
        """Test the DC coefficient dominates for a bright image."""
        fp = DctHashStrategy().hash(REFERENCE_PIXELS)
        assert fp[0] == 1

    def test_dct_requires_square(self):
        """Test non-square input is rejected."""
        with pytest.raises(PreconditionViolation):
            DctHashStrategy().hash([1, 2, 3, 4, 5])

    @pytest.mark.parametrize("strategy", [
        AverageHashStrategy(), MedianHashStrategy(), DifferenceHashStrategy(), DctHashStrategy(),
    ])
    def test_protocol(self, strategy):
        """Test every built-in satisfies the HashStrategy protocol."""
        assert isinstance(strategy, HashStrategy)
        assert len(strategy.hash(REFERENCE_PIXELS)) == 16


class InvertedAverageStrategy:
    """Test strategy: average hash with bits flipped."""

    name = 'inverted'

    def hash(self, pixels):
        return [1 - bit for bit in AverageHashStrategy().hash(pixels)]


class TestRegistry:
    """Test strategy registration and lookup."""

    def test_builtins_available(self):
        """Test all built-in strategies are registered."""
        assert {'average', 'median', 'difference', 'dct'} <= set(available_strategies())

    def test_get_strategy(self):
        """Test lookup by name is case-insensitive."""
        assert isinstance(get_strategy('Average'), AverageHashStrategy)

    def test_unknown_strategy(self):
        """Test unknown names raise a KeyError-compatible error."""
        with pytest.raises(UnknownStrategyError) as exc_info:
            get_strategy('wavelet')
        assert isinstance(exc_info.value, KeyError)
        assert 'average' in str(exc_info.value)

    def test_register_custom_strategy(self):
        """Test a new strategy can be registered and created by name."""
        register_strategy('inverted', InvertedAverageStrategy)
        try:
            strategy = get_strategy('inverted')
            assert strategy.hash([10, 20, 30]) == [1, 0, 0]
        finally:
            strategies._REGISTRY.pop('inverted', None)

    def test_register_duplicate_rejected(self):
        """Test existing names are not silently replaced."""
        with pytest.raises(ValueError):
            register_strategy('average', InvertedAverageStrategy)
