"""
test_search_space.py - Degrade-to-empty normalization of the search box.
"""
from __future__ import annotations

import numpy as np

from swarmpso.search_space import SearchSpace
from swarmpso.search_space import normalize_search_space


class TestNormalizeSearchSpace:

    def test_valid_bounds_kept(self):
        space = normalize_search_space(2, [-1.0, 0.0], [1.0, 5.0])
        assert space.dimensions == 2
        np.testing.assert_array_equal(space.lower, [-1.0, 0.0])
        np.testing.assert_array_equal(space.upper, [1.0, 5.0])

    def test_inverted_bounds_are_swapped(self):
        space = normalize_search_space(3, [1.0, -2.0, 4.0], [-1.0, 2.0, 4.0])
        np.testing.assert_array_equal(space.lower, [-1.0, -2.0, 4.0])
        np.testing.assert_array_equal(space.upper, [1.0, 2.0, 4.0])
        assert np.all(space.lower <= space.upper)

    def test_caller_bounds_not_mutated(self):
        lo, hi = [3.0, 0.0], [-3.0, 1.0]
        normalize_search_space(2, lo, hi)
        assert lo == [3.0, 0.0]
        assert hi == [-3.0, 1.0]

    def test_negative_dimensions_clamped(self):
        space = normalize_search_space(-4, [0.0], [1.0])
        assert space.dimensions == 0
        assert space.lower.size == 0 and space.upper.size == 0

    def test_missing_bounds_degrade(self):
        assert normalize_search_space(2, None, [1.0, 1.0]).dimensions == 0
        assert normalize_search_space(2, [0.0, 0.0], None).dimensions == 0

    def test_mismatched_bounds_degrade(self):
        space = normalize_search_space(3, [-10.0, -10.0], [10.0, 10.0, 10.0])
        assert space.dimensions == 0
        assert space.upper.size == 0

    def test_zero_dimensions_ignores_bounds(self):
        space = normalize_search_space(0, None, None)
        assert space.dimensions == 0

    def test_span_and_clip(self):
        space = normalize_search_space(2, [-1.0, 0.0], [1.0, 4.0])
        np.testing.assert_array_equal(space.span, [2.0, 4.0])
        np.testing.assert_array_equal(space.clip(np.array([5.0, -3.0])), [1.0, 0.0])

    def test_default_space_is_empty(self):
        assert SearchSpace().dimensions == 0
