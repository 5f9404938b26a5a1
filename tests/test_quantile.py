import numpy as np
import pytest

from lshandoff.exceptions import ParameterException
from lshandoff.retrieval.quantile import empirical_quantiles


class TestQuantileClass:

    def test_odd_median(self):
        assert empirical_quantiles([1, 2, 3, 4, 5], [0.5])[0] == 3.0

    def test_even_median(self):
        assert empirical_quantiles([1, 2, 3, 4], [0.5])[0] == 2.5

    def test_linear_interpolation(self):
        q = empirical_quantiles([4, 1, 3, 2], [0.0, 0.25, 1.0])
        np.testing.assert_allclose(q, [1.0, 1.75, 4.0])

    def test_aligned_with_grid(self):
        probs = np.linspace(0.05, 0.95, 19)
        q = empirical_quantiles(np.arange(101), probs)
        assert q.shape == probs.shape
        np.testing.assert_allclose(q, probs * 100)

    def test_empty(self):
        with pytest.raises(ParameterException):
            empirical_quantiles([], [0.5])

    def test_bad_probabilities(self):
        with pytest.raises(ParameterException):
            empirical_quantiles([1, 2, 3], [1.5])
