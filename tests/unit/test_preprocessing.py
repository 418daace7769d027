"""
Unit tests for feature normalization, rescaling and optimal shrinkage.
"""

import numpy as np
import pytest

from pareto_sindy.core.preprocessing import (
    normalize_theta,
    optimal_shrinkage,
    optimal_svht,
    rescale_theta,
    rescale_xi,
)


class TestNormalization:
    """Tests for normalize_theta, rescale_theta and rescale_xi."""

    @pytest.fixture
    def theta(self):
        rng = np.random.default_rng(0)
        theta = rng.standard_normal((5, 100))
        # Wildly different row magnitudes
        theta[0] *= 1e4
        theta[3] *= 1e-3
        return theta

    def test_rows_have_unit_norm(self, theta):
        """Every feature row should have unit L2 norm after normalization."""
        scales = np.ones(5)
        original_norms = np.linalg.norm(theta, axis=1)

        normalize_theta(scales, theta)

        np.testing.assert_allclose(np.linalg.norm(theta, axis=1), 1.0, atol=1e-14)
        np.testing.assert_allclose(scales, original_norms)

    def test_round_trip_restores_theta(self, theta):
        """rescale_theta(normalize_theta(theta)) should reproduce theta."""
        original = theta.copy()
        scales = np.ones(5)

        normalize_theta(scales, theta)
        rescale_theta(theta, scales)

        np.testing.assert_allclose(theta, original, rtol=1e-12)

    def test_rescale_xi_recovers_original_coefficients(self, theta):
        """Coefficients fitted on normalized features map back to original units."""
        rng = np.random.default_rng(1)
        xi_true = rng.standard_normal((5, 2))
        X_dot = xi_true.T @ theta
        scales = np.ones(5)

        normalize_theta(scales, theta)
        xi = np.linalg.lstsq(theta.T, X_dot.T, rcond=None)[0]
        rescale_xi(xi, scales)

        np.testing.assert_allclose(xi, xi_true, rtol=1e-8)

    @pytest.mark.parametrize("func", [normalize_theta, rescale_theta, rescale_xi])
    def test_scale_length_mismatch_raises(self, func):
        """Scale vectors must have one entry per feature row."""
        matrix = np.ones((4, 10))
        scales = np.ones(3)

        with pytest.raises(ValueError, match="scales has length 3"):
            if func is normalize_theta:
                func(scales, matrix)
            else:
                func(matrix, scales)

    def test_zero_row_is_left_untouched(self):
        """A zero feature row warns and keeps scale 1 instead of producing NaN."""
        theta = np.vstack([np.zeros(10), np.arange(10.0)])
        scales = np.zeros(2)

        with pytest.warns(UserWarning, match="identically zero"):
            normalize_theta(scales, theta)

        assert scales[0] == 1.0
        assert not np.any(np.isnan(theta))
        np.testing.assert_array_equal(theta[0], 0.0)


class TestOptimalShrinkage:
    """Tests for singular value hard thresholding."""

    @pytest.fixture
    def low_rank(self):
        """Rank-2 matrix with shape [10, 500]."""
        rng = np.random.default_rng(3)
        return rng.standard_normal((10, 2)) @ rng.standard_normal((2, 500))

    def test_square_matrix_coefficient(self):
        """omega(1) = 0.56 - 0.95 + 1.82 + 1.43."""
        assert optimal_svht(50, 50) == pytest.approx(2.86)

    def test_coefficient_is_symmetric_in_dimensions(self):
        assert optimal_svht(10, 500) == optimal_svht(500, 10)

    def test_coefficient_for_thin_matrix(self):
        """For a very thin matrix omega approaches 1.43."""
        assert optimal_svht(1, 10**6) == pytest.approx(1.43, abs=1e-5)

    def test_noise_is_removed(self, low_rank):
        """Denoising a noisy low-rank matrix brings it closer to the clean one."""
        rng = np.random.default_rng(4)
        noisy = low_rank + 0.1 * rng.standard_normal(low_rank.shape)
        denoised = noisy.copy()

        optimal_shrinkage(denoised)

        error_noisy = np.linalg.norm(noisy - low_rank)
        error_denoised = np.linalg.norm(denoised - low_rank)
        assert error_denoised < error_noisy
        assert np.linalg.matrix_rank(denoised, tol=1e-8) == 2

    def test_clean_low_rank_matrix_is_unchanged(self, low_rank):
        """Without noise the median singular value is zero and nothing is cut."""
        denoised = low_rank.copy()

        optimal_shrinkage(denoised)

        np.testing.assert_allclose(denoised, low_rank, atol=1e-10)

    def test_works_in_place_through_transpose(self, low_rank):
        """Shrinking theta.T must update theta itself."""
        rng = np.random.default_rng(5)
        theta = low_rank + 0.1 * rng.standard_normal(low_rank.shape)
        expected = theta.copy()
        optimal_shrinkage(expected)

        optimal_shrinkage(theta.T)

        np.testing.assert_allclose(theta, expected, atol=1e-10)
