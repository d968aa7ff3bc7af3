"""
Tests for the mask blur operator.
"""

import pytest
import numpy as np

from tonesight.processing.tone.blur import (
    gaussian_kernel, gaussian_blur, fast_gaussian_blur, kernel_size_for_radius
)


def _reference_blur(plane: np.ndarray, radius: float) -> np.ndarray:
    """Direct 2-D convolution with per-pixel weight re-normalisation."""
    kernel = gaussian_kernel(kernel_size_for_radius(radius), radius)
    k = kernel.shape[0] // 2
    height, width = plane.shape
    out = np.zeros_like(plane, dtype=np.float64)

    for y in range(height):
        for x in range(width):
            total, weights = 0.0, 0.0
            for ky in range(-k, k + 1):
                for kx in range(-k, k + 1):
                    sy, sx = y + ky, x + kx
                    if 0 <= sy < height and 0 <= sx < width:
                        w = kernel[ky + k, kx + k]
                        total += plane[sy, sx] * w
                        weights += w
            out[y, x] = total / weights
    return out


class TestGaussianKernel:
    """Test kernel construction."""

    @pytest.mark.parametrize("radius,expected", [
        (0.1, 3),
        (1.0, 3),
        (2.0, 5),
        (2.4, 7),
        (15.0, 31),
    ])
    def test_kernel_size(self, radius, expected):
        """Kernel size is 2r+1 rounded, forced odd and at least 3."""
        assert kernel_size_for_radius(radius) == expected

    def test_kernel_is_normalized_and_symmetric(self):
        """Kernel weights sum to 1 and mirror around the centre."""
        kernel = gaussian_kernel(7, 2.0)

        assert kernel.shape == (7, 7)
        assert kernel.sum() == pytest.approx(1.0, abs=1e-5)
        np.testing.assert_allclose(kernel, kernel.T)
        np.testing.assert_allclose(kernel, kernel[::-1, ::-1])
        assert kernel[3, 3] == kernel.max()


class TestGaussianBlur:
    """Test the border-renormalised Gaussian blur."""

    def test_small_radius_is_identity(self):
        """Radii below the minimum return the plane unchanged."""
        plane = np.random.default_rng(3).random((10, 12)).astype(np.float32)

        result = gaussian_blur(plane, 0.05)

        np.testing.assert_array_equal(result, plane)
        assert result is not plane

    def test_uniform_plane_is_preserved_at_borders(self):
        """Re-normalised borders keep a flat plane flat (no edge darkening)."""
        plane = np.full((15, 20), 0.7, dtype=np.float32)

        result = gaussian_blur(plane, 4.0)

        np.testing.assert_allclose(result, plane, atol=1e-5)

    def test_matches_direct_convolution(self):
        """Separable blur matches a brute-force weighted average."""
        plane = np.random.default_rng(7).random((9, 11)).astype(np.float32)

        result = gaussian_blur(plane, 1.5)

        np.testing.assert_allclose(result, _reference_blur(plane, 1.5), atol=1e-5)

    def test_values_stay_within_input_range(self):
        """Blurring never produces values outside the input range."""
        plane = np.random.default_rng(11).random((20, 20)).astype(np.float32)

        result = gaussian_blur(plane, 3.0)

        assert result.min() >= plane.min() - 1e-6
        assert result.max() <= plane.max() + 1e-6

    def test_impulse_spreads_symmetrically(self):
        """A single bright pixel spreads evenly in all directions."""
        plane = np.zeros((21, 21), dtype=np.float32)
        plane[10, 10] = 1.0

        result = gaussian_blur(plane, 2.0)

        assert result[10, 10] < 1.0
        assert result[10, 9] == pytest.approx(result[10, 11])
        assert result[9, 10] == pytest.approx(result[11, 10])
        assert result[10, 9] > result[10, 8] > 0

    def test_output_dtype_and_shape(self):
        """Output keeps the input shape as float32."""
        plane = np.zeros((6, 9), dtype=np.float64)

        result = gaussian_blur(plane, 2.0)

        assert result.shape == (6, 9)
        assert result.dtype == np.float32


class TestFastGaussianBlur:
    """Test the multi-pass approximation."""

    @pytest.fixture
    def plane(self):
        rng = np.random.default_rng(5)
        return rng.random((30, 30)).astype(np.float32)

    def test_radius_below_one_is_identity(self, plane):
        """Fast blur leaves the plane untouched below 1 px."""
        np.testing.assert_array_equal(fast_gaussian_blur(plane, 0.5), plane)

    def test_small_radius_single_pass(self, plane):
        """Radii up to 8 use one full-radius pass."""
        np.testing.assert_allclose(fast_gaussian_blur(plane, 6.0),
                                   gaussian_blur(plane, 6.0), atol=1e-6)

    def test_medium_radius_two_passes(self, plane):
        """Radii up to 20 use two passes at half radius."""
        expected = gaussian_blur(gaussian_blur(plane, 6.0), 6.0)

        np.testing.assert_allclose(fast_gaussian_blur(plane, 12.0), expected, atol=1e-6)

    def test_large_radius_three_passes(self, plane):
        """Wider radii use three passes at a third of the radius."""
        expected = gaussian_blur(gaussian_blur(gaussian_blur(plane, 10.0), 10.0), 10.0)

        np.testing.assert_allclose(fast_gaussian_blur(plane, 30.0), expected, atol=1e-6)

    def test_boundaries_of_pass_selection(self, plane):
        """Pass count switches exactly at 8 and 20."""
        np.testing.assert_allclose(fast_gaussian_blur(plane, 8.0),
                                   gaussian_blur(plane, 8.0), atol=1e-6)
        np.testing.assert_allclose(fast_gaussian_blur(plane, 20.0),
                                   gaussian_blur(gaussian_blur(plane, 10.0), 10.0), atol=1e-6)
