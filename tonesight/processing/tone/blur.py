"""
Gaussian blur for tonal masks.

Border pixels are averaged over the in-bounds taps only, with the kernel
weights re-normalised per pixel. There is no zero padding, mirroring or
wraparound, so a uniform plane stays uniform right up to the image edge.
"""

import numpy as np
import logging
from scipy import ndimage

logger = logging.getLogger(__name__)

# Below this radius gaussian_blur is the identity
MIN_BLUR_RADIUS = 0.1

# Below this radius fast_gaussian_blur is the identity
MIN_FAST_BLUR_RADIUS = 1.0


def kernel_size_for_radius(radius: float) -> int:
    """Odd kernel size, at least 3, covering roughly +/- radius."""
    return max(3, int(round(radius * 2 + 1)) | 1)


def gaussian_kernel(size: int, sigma: float) -> np.ndarray:
    """
    Create a square Gaussian kernel normalised to sum to 1.

    Args:
        size: Kernel width and height (odd)
        sigma: Standard deviation in pixels

    Returns:
        float32 array of shape (size, size)
    """
    center = size // 2
    offsets = np.arange(size, dtype=np.float64) - center
    dy, dx = np.meshgrid(offsets, offsets, indexing='ij')
    kernel = np.exp(-(dx * dx + dy * dy) / (2 * sigma * sigma))
    return (kernel / kernel.sum()).astype(np.float32)


def _weighted_convolution(plane: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Convolve with per-pixel weight re-normalisation at the borders.

    The Gaussian kernel is the outer product of its row marginal with
    itself, so both the weighted sum and the in-bounds weight total are
    computed as two 1-D passes.
    """
    profile = kernel.sum(axis=0).astype(np.float64)
    source = plane.astype(np.float64)

    weighted = ndimage.correlate1d(source, profile, axis=0, mode='constant', cval=0.0)
    weighted = ndimage.correlate1d(weighted, profile, axis=1, mode='constant', cval=0.0)

    coverage = ndimage.correlate1d(np.ones_like(source), profile, axis=0, mode='constant', cval=0.0)
    coverage = ndimage.correlate1d(coverage, profile, axis=1, mode='constant', cval=0.0)

    result = np.where(coverage > 0, weighted / np.maximum(coverage, 1e-12), source)
    return result.astype(np.float32)


def gaussian_blur(plane: np.ndarray, radius: float) -> np.ndarray:
    """
    Blur a single-channel plane with a Gaussian of the given radius.

    Args:
        plane: float array of shape (H, W)
        radius: Gaussian sigma in pixels; below 0.1 the plane is copied unchanged

    Returns:
        Blurred float32 plane of the same shape
    """
    if radius < MIN_BLUR_RADIUS:
        return plane.copy()

    kernel = gaussian_kernel(kernel_size_for_radius(radius), radius)
    return _weighted_convolution(plane, kernel)


def fast_gaussian_blur(plane: np.ndarray, radius: float) -> np.ndarray:
    """
    Approximate a wide Gaussian with repeated narrower passes.

    Radii up to 8 use a single pass, up to 20 two passes at radius/2,
    and anything wider three passes at radius/3.

    Args:
        plane: float array of shape (H, W)
        radius: Target blur radius in pixels; below 1 the plane is copied unchanged

    Returns:
        Blurred float32 plane of the same shape
    """
    if radius < MIN_FAST_BLUR_RADIUS:
        return plane.copy()

    if radius <= 8.0:
        iterations = 1
    elif radius <= 20.0:
        iterations = 2
    else:
        iterations = 3
    pass_radius = radius / iterations

    logger.debug(f"Fast blur: {iterations} pass(es) at radius {pass_radius:.2f}")

    result = plane
    for _ in range(iterations):
        result = gaussian_blur(result, pass_radius)
    return result
