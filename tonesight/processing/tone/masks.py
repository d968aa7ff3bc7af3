"""
Tonal mask generation for shadow/highlight correction.

Both masks are built from normalised luminance (0-1), feathered with the
fast Gaussian blur and finally stretched so the strongest pixel is exactly 1.
"""

import numpy as np
import logging
from typing import Optional

from .blur import fast_gaussian_blur
from .models import CorrectionConstants

logger = logging.getLogger(__name__)


def _finish_mask(mask: np.ndarray, radius: float, constants: CorrectionConstants) -> np.ndarray:
    """Blur the raw mask, then rescale it by its own maximum."""
    if radius > constants.blur_epsilon:
        mask = fast_gaussian_blur(mask, radius)

    max_val = float(mask.max()) if mask.size else 0.0
    if max_val > 0:
        mask = mask / max_val
    # An all-zero mask is left as is

    return np.clip(mask, 0.0, 1.0).astype(np.float32)


def create_shadow_mask(luminance: np.ndarray, tonal_width: float, blur_radius: float,
                       constants: Optional[CorrectionConstants] = None) -> np.ndarray:
    """
    Build the shadow selection mask.

    Pixels at or below ``threshold * shadow_core_fraction`` are fully
    selected. Between there and the threshold the mask falls off linearly to
    ``shadow_falloff_floor``; above the threshold it is zero.

    Args:
        luminance: Normalised luminance plane (0-1)
        tonal_width: Tonal width (0-1)
        blur_radius: Configured blur radius in pixels
        constants: Mask shape constants

    Returns:
        float32 mask in [0, 1]
    """
    constants = constants or CorrectionConstants()
    threshold = constants.shadow_width_scale * tonal_width
    core = threshold * constants.shadow_core_fraction
    span = threshold - core

    lum = luminance.astype(np.float32)
    mask = np.zeros_like(lum)

    if span > 0:
        t = (lum - core) / span
        falloff = 1.0 - t * (1.0 - constants.shadow_falloff_floor)
        mask = np.where(lum <= threshold, falloff, mask)
    mask = np.where(lum <= core, 1.0, mask).astype(np.float32)

    logger.debug(f"Shadow mask threshold {threshold:.3f}, raw coverage {np.mean(mask > 0):.1%}")

    return _finish_mask(mask, blur_radius * constants.shadow_blur_scale, constants)


def create_highlight_mask(luminance: np.ndarray, tonal_width: float, blur_radius: float,
                          constants: Optional[CorrectionConstants] = None) -> np.ndarray:
    """
    Build the highlight selection mask.

    Mirror of the shadow mask: full selection at or above the threshold, a
    linear ramp up from ``threshold * highlight_ramp_fraction`` and zero below.
    The blur radius is capped at ``highlight_blur_cap``.
    """
    constants = constants or CorrectionConstants()
    threshold = 1.0 - constants.highlight_width_scale * tonal_width
    ramp_start = threshold * constants.highlight_ramp_fraction
    span = threshold - ramp_start

    lum = luminance.astype(np.float32)
    mask = np.zeros_like(lum)

    if span > 0:
        ramp = (lum - ramp_start) / span
        mask = np.where(lum >= ramp_start, ramp, mask)
    mask = np.where(lum >= threshold, 1.0, mask).astype(np.float32)

    logger.debug(f"Highlight mask threshold {threshold:.3f}, raw coverage {np.mean(mask > 0):.1%}")

    return _finish_mask(mask, min(blur_radius, constants.highlight_blur_cap), constants)
