"""
BGR <-> Lab conversion for ToneSight

Implements a fixed D65 sRGB transform with the storage convention used by the
tone pipeline: L is rescaled from [0, 100] to [0, 255] and a/b are offset by
+128 so all three channels share a comparable numeric range.

Neither direction validates its input. Callers are expected to pass
(H, W, 3) arrays; see ``channels.split_lab`` and the tone engine for checks.
"""

import numpy as np
import logging

logger = logging.getLogger(__name__)

# sRGB (linear) -> XYZ, rows give X, Y, Z
RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
], dtype=np.float32)

# XYZ -> sRGB (linear), rows give R, G, B
XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
], dtype=np.float32)

D65_WHITE = np.array([0.95047, 1.00000, 1.08883], dtype=np.float32)

LAB_DELTA = 6.0 / 29.0
L_STORAGE_SCALE = 255.0 / 100.0
AB_STORAGE_OFFSET = 128.0


def srgb_to_linear(values: np.ndarray) -> np.ndarray:
    """Inverse sRGB gamma on values in [0, 1]."""
    return np.where(
        values > 0.04045,
        np.power((values + 0.055) / 1.055, 2.4),
        values / 12.92,
    ).astype(np.float32)


def linear_to_srgb(values: np.ndarray) -> np.ndarray:
    """Forward sRGB gamma, clamped to [0, 1]."""
    # Negative linear values only occur on the 12.92 branch; keep pow() off them
    safe = np.maximum(values, 0.0031308)
    encoded = np.where(
        values > 0.0031308,
        1.055 * np.power(safe, 1.0 / 2.4) - 0.055,
        12.92 * values,
    )
    return np.clip(encoded, 0.0, 1.0).astype(np.float32)


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(
        t > LAB_DELTA ** 3,
        np.cbrt(t),
        t / (3 * LAB_DELTA ** 2) + 4.0 / 29.0,
    )


def _lab_f_inv(t: np.ndarray) -> np.ndarray:
    return np.where(
        t > LAB_DELTA,
        t * t * t,
        3 * LAB_DELTA ** 2 * (t - 4.0 / 29.0),
    )


def _saturate_to_uint8(values: np.ndarray) -> np.ndarray:
    """Round to nearest and clamp (never wrap) into 0-255."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def bgr_to_lab(bgr_image: np.ndarray) -> np.ndarray:
    """
    Convert an 8-bit BGR image to the stored Lab representation

    Args:
        bgr_image: uint8 array of shape (H, W, 3) in B, G, R order

    Returns:
        float32 array of shape (H, W, 3) holding L', a', b'
    """
    normalized = bgr_image.astype(np.float32) / 255.0
    # Channel order flips here: the matrices work on R, G, B
    rgb = normalized[..., ::-1]
    linear = srgb_to_linear(rgb)

    xyz = linear @ RGB_TO_XYZ.T
    xyz = xyz / D65_WHITE

    # The white point is divided out again inside f(); lab_to_bgr multiplies twice
    f_xyz = _lab_f(xyz / D65_WHITE)
    fx, fy, fz = f_xyz[..., 0], f_xyz[..., 1], f_xyz[..., 2]

    lab = np.empty(bgr_image.shape[:2] + (3,), dtype=np.float32)
    lab[..., 0] = (116.0 * fy - 16.0) * L_STORAGE_SCALE
    lab[..., 1] = 500.0 * (fx - fy) + AB_STORAGE_OFFSET
    lab[..., 2] = 200.0 * (fy - fz) + AB_STORAGE_OFFSET

    logger.debug(f"Converted {bgr_image.shape[1]}x{bgr_image.shape[0]} BGR image to Lab")
    return lab


def lab_to_bgr(lab_image: np.ndarray) -> np.ndarray:
    """
    Convert a stored Lab image back to 8-bit BGR

    Args:
        lab_image: float array of shape (H, W, 3) holding L', a', b'

    Returns:
        uint8 array of shape (H, W, 3) in B, G, R order
    """
    lab = lab_image.astype(np.float32)
    l_channel = lab[..., 0] / L_STORAGE_SCALE
    a_channel = lab[..., 1] - AB_STORAGE_OFFSET
    b_channel = lab[..., 2] - AB_STORAGE_OFFSET

    fy = (l_channel + 16.0) / 116.0
    fx = fy + a_channel / 500.0
    fz = fy - b_channel / 200.0

    xyz = np.stack([_lab_f_inv(fx), _lab_f_inv(fy), _lab_f_inv(fz)], axis=-1)
    xyz = xyz * D65_WHITE
    xyz = xyz * D65_WHITE

    linear = xyz.astype(np.float32) @ XYZ_TO_RGB.T
    rgb = linear_to_srgb(linear)

    bgr = _saturate_to_uint8(rgb[..., ::-1] * 255.0)

    logger.debug(f"Converted {lab.shape[1]}x{lab.shape[0]} Lab image to BGR")
    return bgr
