"""
Lab channel splitting and merging.

L carries brightness, a the green-red axis and b the blue-yellow axis.
"""

import numpy as np
from typing import List, Sequence

from ...exceptions import InvalidImageError


def split_lab(lab_image: np.ndarray) -> List[np.ndarray]:
    """
    Split a Lab image into separate L, a and b planes.

    Args:
        lab_image: Array of shape (H, W, 3)

    Returns:
        List of three float32 planes of shape (H, W)

    Raises:
        InvalidImageError: If the image does not have exactly 3 channels
    """
    if lab_image.ndim != 3 or lab_image.shape[2] != 3:
        raise InvalidImageError("Lab image must have 3 channels")

    return [np.ascontiguousarray(lab_image[:, :, i], dtype=np.float32) for i in range(3)]


def merge_lab(channels: Sequence[np.ndarray]) -> np.ndarray:
    """
    Combine L, a and b planes into a single Lab image.

    The planes are assumed to share the same (H, W); numpy raises if they
    do not, so mismatched input never truncates silently.

    Args:
        channels: Sequence of three planes of shape (H, W)

    Returns:
        float32 array of shape (H, W, 3)

    Raises:
        InvalidImageError: If the sequence does not hold exactly 3 planes
    """
    if len(channels) != 3:
        raise InvalidImageError("Lab needs 3 channels")

    return np.stack([np.asarray(c, dtype=np.float32) for c in channels], axis=-1)
