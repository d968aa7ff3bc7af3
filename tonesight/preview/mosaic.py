"""
Side-by-side comparison mosaics of correction results.
"""

import cv2
import numpy as np
from typing import List, Sequence, Tuple

from ..exceptions import InvalidImageError

LABEL_ORIGIN = (10, 30)
LABEL_COLOR = (255, 255, 255)


def _label_tile(image: np.ndarray, label: str, tile_size: Tuple[int, int]) -> np.ndarray:
    tile = cv2.resize(image, tile_size, interpolation=cv2.INTER_AREA)
    if label:
        cv2.putText(tile, label, LABEL_ORIGIN, cv2.FONT_HERSHEY_SIMPLEX, 1, LABEL_COLOR, 2)
    return tile


def create_comparison_mosaic(labelled_images: Sequence[Tuple[str, np.ndarray]],
                             tile_size: Tuple[int, int] = (600, 400),
                             columns: int = 2) -> np.ndarray:
    """
    Tile labelled BGR images into a single comparison image.

    Each image is resized to ``tile_size`` (width, height) and captioned in
    its top-left corner. Incomplete rows are padded with black tiles.

    Args:
        labelled_images: (label, image) pairs in display order
        tile_size: (width, height) of each tile
        columns: Tiles per row

    Returns:
        uint8 BGR mosaic
    """
    if not labelled_images:
        raise InvalidImageError("No images to compose")
    if columns < 1:
        raise ValueError("columns must be at least 1")

    width, height = tile_size
    tiles: List[np.ndarray] = [_label_tile(img, label, tile_size) for label, img in labelled_images]

    blank = np.zeros((height, width, 3), dtype=np.uint8)
    while len(tiles) % columns:
        tiles.append(blank)

    rows = [np.hstack(tiles[i:i + columns]) for i in range(0, len(tiles), columns)]
    return np.vstack(rows)
