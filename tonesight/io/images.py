"""
Image file operations for ToneSight
Loads and saves 8-bit BGR images through OpenCV and finds images to process
"""

import cv2
import numpy as np
from pathlib import Path
from typing import List, Sequence, Union
import logging

from ..exceptions import ImageIOError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.tif', '.tiff', '.bmp']


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image as 8-bit BGR

    Args:
        path: Image file path

    Returns:
        uint8 array of shape (H, W, 3)

    Raises:
        ImageIOError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    if not path.exists():
        raise ImageIOError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        raise ImageIOError(f"Failed to load image: {path}")

    logger.debug(f"Loaded {path} ({image.shape[1]}x{image.shape[0]})")
    return image


def save_image(image: np.ndarray, path: Union[str, Path], quality: int = 95) -> Path:
    """
    Save a BGR image, creating the parent directory if needed

    Args:
        image: uint8 BGR image
        path: Destination; the format follows the file extension
        quality: JPEG quality (ignored for other formats)

    Returns:
        The written path

    Raises:
        ImageIOError: If the directory cannot be created or OpenCV cannot write the file
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageIOError(f"Cannot create output directory for {path}: {e}") from e

    suffix = path.suffix.lower()
    if suffix in ['.jpg', '.jpeg']:
        params = [cv2.IMWRITE_JPEG_QUALITY, int(quality)]
    elif suffix == '.png':
        params = [cv2.IMWRITE_PNG_COMPRESSION, 9]
    else:
        params = []

    try:
        ok = cv2.imwrite(str(path), image, params)
    except cv2.error as e:
        raise ImageIOError(f"Failed to write image {path}: {e}") from e

    if not ok:
        raise ImageIOError(f"Failed to write image: {path}")

    logger.debug(f"Saved {path}")
    return path


def find_images(input_path: Union[str, Path],
                extensions: Sequence[str] = DEFAULT_EXTENSIONS,
                recursive: bool = False) -> List[Path]:
    """
    Find image files under a directory (or accept a single file)

    Args:
        input_path: Directory to search or a single image file
        extensions: Recognised file extensions (case-insensitive)
        recursive: Search subdirectories

    Returns:
        Sorted list of image paths
    """
    input_path = Path(input_path)
    wanted = {ext.lower() for ext in extensions}

    if not input_path.exists():
        raise ImageIOError(f"Input path does not exist: {input_path}")

    if input_path.is_file():
        return [input_path] if input_path.suffix.lower() in wanted else []

    candidates = input_path.rglob('*') if recursive else input_path.glob('*')
    images = sorted(p for p in candidates if p.is_file() and p.suffix.lower() in wanted)

    logger.info(f"Found {len(images)} images in {input_path}")
    return images
