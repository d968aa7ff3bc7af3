"""
Before/after pixel analysis for tone correction results.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Tuple, Sequence, Dict, Any

# Default probe locations as (x, y)
DEFAULT_SAMPLE_POINTS: List[Tuple[int, int]] = [(100, 100), (50, 200), (400, 250)]


@dataclass
class PixelComparison:
    """A single probed pixel before and after correction"""
    x: int
    y: int
    original: Tuple[int, int, int]  # B, G, R
    result: Tuple[int, int, int]    # B, G, R
    original_brightness: float
    result_brightness: float

    @property
    def brightness_change(self) -> float:
        return self.result_brightness - self.original_brightness

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'original': list(self.original),
            'result': list(self.result),
            'original_brightness': self.original_brightness,
            'result_brightness': self.result_brightness,
            'brightness_change': self.brightness_change,
        }


@dataclass
class ImageSummary:
    """Basic facts about an image buffer"""
    width: int
    height: int
    channels: int
    dtype: str
    size_bytes: int
    row_stride: int
    sample_pixels: List[Tuple[int, int, Tuple[int, ...]]] = field(default_factory=list)


def calculate_brightness(pixel: Sequence[float]) -> float:
    """Perceived brightness of a BGR pixel (Rec. 601 luma weights)"""
    b, g, r = pixel[0], pixel[1], pixel[2]
    return float(0.299 * r + 0.587 * g + 0.114 * b)


def analyze_pixels(original: np.ndarray, result: np.ndarray,
                   points: Sequence[Tuple[int, int]] = DEFAULT_SAMPLE_POINTS) -> List[PixelComparison]:
    """
    Compare probe pixels between an original and a corrected image

    Args:
        original: BGR image before correction
        result: BGR image after correction (same size)
        points: (x, y) probe locations; points outside the image are skipped

    Returns:
        One PixelComparison per in-bounds point
    """
    height, width = original.shape[:2]
    comparisons = []

    for x, y in points:
        if not (0 <= x < width and 0 <= y < height):
            continue

        orig_pixel = tuple(int(v) for v in original[y, x])
        result_pixel = tuple(int(v) for v in result[y, x])

        comparisons.append(PixelComparison(
            x=int(x),
            y=int(y),
            original=orig_pixel,
            result=result_pixel,
            original_brightness=calculate_brightness(orig_pixel),
            result_brightness=calculate_brightness(result_pixel),
        ))

    return comparisons


def describe_image(image: np.ndarray, sample_grid: int = 3) -> ImageSummary:
    """Summarise size, layout and a few top-left pixels of an image"""
    height, width = image.shape[:2]
    channels = image.shape[2] if image.ndim == 3 else 1

    samples = []
    if channels == 3:
        for y in range(min(sample_grid, height)):
            for x in range(min(sample_grid, width)):
                samples.append((x, y, tuple(int(v) for v in image[y, x])))

    return ImageSummary(
        width=width,
        height=height,
        channels=channels,
        dtype=str(image.dtype),
        size_bytes=int(image.nbytes),
        row_stride=int(image.strides[0]) if image.ndim >= 2 else int(image.nbytes),
        sample_pixels=samples,
    )
