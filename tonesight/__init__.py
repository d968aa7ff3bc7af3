"""
ToneSight: Shadows/Highlights tone correction for still images

Relights shadows and recovers highlights on the Lab lightness channel with
feathered tonal masks, preserving the colour balance of the image.
"""

__version__ = "0.1.0"

# Core imports for easy access
from .config import load_config
from .exceptions import ToneSightError, InvalidImageError, ImageIOError
from .processing.tone import ToneCorrectionEngine, ToneCorrectionParameters, CorrectionConstants

__all__ = [
    "load_config",
    "ToneSightError",
    "InvalidImageError",
    "ImageIOError",
    "ToneCorrectionEngine",
    "ToneCorrectionParameters",
    "CorrectionConstants",
]
