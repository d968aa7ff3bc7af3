"""
Image file I/O for ToneSight.
"""

from .images import load_image, save_image, find_images

__all__ = [
    'load_image',
    'save_image',
    'find_images',
]
