"""
Exception types for ToneSight
"""


class ToneSightError(Exception):
    """Base exception for ToneSight operations."""
    pass


class InvalidImageError(ToneSightError, ValueError):
    """Raised when an image or plane list does not satisfy a processing precondition."""
    pass


class ImageIOError(ToneSightError):
    """Raised when an image file cannot be read or written."""
    pass
