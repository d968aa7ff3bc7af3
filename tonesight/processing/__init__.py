"""
Image processing modules for ToneSight

Includes Lab colour handling and the Shadows/Highlights tone pipeline.
"""

from .tone import ToneCorrectionEngine, ToneCorrectionParameters, CorrectionConstants

__all__ = [
    "ToneCorrectionEngine",
    "ToneCorrectionParameters",
    "CorrectionConstants",
]
