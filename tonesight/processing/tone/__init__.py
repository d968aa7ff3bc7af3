"""
Tone processing modules for ToneSight

Includes the Shadows/Highlights engine, tonal masks, mask blur and presets.
"""

from .models import ToneCorrectionParameters, CorrectionConstants
from .blur import gaussian_blur, fast_gaussian_blur, gaussian_kernel
from .masks import create_shadow_mask, create_highlight_mask
from .presets import PRESETS, get_preset, list_presets
from .shadow_highlight import ToneCorrectionEngine

__all__ = [
    "ToneCorrectionEngine",
    "ToneCorrectionParameters",
    "CorrectionConstants",
    "gaussian_blur",
    "fast_gaussian_blur",
    "gaussian_kernel",
    "create_shadow_mask",
    "create_highlight_mask",
    "PRESETS",
    "get_preset",
    "list_presets",
]
