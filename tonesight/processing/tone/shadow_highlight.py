"""
Shadows/Highlights correction engine for ToneSight

Relights shadows and recovers highlights on the Lab lightness channel only,
so the a/b chromaticity of every pixel is carried through untouched and the
colour balance of the image is preserved.
"""

import numpy as np
import logging
from typing import Dict, Any, Optional

from ...exceptions import InvalidImageError
from ..color import bgr_to_lab, lab_to_bgr, split_lab, merge_lab
from .masks import create_shadow_mask, create_highlight_mask
from .models import ToneCorrectionParameters, CorrectionConstants
from .presets import get_preset

logger = logging.getLogger(__name__)


class ToneCorrectionEngine:
    """
    Shadows/Highlights filter similar to the tool found in photo editors

    Pipeline:
    - BGR -> Lab, isolate L
    - Feathered shadow and highlight masks from normalised L
    - Masked lightness correction with contrast-preserving limits
    - Merge and convert back to BGR

    The engine keeps only its parameters between calls. ``apply`` works on
    a snapshot of them; mutators swap in a new immutable value.
    """

    def __init__(self,
                 shadow_amount: float = 0.3,
                 highlight_amount: float = 0.3,
                 tonal_width: float = 0.5,
                 blur_radius: float = 15.0,
                 constants: Optional[CorrectionConstants] = None):
        """
        Initialize the engine

        Args:
            shadow_amount: Shadow lightening strength (0-1)
            highlight_amount: Highlight darkening strength (0-1)
            tonal_width: Tonal width of the masks (0-1)
            blur_radius: Mask blur radius in pixels (0-50)
            constants: Correction and mask shape constants
        """
        self.params = ToneCorrectionParameters(
            shadow_amount=shadow_amount,
            highlight_amount=highlight_amount,
            tonal_width=tonal_width,
            blur_radius=blur_radius,
        )
        self.constants = constants or CorrectionConstants()

    @classmethod
    def from_parameters(cls, params: ToneCorrectionParameters,
                        constants: Optional[CorrectionConstants] = None) -> 'ToneCorrectionEngine':
        return cls(params.shadow_amount, params.highlight_amount,
                   params.tonal_width, params.blur_radius, constants)

    @classmethod
    def from_preset(cls, name: str,
                    constants: Optional[CorrectionConstants] = None) -> 'ToneCorrectionEngine':
        """Create an engine from a named preset (see ``presets.PRESETS``)."""
        return cls.from_parameters(get_preset(name), constants)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ToneCorrectionEngine':
        """
        Create an engine from the ``tone`` section of a configuration dict

        Missing keys fall back to the engine defaults.

        Raises:
            ValueError: If the section holds a non-numeric value or an unknown constant
        """
        tone_cfg = config.get('tone', {}) or {}
        if not isinstance(tone_cfg, dict):
            raise ValueError(f"Config section 'tone' must be a mapping, got {tone_cfg!r}")
        params = ToneCorrectionParameters.from_dict(tone_cfg)
        constants = CorrectionConstants.from_dict(tone_cfg.get('constants'))
        return cls.from_parameters(params, constants)

    # Parameter mutators -------------------------------------------------

    def set_shadow_amount(self, amount: float):
        """Set shadow lightening strength, clamped to 0-1."""
        self.params = self.params.with_shadow_amount(amount)
        logger.info(f"Shadow amount set to {self.params.shadow_amount:.2f}")

    def set_highlight_amount(self, amount: float):
        """Set highlight darkening strength, clamped to 0-1."""
        self.params = self.params.with_highlight_amount(amount)
        logger.info(f"Highlight amount set to {self.params.highlight_amount:.2f}")

    def set_tonal_width(self, width: float):
        """Set tonal width, clamped to 0-1."""
        self.params = self.params.with_tonal_width(width)
        logger.info(f"Tonal width set to {self.params.tonal_width:.2f}")

    def set_blur_radius(self, radius: float):
        """Set mask blur radius, clamped to 0-50 px."""
        self.params = self.params.with_blur_radius(radius)
        logger.info(f"Blur radius set to {self.params.blur_radius:.1f}px")

    @property
    def shadow_amount(self) -> float:
        return self.params.shadow_amount

    @property
    def highlight_amount(self) -> float:
        return self.params.highlight_amount

    @property
    def tonal_width(self) -> float:
        return self.params.tonal_width

    @property
    def blur_radius(self) -> float:
        return self.params.blur_radius

    def get_settings(self) -> Dict[str, float]:
        """Current parameter values"""
        return self.params.to_dict()

    def describe_settings(self) -> str:
        """Human-readable summary of the current parameters"""
        p = self.params
        return (
            "Current Shadow/Highlights parameters:\n"
            f"Shadow Amount: {p.shadow_amount * 100:.0f}%\n"
            f"Highlight Amount: {p.highlight_amount * 100:.0f}%\n"
            f"Tonal Width: {p.tonal_width:.2f}\n"
            f"Blur Radius: {p.blur_radius:.1f} px"
        )

    # Processing ---------------------------------------------------------

    def apply(self, image: np.ndarray) -> np.ndarray:
        """
        Apply shadow/highlight correction

        Args:
            image: uint8 BGR image of shape (H, W, 3)

        Returns:
            Corrected uint8 BGR image of the same shape

        Raises:
            InvalidImageError: If the image is empty, not 3-channel or not 8-bit
        """
        if image is None or image.size == 0:
            raise InvalidImageError("Input image is empty")
        if image.ndim != 3 or image.shape[2] != 3:
            raise InvalidImageError(f"Expected a BGR image with shape (H, W, 3), got {image.shape}")
        if image.dtype != np.uint8:
            raise InvalidImageError(f"Expected an 8-bit image, got {image.dtype}")

        params = self.params
        constants = self.constants

        logger.debug(f"Applying shadow/highlight correction to {image.shape[1]}x{image.shape[0]} "
                     f"image: {params.to_dict()}")

        lab_image = bgr_to_lab(image)
        lab_channels = split_lab(lab_image)

        luminance = self._normalize_luminance(lab_channels[0])

        shadow_mask = create_shadow_mask(luminance, params.tonal_width,
                                         params.blur_radius, constants)
        highlight_mask = create_highlight_mask(luminance, params.tonal_width,
                                               params.blur_radius, constants)

        corrected = self._apply_correction(luminance, shadow_mask, highlight_mask, params)

        lab_channels[0] = self._denormalize_luminance(corrected)
        return lab_to_bgr(merge_lab(lab_channels))

    def _normalize_luminance(self, luminance: np.ndarray) -> np.ndarray:
        """Scale stored L (0-255) to 0-1"""
        return (luminance / 255.0).astype(np.float32)

    def _denormalize_luminance(self, luminance: np.ndarray) -> np.ndarray:
        """Scale 0-1 lightness back to stored L (0-255)"""
        return (luminance * 255.0).astype(np.float32)

    def _apply_correction(self, luminance: np.ndarray, shadow_mask: np.ndarray,
                          highlight_mask: np.ndarray,
                          params: ToneCorrectionParameters) -> np.ndarray:
        """Masked lightness correction, limited so local contrast never flattens"""
        damping = self.constants.damping
        margin = self.constants.contrast_margin

        shadow_correction = params.shadow_amount * shadow_mask * (1.0 - luminance) * damping
        highlight_correction = params.highlight_amount * highlight_mask * luminance * damping

        corrected = luminance + shadow_correction - highlight_correction

        min_val = luminance * margin
        max_val = 1.0 - (1.0 - luminance) * margin

        return np.maximum(min_val, np.minimum(max_val, corrected)).astype(np.float32)
