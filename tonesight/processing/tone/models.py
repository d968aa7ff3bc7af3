"""
Data models for shadow/highlight tone correction.
"""

from dataclasses import dataclass, asdict, fields, replace
from typing import Dict, Any, Optional


# Valid parameter ranges
AMOUNT_RANGE = (0.0, 1.0)
TONAL_WIDTH_RANGE = (0.0, 1.0)
BLUR_RADIUS_RANGE = (0.0, 50.0)


def _clamp(value: float, bounds) -> float:
    low, high = bounds
    return float(max(low, min(high, value)))


def _coerce_floats(data: Dict[str, Any], what: str) -> Dict[str, float]:
    """Convert configuration values to float, naming the offending key on failure."""
    values = {}
    for key, value in data.items():
        try:
            values[key] = float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid {what} '{key}': expected a number, got {value!r}") from e
    return values


@dataclass(frozen=True)
class ToneCorrectionParameters:
    """
    User-facing controls of the Shadows/Highlights filter.

    Every field is clamped into its valid range on construction, so an
    instance is always valid. Use the ``with_*`` methods to derive a changed
    copy; instances themselves never change.
    """
    shadow_amount: float = 0.3     # 0-1, shadow lightening strength
    highlight_amount: float = 0.3  # 0-1, highlight darkening strength
    tonal_width: float = 0.5       # 0-1, how far the masks reach into midtones
    blur_radius: float = 15.0      # 0-50 px, mask feathering

    def __post_init__(self):
        object.__setattr__(self, 'shadow_amount', _clamp(self.shadow_amount, AMOUNT_RANGE))
        object.__setattr__(self, 'highlight_amount', _clamp(self.highlight_amount, AMOUNT_RANGE))
        object.__setattr__(self, 'tonal_width', _clamp(self.tonal_width, TONAL_WIDTH_RANGE))
        object.__setattr__(self, 'blur_radius', _clamp(self.blur_radius, BLUR_RADIUS_RANGE))

    def with_shadow_amount(self, amount: float) -> 'ToneCorrectionParameters':
        return replace(self, shadow_amount=amount)

    def with_highlight_amount(self, amount: float) -> 'ToneCorrectionParameters':
        return replace(self, highlight_amount=amount)

    def with_tonal_width(self, width: float) -> 'ToneCorrectionParameters':
        return replace(self, tonal_width=width)

    def with_blur_radius(self, radius: float) -> 'ToneCorrectionParameters':
        return replace(self, blur_radius=radius)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for logging or YAML output."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToneCorrectionParameters':
        """
        Create from a dictionary, ignoring keys that are not parameters.

        Raises:
            ValueError: If a parameter value is not a number
        """
        names = {f.name for f in fields(cls)}
        return cls(**_coerce_floats({k: v for k, v in data.items() if k in names}, "tone parameter"))


@dataclass(frozen=True)
class CorrectionConstants:
    """
    Fixed numeric design of the correction and mask shapes.

    The defaults are the single set used throughout ToneSight. They can be
    overridden from configuration for experimentation.
    """
    # Correction
    damping: float = 0.3               # share of the full correction actually applied
    contrast_margin: float = 0.5       # corrected L stays within [lum*m, 1-(1-lum)*m]

    # Shadow mask
    shadow_width_scale: float = 0.4    # threshold = scale * tonal_width
    shadow_core_fraction: float = 0.6  # full mask below threshold * fraction
    shadow_falloff_floor: float = 0.5  # mask value reached at the threshold
    shadow_blur_scale: float = 1.5     # mask blur = blur_radius * scale

    # Highlight mask
    highlight_width_scale: float = 0.5     # threshold = 1 - scale * tonal_width
    highlight_ramp_fraction: float = 0.9   # ramp starts at threshold * fraction
    highlight_blur_cap: float = 20.0       # mask blur = min(blur_radius, cap)

    # Masks are left unblurred at or below this radius
    blur_epsilon: float = 0.1

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CorrectionConstants':
        """
        Create from a configuration mapping.

        Raises:
            ValueError: If the mapping names an unknown constant or a value is not a number
        """
        if not data:
            return cls()

        names = {f.name for f in fields(cls)}
        unknown = set(data) - names
        if unknown:
            raise ValueError(f"Unknown correction constants: {', '.join(sorted(unknown))}")

        return cls(**_coerce_floats(data, "correction constant"))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
