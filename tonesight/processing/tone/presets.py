"""
Named Shadows/Highlights parameter presets.
"""

from typing import Dict, List

from .models import ToneCorrectionParameters


PRESETS: Dict[str, ToneCorrectionParameters] = {
    # Shadow lightening only
    'shadows_50': ToneCorrectionParameters(shadow_amount=0.5, highlight_amount=0.0),
    # Highlight darkening only
    'highlights_40': ToneCorrectionParameters(shadow_amount=0.0, highlight_amount=0.4),
    'balanced_30_20': ToneCorrectionParameters(shadow_amount=0.3, highlight_amount=0.2),
    'strong_70_50': ToneCorrectionParameters(shadow_amount=0.7, highlight_amount=0.5),
    # Gentle all-round setting with tighter, sharper masks
    'optimal': ToneCorrectionParameters(shadow_amount=0.2, highlight_amount=0.2,
                                        tonal_width=0.4, blur_radius=10.0),
}

PRESET_LABELS: Dict[str, str] = {
    'shadows_50': 'Shadows 50%',
    'highlights_40': 'Highlights 40%',
    'balanced_30_20': 'Both 30%/20%',
    'strong_70_50': 'Both 70%/50%',
    'optimal': 'Optimal',
}


def list_presets() -> List[str]:
    """Preset names in definition order."""
    return list(PRESETS)


def get_preset(name: str) -> ToneCorrectionParameters:
    """
    Look up a preset by name.

    Raises:
        ValueError: If no preset has that name
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{name}'. Available: {', '.join(list_presets())}"
        ) from None
