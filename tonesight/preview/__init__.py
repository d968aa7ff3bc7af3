"""
ToneSight preview helpers

Builds comparison mosaics of correction results for export.
"""

from .mosaic import create_comparison_mosaic

__all__ = [
    'create_comparison_mosaic',
]
